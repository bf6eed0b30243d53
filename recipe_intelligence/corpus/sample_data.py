"""
Fixed ten-recipe corpus and a handful of user profiles.

Used by the demo entry point and as a deterministic fixture in tests.
"""
from __future__ import annotations

from .models import RatingMatrix, Recipe, UserPreferences, UserProfile

SAMPLE_RECIPES: list[Recipe] = [
    Recipe(
        id=1, title="Quinoa Power Bowl", calories=420, protein=18, carbs=65, fat=12,
        cooking_time=25, estimated_cost=7, cuisine="healthy", difficulty=1,
        ingredients=["quinoa", "chickpeas", "spinach", "cucumber", "olive oil"],
        tags=["vegetarian", "vegan", "gluten-free"],
        ratings=[4.5, 4.8, 4.2, 4.6],
    ),
    Recipe(
        id=2, title="Grilled Chicken Salad", calories=350, protein=35, carbs=12, fat=15,
        cooking_time=20, estimated_cost=8, cuisine="american", difficulty=1,
        ingredients=["chicken breast", "lettuce", "tomatoes", "olive oil"],
        tags=["high-protein", "low-carb", "gluten-free"],
        ratings=[4.5, 4.7, 4.4],
    ),
    Recipe(
        id=3, title="Salmon with Roasted Vegetables", calories=480, protein=38, carbs=20, fat=24,
        cooking_time=35, estimated_cost=18, cuisine="seafood", difficulty=2,
        ingredients=["salmon", "broccoli", "carrots", "lemon", "olive oil"],
        tags=["high-protein", "gluten-free", "omega-3"],
        ratings=[4.7, 4.9, 4.5, 4.8],
    ),
    Recipe(
        id=4, title="Pasta Primavera", calories=450, protein=15, carbs=70, fat=14,
        cooking_time=30, estimated_cost=6, cuisine="italian", difficulty=2,
        ingredients=["pasta", "zucchini", "pepper", "parmesan cheese", "olive oil"],
        tags=["vegetarian"],
        ratings=[4.3, 4.1, 4.4, 4.2],
    ),
    Recipe(
        id=5, title="Chicken Stir Fry", calories=320, protein=28, carbs=25, fat=12,
        cooking_time=15, estimated_cost=9, cuisine="asian", difficulty=1,
        ingredients=["chicken", "broccoli", "pepper", "soy sauce", "rice"],
        tags=["high-protein", "quick"],
        ratings=[4.6, 4.4, 4.7, 4.5],
    ),
    Recipe(
        id=6, title="Greek Salad", calories=280, protein=12, carbs=15, fat=22,
        cooking_time=10, estimated_cost=5, cuisine="mediterranean", difficulty=1,
        ingredients=["lettuce", "feta cheese", "olives", "tomatoes", "cucumber"],
        tags=["vegetarian", "gluten-free", "quick"],
        ratings=[4.2, 4.0, 4.3, 4.1],
    ),
    Recipe(
        id=7, title="Veggie Burger", calories=350, protein=20, carbs=45, fat=10,
        cooking_time=20, estimated_cost=6, cuisine="american", difficulty=2,
        ingredients=["black beans", "bread", "lettuce", "tomatoes", "onion"],
        tags=["vegetarian", "vegan"],
        ratings=[3.9, 4.1, 3.8, 4.0],
    ),
    Recipe(
        id=8, title="Greek Yogurt Parfait", calories=280, protein=22, carbs=35, fat=6,
        cooking_time=5, estimated_cost=4, cuisine="greek", difficulty=1,
        ingredients=["greek yogurt", "granola", "berries", "honey"],
        tags=["vegetarian", "breakfast", "quick", "high-protein"],
        ratings=[4.6, 4.5, 4.7, 4.4],
    ),
    Recipe(
        id=9, title="Lentil Soup", calories=300, protein=18, carbs=40, fat=5,
        cooking_time=35, estimated_cost=5, cuisine="mediterranean", difficulty=1,
        ingredients=["lentils", "carrots", "onion", "celery", "vegetable stock"],
        tags=["vegetarian", "vegan", "gluten-free"],
        ratings=[4.1, 4.3, 4.0],
    ),
    Recipe(
        id=10, title="Turkey and Avocado Wrap", calories=390, protein=26, carbs=30, fat=16,
        cooking_time=10, estimated_cost=7, cuisine="american", difficulty=1,
        ingredients=["turkey breast", "avocado", "tortilla", "lettuce", "tomatoes"],
        tags=["high-protein", "quick"],
        ratings=[4.3, 4.4, 4.2, 4.5],
    ),
]

SAMPLE_USERS: list[UserProfile] = [
    UserProfile(
        id=1,
        preferences=UserPreferences(
            max_calories=400, min_protein=20, max_cooking_time=30, preferred_cuisines=["healthy"],
        ),
        ratings={2: 4.5, 5: 4.0, 8: 5.0},
    ),
    UserProfile(
        id=2,
        preferences=UserPreferences(max_calories=500, min_protein=25, max_cooking_time=45),
        ratings={3: 5.0, 2: 4.0, 10: 4.5},
    ),
    UserProfile(
        id=3,
        preferences=UserPreferences(
            max_calories=350, min_protein=15, max_cooking_time=20, dietary_restrictions=["vegetarian"],
        ),
        ratings={6: 4.5, 7: 4.0, 8: 4.5, 9: 3.5},
    ),
    UserProfile(
        id=4,
        preferences=UserPreferences(max_calories=600, min_protein=30, max_cooking_time=60),
    ),
    UserProfile(
        id=5,
        preferences=UserPreferences(max_calories=300, min_protein=10, max_cooking_time=15),
        ratings={6: 4.0, 8: 4.5},
    ),
]

SAMPLE_RATINGS: RatingMatrix = {user.id: dict(user.ratings) for user in SAMPLE_USERS if user.ratings}
