"""
K-means clustering of the recipe corpus.

Responsibilities:
- Group recipes by their scaled nutrition / cooking-time feature vectors.
- Summarise each cluster (averages, mean rating, cuisines, tags).
- Score clusters against a user's stated preferences.
"""
