"""
Weekly meal planning.

Responsibilities:
- Optimise a 7-day x 3-meal recipe assignment with a genetic algorithm.
- Summarise the winning plan (nutrition totals, daily averages, variety).
- Derive a categorised shopping list from a plan.
"""
