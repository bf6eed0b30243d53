"""
Recipe corpus package.

Responsibilities:
- Define the read-only Recipe / UserPreferences records the engine consumes.
- Map a Recipe to its normalised numeric feature vector.
- Load a corpus from a CSV table and ship a small sample corpus.
"""
