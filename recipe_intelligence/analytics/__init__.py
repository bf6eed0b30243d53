"""
Run analytics for the engine.

Responsibilities:
- Record one event per engine call (train, recommend, plan).
- Aggregate recorded events into timing and quality summaries.
"""
