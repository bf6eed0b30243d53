"""
Personal nutrition helpers.

Responsibilities:
- Estimate daily energy and macro needs from a body profile.
- Forecast a daily intake series with the regression engine.
- Score how consistent a daily intake series is.
- Analyse a logged intake history for patterns, advice and risks.
"""
