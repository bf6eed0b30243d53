"""
Recommendation layer.

Responsibilities:
- Collaborative filtering over users' stated preferences and rating history.
- A rule engine that hard-excludes recipes and scores the survivors.
- The trained-model cache consulted by cluster-based recommendations.
"""
