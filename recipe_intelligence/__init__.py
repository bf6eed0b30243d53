"""
Recipe intelligence engine.

Responsibilities:
- Cluster a recipe corpus with k-means and summarise each cluster.
- Fit a nutrition -> satisfaction model with ordinary least squares.
- Produce cluster, collaborative and rule-based recommendation lists.
- Optimise a 7-day meal plan with a genetic algorithm.
- Predict nutrition needs and intake trends.

The algorithm modules never perform I/O (only ``corpus.data_store`` reads
files), and every stochastic step takes an explicit ``random.Random``.
"""
