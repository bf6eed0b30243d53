"""
Ordinary least squares regression via the normal equations.

Used to learn a nutrition -> satisfaction (mean rating) model over the corpus.
"""
