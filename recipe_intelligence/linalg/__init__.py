"""
Dense linear algebra on plain Python lists.

Only what the normal-equations regression needs: transpose, products and a
Gauss-Jordan inverse with partial pivoting.
"""
