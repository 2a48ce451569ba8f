"""Order domain: the template catalog and the order document synthesizer.

Everything in this package is pure: no database, broker or HTTP access,
so the order page can recompute a document on every keystroke.
"""
