"""Domain layer - results, error records, data models and protocols.

Nothing in this package performs I/O. All other layers depend on it.
"""
