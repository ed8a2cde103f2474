"""Domain layer for BoardFlow.

Pure models, errors, and algorithms. Nothing in this package performs I/O.
"""
