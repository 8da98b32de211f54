"""
Transaction lifecycle classification.

Decides what kind each transaction is, how it was paid, whether it brings
money in, and which pipeline stage it occupies; builds account ledgers from
the same records.
"""

__version__ = "0.1.0"
