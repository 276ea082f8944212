"""
CID financial investigations dashboard.

Ingests spreadsheet exports of bank transactions, normalizes them into
canonical records and serves summary metrics to a presentation layer.
"""

__version__ = "1.0.0"
