"""Multi-company cari consolidation and bank reconciliation engine."""

__version__ = "0.1.0"
