"""
DCTap Profile Converter.

Tabular metadata-profile (DCTap) workspace store with bidirectional
converters for CSV/TSV, Marva profile JSON and LC Starting Point JSON.
"""

__version__ = "1.0.0"
