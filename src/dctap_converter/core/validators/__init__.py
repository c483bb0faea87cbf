"""
Validation of DCTap rows and shapes.
"""

from .row_validator import RowValidator, validate_row

__all__ = ["RowValidator", "validate_row"]
