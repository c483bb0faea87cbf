"""
Format converters between workspaces and external representations.

Subpackages:
- csv: DCTap CSV/TSV tables
- marva: Marva (Sinopia-style) profile JSON and folder inference
- starting_point: LC starting-point menu JSON
"""
