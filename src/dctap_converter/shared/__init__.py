"""
Shared models and utilities used across formats and the store.
"""
