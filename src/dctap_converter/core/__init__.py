"""
Core services: workspace store, export cache, lock policy and validation.
"""
