"""
Strata - Utilities
"""
