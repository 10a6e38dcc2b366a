"""
Strata - Data Models
Tiles, layers, the walkability grid and the terrain container.
"""
