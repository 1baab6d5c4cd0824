"""
Fusion 2048 - Nuclear Fusion Sliding-Tile Engine

A 2048-style puzzle core where tiles are nuclides. The engine provides:
- Grid and tile model
- Move resolution (slide, fuse, decay)
- Static element, decay and fusion tables
- Scoring and half-life-to-turn mapping
- A game manager that actuates state to storage and presentation collaborators
"""

__version__ = "0.8.0"
