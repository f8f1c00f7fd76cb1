"""
tourguide
---------
Location-based tour guide backend: nearby sights, narration, and
distance-budgeted tour generation.
"""

__version__ = "1.0.0"
