"""
nimbus_automata module: render/colors.py

Central color palette.
"""

BG = (10, 10, 10)
PANEL = (18, 18, 22)
GRID_LINE = (26, 26, 26)
TEXT = (235, 235, 235)
TEXT_DIM = (150, 150, 160)

# subtle per-biome background tint
HABITAT_BG = {
    "temperate": (12, 18, 12),
    "oasis": (12, 18, 25),
    "desert": (20, 15, 8),
    "radioactive": (20, 22, 8),
    "volcanic": (25, 10, 8),
    "frozen": (18, 22, 28),
}

EVENT_KIND = {
    "boom": (120, 220, 120),
    "extinction": (230, 90, 90),
    "birth": (110, 210, 160),
    "mutation": (180, 140, 240),
    "info": (150, 150, 160),
    "catastrophe": (250, 170, 60),
}
