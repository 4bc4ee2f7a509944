"""
Simulation tuning knobs.
"""

# World defaults
GRID_W, GRID_H = 200, 120
INITIAL_DENSITY = 0.25
TICK_RATE = 15.0  # generations per second
MAX_TICK_RATE = 60.0

# Dominance tracking + catastrophes
DOMINANCE_THRESHOLD = 60        # Manhattan RGB distance for "same dominant color"
CATASTROPHE_SIMILARITY = 80     # looser match used when applying a catastrophe
DOMINANCE_STREAK_MIN = 150
CATASTROPHE_MIN_POPULATION = 500
CATASTROPHE_BASE_CHANCE = 0.005
CATASTROPHE_CHANCE_STEP = 0.01  # added per 100 ticks of streak
CATASTROPHE_MAX_CHANCE = 0.10

# Stats
COLOR_BUCKET = 64
EMPTY_DOMINANT_COLOR = (0, 255, 128)

# Clustered seeding
CLUSTER_COUNT_RANGE = (12, 19)
CLUSTER_RADIUS_RANGE = (8, 13)
CLUSTER_COLOR_JITTER = 20
CLUSTER_AFFINITY = 0.85

# Habitat layout
OASIS_RADIUS_FRACTION = 0.22

# Presentation
CELL_SIZE = 5
HUD_WIDTH = 300
FPS = 60
EVENT_LOG_SIZE = 50
SNAPSHOT_DIR = "snapshots"
