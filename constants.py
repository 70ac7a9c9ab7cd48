# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They cover the
rendering framework and the defaults used when `config.json` leaves an
effect parameter out.
"""

# Visualization settings
FPS = 60
DEFAULT_WINDOW_WIDTH = 800
DEFAULT_WINDOW_HEIGHT = 450
BACKGROUND_COLOR = (0, 0, 0)
CAPTION = "Particle Portrait"
# Sample portrait shipped next to config.json.
DEFAULT_IMAGE_PATH = "portrait.bmp"

# --- Warp Button ---
BUTTON_WIDTH = 120
BUTTON_HEIGHT = 30
BUTTON_MARGIN = 10
BUTTON_COLOR = (80, 80, 80)
BUTTON_HOVER_COLOR = (110, 110, 110)
BUTTON_TEXT_COLOR = (255, 255, 255)
BUTTON_FONT_SIZE = 20

# --- Effect Defaults ---
DEFAULT_GAP = 1
DEFAULT_IMAGE_SCALE = 1.0
DEFAULT_PARTICLE_SIZE = 1.0
# Fraction of the displacement from origin recovered each frame.
DEFAULT_EASE = 0.3
# Multiplier applied to velocity each frame.
DEFAULT_FRICTION = 0.9
# Scales the pointer-speed dependent repulsion radius (acts on squared distance).
DEFAULT_RADIUS = 3000.0
