from enum import Enum, auto

# Map bounds.  The plane spans [-MAP_LIMIT, MAP_LIMIT] on both axes.
MAP_LIMIT = 70.0

# Logical seconds advanced by one tick
TICK_RATE = 0.1
# Hard cap on ticks processed for a single frame
MAX_TICKS_PER_FRAME = 10
# Speed multipliers offered by the front-end
SPEED_PRESETS = (1, 5, 20)

# Calendar
HOURS_PER_TICK = 0.1
YEARS_PER_TICK = 0.02
START_TIME_OF_DAY = 12.0
NIGHT_START = 19.0
NIGHT_END = 6.0

# Event log length
MAX_LOG_ENTRIES = 50

# Initial population
INITIAL_FOOD = 100
INITIAL_ROCKS = 40
INITIAL_IRON = 20
INITIAL_TREES = 60
INITIAL_ANIMALS = 20
ROCK_DURABILITY = 20
IRON_DURABILITY = 30

NAMES = [
    "Adán", "Eva", "Caín", "Abel", "Set", "Nora", "Ava", "Leo", "Zoe", "Max",
    "Iris", "Noa", "Lía", "Hugo", "Alma", "Río", "Sol", "Luna", "Kai", "Mía",
]

# Hunger
MAX_HUNGER = 100.0
HUNGER_DECAY_BASE = 0.15
COLD_DAMAGE_MULTIPLIER = 2.0
BONFIRE_BONUS = 0.05
HOUSE_SHELTER_RADIUS = 3.0
BONFIRE_RADIUS = 4.0
AGE_PER_TICK = 0.05

# Survival
HUNGER_SEEK = 40.0
HUNGER_SEEK_HOMELESS = 70.0
HUNGER_CRITICAL = 20.0
VISION_RADIUS = 60.0
HOME_FORAGE_RADIUS = 30.0
EAT_DISTANCE = 0.8
HUNT_DISTANCE = 1.0

# Food economy
WILD_CAPACITY = 1
FARM_CAPACITY = 5
FARM_XP = 4.0
FARM_CHANCE = 0.5
MAX_FOOD = 200
FOOD_SPAWN_RATE = 0.2

# Shelter and construction
HOUSE_SEARCH_RADIUS = 40.0
CLAIM_DISTANCE = 1.5
BUILD_HUNGER = 60.0
BUILD_CHANCE = 0.01
HOUSE_WOOD_COST = 10
HOUSE_HUNGER_COST = 30.0
MIN_BUILD_DISTANCE = 2.5
BONFIRE_WOOD_COST = 5
BONFIRE_XP = 8.0
BONFIRE_INVENT_CHANCE = 0.02
BONFIRE_SPACING = 10.0
UPGRADE_CHANCE = 0.1

# Reproduction
LOVE_HUNGER = 60.0
MATURITY_AGE = 18.0
LOVING_DISTANCE = 1.5
REPRODUCTION_CHANCE = 0.05
REPRODUCTION_MIN_HUNGER = 30.0
REPRODUCTION_HUNGER_COST = 20.0
REPRODUCTION_COOLDOWN = 40
NEWBORN_EXTRA_COOLDOWN = 20
REPRODUCTION_REQUIRES_HOUSE = False
BIRTH_SCATTER = 1.0
FLEE_RANGE = 6.0

# Work
WORK_HUNGER = 65.0
WORK_RADIUS = 40.0
WOOD_LOW = 20
ACTION_DISTANCE = 1.2
WORK_BASE_CHANCE = 0.1
WORK_XP_FACTOR = 0.01
CHOP_WOOD_YIELD = 5
CHOP_HUNGER_COST = 2.0
CHOP_XP = 0.5
MINE_HUNGER_COST = 1.0
MINE_XP = 0.2

# Rest and idling
HOME_REST_DISTANCE = 2.0
IDLE_TIME_MIN = 1.0
IDLE_TIME_MAX = 2.0
WANDER_RANGE = 8.0
ARRIVAL_DISTANCE = 0.3

# Movement
BASE_SPEED = 2.0
HUNT_BOOST = 1.5
MATE_BOOST = 1.3
HUNGER_BOOST = 1.5
PERSONAL_SPACE = 1.0
HOUSE_PERSONAL_SPACE = 1.2
SEPARATION_STRENGTH = 1.5
VELOCITY_SMOOTHING = 0.25

# Trees
TREE_GROWTH_RATE = 0.002
TREE_SEED_CHANCE = 0.001
TREE_SEED_RANGE = 5.0
MAX_TREES = 120

# Animals
ANIMAL_STEP = 0.5
ANIMAL_MOVE_CHANCE = 0.3
ANIMAL_BREED_RANGE = 3.0
ANIMAL_BREED_CHANCE = 0.01
ANIMAL_COOLDOWN = 100
ANIMAL_HEALTH = 100.0
MAX_ANIMALS = 40

# Terminal viewer
VIEWPORT_WIDTH = 80
# Height of the UI panel at the bottom of the screen
UI_PANEL_HEIGHT = 10
VIEWPORT_HEIGHT = 34 - UI_PANEL_HEIGHT
# Y coordinate where the status line is rendered
STATUS_PANEL_Y = VIEWPORT_HEIGHT
# Frames drawn per second by the terminal loop
FRAME_RATE = 30
# Screen cells per world unit horizontally; rows use half of it
ZOOM_LEVELS = (0.25, 0.5, 1.0, 2.0)
DEFAULT_ZOOM_INDEX = 1
CAMERA_STEP = 5.0
UI_COLOR_RGB = (255, 255, 0)


class FoodKind(Enum):
    WILD = auto()
    FARM = auto()


class ResourceKind(Enum):
    ROCK = auto()
    IRON = auto()


class TreeStage(Enum):
    """Growth stages; only adult trees can be chopped or seed."""

    SAPLING = auto()
    YOUNG = auto()
    ADULT = auto()


class AnimalKind(Enum):
    RABBIT = auto()
    CHICKEN = auto()


class Mode(Enum):
    """What currently drives an agent's movement.  Reporting only."""

    IDLE = auto()
    SEEKING_FOOD = auto()
    HUNTING = auto()
    SEEKING_MATE = auto()
    GOING_HOME = auto()
    BUILDING = auto()
    MINING = auto()
    LUMBERJACKING = auto()


class Color(Enum):
    """Logical color identifiers used for rendering."""

    GRASS = auto()
    TREE = auto()
    ROCK = auto()
    IRON = auto()
    FOOD = auto()
    FARM = auto()
    HOUSE = auto()
    FIRE = auto()
    ANIMAL = auto()
    UI = auto()
