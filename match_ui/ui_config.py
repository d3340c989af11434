from match_core.Cards import LEVEL_ORDER

MENU = 1
SETTINGS = 2
GAME = 3
STATS = 4
ACHIEVEMENTS = 5

THEME_ORDER = ("Day", "Night", "Golden Glow")
DEFAULT_THEME = "Golden Glow"

LEVEL_IDS = tuple(level.value for level in LEVEL_ORDER)
DEFAULT_UNLOCKED_LEVEL = LEVEL_ORDER[0].value

# A level counts as cleared for unlocking purposes up to this many mistakes.
UNLOCK_MISTAKE_LIMIT = 3

SPEED_DEMON_SECONDS = 30
GOLDEN_PAW_COMBO = 5
FORTUNE_MASTER_STREAK = 10

CUE_HAPTICS = {
    "cardFlip": None,
    "match": "medium",
    "combo": "heavy",
    "bigCombo": "roar",
    "mistake": "error",
    "levelComplete": "success",
    "achievementUnlocked": "double",
    "buttonTap": "light",
}

CUE_MIN_INTERVAL = {
    "cardFlip": 0.04,
    "match": 0.08,
    "combo": 0.08,
    "bigCombo": 0.3,
    "mistake": 0.08,
    "levelComplete": 0.5,
    "achievementUnlocked": 0.5,
    "buttonTap": 0.04,
}
