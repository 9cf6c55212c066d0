REVIEW_LADDER = ("1d", "7d", "30d", "90d")  # index 0 follows a study session

POINTS_PER_ACTION = 10

AI_DAILY_QUOTA = 5
AI_CACHE_TTL_SECONDS = 600
AI_REQUEST_TIMEOUT_SECONDS = 25
AI_MAX_QUESTIONS = 20
AI_DEFAULT_LEVEL = "Intermediate"

DISPLAY_NAME_MIN = 3
DISPLAY_NAME_MAX = 15
BANNED_NAME_WORDS = (
    "admin",
    "moderator",
    "fuck",
    "shit",
    "bitch",
    "porra",
    "caralho",
    "merda",
)

DEFAULT_AVATAR = "zoe_default"
AVATARS = (
    DEFAULT_AVATAR,
    "zoe_studying",
    "zoe_reading",
    "zoe_celebrating",
    "zoe_thinking",
)
SEARCH_LIMIT = 20
RANKING_LIMIT = 50
RECENT_WINDOW_DAYS = 7
