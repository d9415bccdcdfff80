"""Configuration constants for lingodrill."""

# Learning languages (entry columns besides English and Type)
LANGUAGES = ('Konkani', 'Telugu')
DEFAULT_LANGUAGE = 'Konkani'

# Persistent store keys
DICTIONARY_KEY = 'dictionary-entries'
LEDGER_KEY = 'mistake-ledger'
HIGH_SCORE_KEY = 'high-score'
SETTINGS_KEY = 'settings'

# Entry types
WORD = 'word'
PHRASE = 'phrase'

# Round setup
ROUND_SIZE = 5                # Targets per Capture / Lane-Match round
CAPTURE_MIN_WORDS = 5
CAPTURE_DECOY_COUNT = 5       # Extra on-screen bubbles
LANE_MIN_WORDS = 5
QUIZ_MIN_ENTRIES = 4
QUIZ_DISTRACTOR_COUNT = 3

# Weighted selection: rank noise as a fraction of pool size
SELECTION_JITTER = 1.0

# Fuzzy matching
SIMILARITY_THRESHOLD = 0.35   # Loose enough to surface "related" text
PARTIAL_MATCH_DISCOUNT = 0.9  # Token-window hits rank below whole-text hits
SEARCH_THRESHOLD = 0.6

# Frame timing
FRAME_SECONDS = 1 / 60        # Speeds are expressed per reference frame

# Capture drill geometry (normalised 0-100 space)
BUBBLE_MAX_X = 90
BUBBLE_SPAWN_Y = -10
BUBBLE_SPAWN_SPREAD = 50
BUBBLE_EXIT_Y = 110
BUBBLE_MIN_SPEED = 0.1
BUBBLE_SPEED_RANGE = 0.15
BUBBLE_GRACE_SECONDS = 0.5

# Lane-match drill
LANE_COUNT = 4
GAME_DURATION = 120           # seconds
TIME_BONUS = 3                # seconds per correct drop
STARTING_LIVES = 5
POINTS_PER_MATCH = 10
MAX_PASSES = 5
TILE_SPAWN_X = 110
TILE_SPAWN_SPREAD = 50
TILE_EXIT_X = -20
TILE_MIN_SPEED = 0.15
TILE_SPEED_RANGE = 0.1
TILE_RESET_SECONDS = 0.5
COUNTDOWN_INTERVAL = 1.0

# Quiz drill
QUIZ_CORRECT_REVEAL_SECONDS = 1.5   # Fallback when no visual-completion signal arrives
QUIZ_INCORRECT_DELAY_SECONDS = 2.0
