"""Configuration constants for the dojo drill engine."""

DEFAULT_WEIGHT = 1.0

# Weight adjustment after an answer
CORRECT_FACTOR = 0.85   # Multiplier applied on a correct answer (< 1)
WRONG_FACTOR = 1.3      # Multiplier applied on a wrong answer (> 1)

# Bounds so no character leaves rotation or dominates it
MIN_WEIGHT = 0.1
MAX_WEIGHT = 10.0

# Recency memory
RECENCY_SIZE = 5        # Number of recently shown characters to remember

# Drill scoring
MIN_SCORE = 0
