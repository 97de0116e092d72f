"""mathematical constants computed once here to avoid recomputation"""
import math

# general math constants
PI2 = math.pi**2.0
THREE_OVER_PI_SQUARED = 3.0 / PI2

# glicko scale constants
SCALE_FACTOR = 173.7178
RATING_ORIGIN = 1500.0

# unrated player defaults, v1 scale
INITIAL_RATING = 1500.0
INITIAL_RATING_DEVIATION = 350.0
INITIAL_VOLATILITY = 0.06

# unrated player defaults, v2 scale
INITIAL_RATING_V2 = (INITIAL_RATING - RATING_ORIGIN) / SCALE_FACTOR
INITIAL_RATING_DEVIATION_V2 = INITIAL_RATING_DEVIATION / SCALE_FACTOR
