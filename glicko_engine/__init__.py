"""
glicko_engine
=============

Glicko and Glicko-2 rating updates for a single player over one rating period.

Example, from http://www.glicko.net/glicko/glicko2.pdf:

    >>> from glicko_engine import Result, new_rating, new_v1
    >>> results = [
    ...     Result.new(new_v1(1400, 30), 'win'),
    ...     Result.new(new_v1(1550, 100), 'loss'),
    ...     Result.new(new_v1(1700, 300), 'loss'),
    ... ]
    >>> player = new_rating(new_v1(1500, 200), results, {'system_constant': 0.5})
    >>> round(player.rating, 2), round(player.rating_deviation, 2)
    (1464.05, 151.52)
"""
from glicko_engine.configs import Glicko2Options, DEFAULT_OPTIONS
from glicko_engine.errors import GlickoError, InvalidInput, NumericDivergence, DegenerateInput
from glicko_engine.models.glicko2 import Glicko2, RatingPeriodContext, new_rating
from glicko_engine.player import (
    Player,
    PlayerV1,
    PlayerV2,
    initial_volatility,
    new_v1,
    new_v2,
    to_v1,
    to_v2,
    to_scale,
    rating,
    rating_deviation,
    volatility,
    rating_interval,
)
from glicko_engine.result import Result, GameResult, ScoreType, score_value
from glicko_engine.scale import Scale, rating_to, deviation_to

__version__ = '0.1.0'
