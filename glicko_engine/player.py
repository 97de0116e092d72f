"""
Players on either Glicko scale

A player is one of two immutable variants:
- PlayerV1: rating and rating deviation on the 1500-centered scale, no volatility
- PlayerV2: rating, rating deviation and volatility on the Glicko-2 internal scale

Conversion between them is explicit via to_v1 and to_v2, converting a v2 player to v1 drops the volatility.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Union
from glicko_engine.errors import InvalidInput
from glicko_engine.scale import Scale, rating_to, deviation_to
from glicko_engine.utils.constants import (
    INITIAL_RATING,
    INITIAL_RATING_DEVIATION,
    INITIAL_RATING_V2,
    INITIAL_RATING_DEVIATION_V2,
    INITIAL_VOLATILITY,
)


def _check_positive(name, value):
    # written as a negated comparison so NaN is rejected too
    if not value > 0.0:
        raise InvalidInput(f'{name} must be positive, got {value}')


@dataclass(frozen=True)
class PlayerV1:
    """a player on the v1 scale"""

    rating: float = INITIAL_RATING
    rating_deviation: float = INITIAL_RATING_DEVIATION

    scale = Scale.V1

    def __post_init__(self):
        _check_positive('rating_deviation', self.rating_deviation)


@dataclass(frozen=True)
class PlayerV2:
    """a player on the v2 scale"""

    rating: float = INITIAL_RATING_V2
    rating_deviation: float = INITIAL_RATING_DEVIATION_V2
    volatility: float = INITIAL_VOLATILITY

    scale = Scale.V2

    def __post_init__(self):
        _check_positive('rating_deviation', self.rating_deviation)
        _check_positive('volatility', self.volatility)


Player = Union[PlayerV1, PlayerV2]


def _check_player(player):
    if not isinstance(player, (PlayerV1, PlayerV2)):
        raise InvalidInput(f'Expected a PlayerV1 or PlayerV2, got {type(player).__name__}')


def initial_volatility() -> float:
    """the recommended volatility for a new player"""
    return INITIAL_VOLATILITY


def new_v1(rating: Optional[float] = None, rating_deviation: Optional[float] = None) -> PlayerV1:
    """creates a v1 player, omitted values fall back to an unrated player"""
    return PlayerV1(
        rating=INITIAL_RATING if rating is None else float(rating),
        rating_deviation=INITIAL_RATING_DEVIATION if rating_deviation is None else float(rating_deviation),
    )


def new_v2(
    rating: Optional[float] = None,
    rating_deviation: Optional[float] = None,
    volatility: Optional[float] = None,
) -> PlayerV2:
    """creates a v2 player, omitted values fall back to an unrated player"""
    return PlayerV2(
        rating=INITIAL_RATING_V2 if rating is None else float(rating),
        rating_deviation=INITIAL_RATING_DEVIATION_V2 if rating_deviation is None else float(rating_deviation),
        volatility=INITIAL_VOLATILITY if volatility is None else float(volatility),
    )


def to_v1(player: Player) -> PlayerV1:
    """converts a player to v1, a v1 player passes through unchanged"""
    _check_player(player)
    if player.scale is Scale.V1:
        return player
    return PlayerV1(
        rating=rating_to(player.rating, Scale.V1),
        rating_deviation=deviation_to(player.rating_deviation, Scale.V1),
    )


def to_v2(player: Player, volatility: float = INITIAL_VOLATILITY) -> PlayerV2:
    """
    Converts a player to v2.

    A v2 player passes through unchanged and the volatility argument is ignored.

    Parameters:
        player (Player): the player to convert
        volatility (float, optional): volatility given to a converted v1 player. Defaults to 0.06.

    Returns:
        PlayerV2: the player on the v2 scale
    """
    _check_player(player)
    if player.scale is Scale.V2:
        return player
    return PlayerV2(
        rating=rating_to(player.rating, Scale.V2),
        rating_deviation=deviation_to(player.rating_deviation, Scale.V2),
        volatility=volatility,
    )


def to_scale(player: Player, target_scale, volatility: float = INITIAL_VOLATILITY) -> Player:
    """converts a player to whichever scale is named"""
    if Scale.coerce(target_scale) is Scale.V1:
        return to_v1(player)
    return to_v2(player, volatility)


def rating(player: Player, as_scale=None) -> float:
    """version agnostic rating getter, optionally converted to another scale"""
    _check_player(player)
    if as_scale is None or Scale.coerce(as_scale) is player.scale:
        return player.rating
    return rating_to(player.rating, as_scale)


def rating_deviation(player: Player, as_scale=None) -> float:
    """version agnostic rating deviation getter, optionally converted to another scale"""
    _check_player(player)
    if as_scale is None or Scale.coerce(as_scale) is player.scale:
        return player.rating_deviation
    return deviation_to(player.rating_deviation, as_scale)


def volatility(player: Player, default: float = INITIAL_VOLATILITY) -> float:
    """the player's volatility, v1 players have none so the default is returned"""
    _check_player(player)
    if player.scale is Scale.V1:
        return default
    return player.volatility


def rating_interval(player: Player, as_scale=None) -> Tuple[float, float]:
    """
    Summarizes a player's strength as a 95% confidence interval.

    The interval runs from the rating minus twice the deviation to the rating plus twice the deviation.
    A rating of 1850 with a deviation of 50 gives (1750, 1950). Volatility plays no part.

    Parameters:
        player (Player): the player to summarize
        as_scale (Scale or str, optional): scale to report the interval on. Defaults to the player's own scale.

    Returns:
        Tuple[float, float]: (low, high)
    """
    center = rating(player, as_scale)
    width = 2.0 * rating_deviation(player, as_scale)
    return (center - width, center + width)
