"""
Game results against an opponent

Result holds the opponent's v2 rating and deviation at the time of the game, GameResult keeps the opponent
player itself. Both are snapshots, nothing here references a live player.
"""
import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Union
from glicko_engine.errors import InvalidInput
from glicko_engine.player import Player, PlayerV1, PlayerV2, rating, rating_deviation
from glicko_engine.scale import Scale


class ScoreType(float, Enum):
    """shortcuts for the three standard outcomes"""

    LOSS = 0.0
    DRAW = 0.5
    WIN = 1.0


Score = Union[float, ScoreType, str]


def score_value(score: Score) -> float:
    """maps a ScoreType, 'loss' / 'draw' / 'win' or a number in [0, 1] to a float score"""
    if isinstance(score, ScoreType):
        return score.value
    if isinstance(score, str):
        try:
            return ScoreType[score.upper()].value
        except KeyError:
            raise InvalidInput(f'Invalid score shortcut {score!r}, expected loss, draw or win') from None
    if isinstance(score, bool) or not isinstance(score, numbers.Real):
        raise InvalidInput(f'Score must be a number or a shortcut, got {type(score).__name__}')
    score = float(score)
    if math.isnan(score) or not 0.0 <= score <= 1.0:
        raise InvalidInput(f'Score must be between 0.0 and 1.0, got {score}')
    return score


@dataclass(frozen=True)
class Result:
    """an opponent's v2 rating and deviation plus the score achieved against them"""

    rating: float
    rating_deviation: float
    score: float

    def __post_init__(self):
        if not self.rating_deviation > 0.0:
            raise InvalidInput(f'opponent rating_deviation must be positive, got {self.rating_deviation}')
        # frozen, so normalize the score through object.__setattr__
        object.__setattr__(self, 'score', score_value(self.score))

    @classmethod
    def from_v2(cls, opponent_rating: float, opponent_rating_deviation: float, score: Score) -> 'Result':
        """values must already be on the v2 scale"""
        return cls(
            rating=float(opponent_rating),
            rating_deviation=float(opponent_rating_deviation),
            score=score,
        )

    @classmethod
    def new(cls, opponent: Player, score: Score) -> 'Result':
        """
        Creates a result against an opponent of either scale.

        Parameters:
            opponent (Player): the opponent as they were when the game was played
            score (float, ScoreType or str): a number in [0, 1] or one of loss, draw, win

        Returns:
            Result: the opponent snapshot on the v2 scale with the score
        """
        return cls.from_v2(rating(opponent, Scale.V2), rating_deviation(opponent, Scale.V2), score)


@dataclass(frozen=True)
class GameResult:
    """a result that keeps the opponent player itself"""

    opponent: Player
    score: float

    def __post_init__(self):
        if not isinstance(self.opponent, (PlayerV1, PlayerV2)):
            raise InvalidInput(f'Expected a PlayerV1 or PlayerV2 opponent, got {type(self.opponent).__name__}')
        object.__setattr__(self, 'score', score_value(self.score))

    @classmethod
    def new(cls, opponent: Player, score: Score) -> 'GameResult':
        return cls(opponent=opponent, score=score)

    def to_result(self) -> Result:
        return Result.new(self.opponent, self.score)
