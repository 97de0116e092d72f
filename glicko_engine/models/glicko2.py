"""
Glicko 2
paper: http://www.glicko.net/research/dpcmsv.pdf
example: http://www.glicko.net/glicko/glicko2.pdf

"""
import math
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Union
import numpy as np
from glicko_engine.configs import Glicko2Options
from glicko_engine.errors import InvalidInput, NumericDivergence, DegenerateInput
from glicko_engine.player import Player, PlayerV1, PlayerV2, to_v1, to_v2
from glicko_engine.result import Result, GameResult
from glicko_engine.utils.log_utils import get_logger
from glicko_engine.utils.math_utils import g_vector, expected_score

logger = get_logger(__name__)


@dataclass(frozen=True)
class RatingPeriodContext:
    """
    Intermediate quantities of one rating period update, all on the v2 scale.

    Attributes:
        rating (float): prior rating (mu)
        rating_deviation (float): prior rating deviation (phi)
        volatility (float): prior volatility (sigma)
        impact_weights (np.ndarray): g of each opponent's deviation
        expected_scores (np.ndarray): expected score against each opponent
        scores (np.ndarray): actual score against each opponent
        variance_estimate (float): v, inverse of the information carried by the results
        results_effect (float): sum of g * (score - expected score)
        delta (float): estimated improvement, results_effect * v
        alpha (float): log of the squared prior volatility
    """

    rating: float
    rating_deviation: float
    volatility: float
    impact_weights: np.ndarray
    expected_scores: np.ndarray
    scores: np.ndarray
    variance_estimate: float
    results_effect: float
    delta: float
    alpha: float

    @property
    def rating_deviation_squared(self) -> float:
        return self.rating_deviation**2.0


class Glicko2:
    """
    Implements the Glicko 2 rating system, designed by Mark Glickman.

    One call to new_rating updates a single player from the results of one rating period.
    Nothing is stored between calls.
    """

    def __init__(
        self,
        system_constant: float = 0.8,
        convergence_tolerance: float = 1.0e-7,
        max_iterations: int = 100,
    ):
        """
        Initializes the Glicko 2 update with the given constants.

        Parameters:
            system_constant (float, optional): tau, constrains the change in volatility over time. Defaults to 0.8.
            convergence_tolerance (float, optional): width at which the volatility root-finding stops. Defaults to 1e-7.
            max_iterations (int, optional): cap on the bracket search and on the Illinois iteration. Defaults to 100.
        """
        self.options = Glicko2Options(
            system_constant=system_constant,
            convergence_tolerance=convergence_tolerance,
            max_iterations=max_iterations,
        )
        self.tau = system_constant
        self.tau2 = system_constant**2.0
        self.epsilon = convergence_tolerance
        self.max_iterations = max_iterations

    @classmethod
    def from_options(cls, opts: Optional[Union[Mapping, Glicko2Options]] = None) -> 'Glicko2':
        options = Glicko2Options.from_dict(opts)
        return cls(
            system_constant=options.system_constant,
            convergence_tolerance=options.convergence_tolerance,
            max_iterations=options.max_iterations,
        )

    def new_rating(self, player: Player, results: Sequence[Union[Result, GameResult]]) -> Player:
        """
        Generates a new rating from an existing rating and the results of a rating period.

        A v1 player is moved to the v2 scale with the default volatility, updated, then moved back,
        so the new volatility is dropped. A v2 player comes back as a v2 player.

        Parameters:
            player (Player): the player's rating before the period
            results (sequence of Result or GameResult): games played in the period, may be empty

        Returns:
            Player: a new player on the same scale as the one given
        """
        if isinstance(player, PlayerV2):
            return self._new_rating_v2(player, results)
        if isinstance(player, PlayerV1):
            return to_v1(self._new_rating_v2(to_v2(player), results))
        raise InvalidInput(f'Expected a PlayerV1 or PlayerV2, got {type(player).__name__}')

    def _new_rating_v2(self, player: PlayerV2, results) -> PlayerV2:
        results = _as_results(results)
        if not results:
            return self.decay(player)

        ctx = self.build_context(player, results)
        new_volatility = self.new_volatility(ctx)
        pre_rating_deviation = math.sqrt(ctx.rating_deviation_squared + new_volatility**2.0)
        new_rating_deviation = 1.0 / math.sqrt(
            (1.0 / pre_rating_deviation**2.0) + (1.0 / ctx.variance_estimate)
        )
        new_rating = ctx.rating + (new_rating_deviation**2.0) * ctx.results_effect
        return PlayerV2(rating=new_rating, rating_deviation=new_rating_deviation, volatility=new_volatility)

    @staticmethod
    def decay(player: PlayerV2) -> PlayerV2:
        """a period without games only grows the deviation"""
        return PlayerV2(
            rating=player.rating,
            rating_deviation=math.sqrt(player.rating_deviation**2.0 + player.volatility**2.0),
            volatility=player.volatility,
        )

    @staticmethod
    def build_context(player: PlayerV2, results: Sequence[Result]) -> RatingPeriodContext:
        """steps 3 and 4 of the paper, aggregate the results into v and delta"""
        opponent_ratings = np.array([result.rating for result in results], dtype=np.float64)
        opponent_rating_devs = np.array([result.rating_deviation for result in results], dtype=np.float64)
        scores = np.array([result.score for result in results], dtype=np.float64)

        gs = g_vector(opponent_rating_devs)
        probs, complements = expected_score(player.rating, opponent_ratings, gs)

        information = float((np.square(gs) * probs * complements).sum())
        variance_estimate = 1.0 / information if information > 0.0 else math.inf
        if not math.isfinite(variance_estimate):
            logger.warning(f'results carry no information (sum of g^2 * E * (1 - E) = {information})')
            raise DegenerateInput(
                f'Variance estimate is undefined, information sum {information} is zero or not finite'
            )
        # s - E written as s * (1 - E) - (1 - s) * E so a win over a far weaker opponent stays nonzero
        results_effect = float((gs * (scores * complements - (1.0 - scores) * probs)).sum())

        return RatingPeriodContext(
            rating=player.rating,
            rating_deviation=player.rating_deviation,
            volatility=player.volatility,
            impact_weights=gs,
            expected_scores=probs,
            scores=scores,
            variance_estimate=variance_estimate,
            results_effect=results_effect,
            delta=results_effect * variance_estimate,
            alpha=math.log(player.volatility**2.0),
        )

    def f(self, x, delta2, phi2, v, a):
        ex = math.exp(x)
        phi2_v_ex = phi2 + v + ex
        num_1 = ex * (delta2 - phi2_v_ex)
        denom_1 = 2.0 * ((phi2_v_ex) ** 2.0)
        term_2 = (x - a) / self.tau2
        return (num_1 / denom_1) - term_2

    def initial_bracket(self, delta2, phi2, v, a):
        """the second endpoint, either closed form or found by stepping down from alpha in multiples of tau"""
        if delta2 > (phi2 + v):
            return math.log(delta2 - phi2 - v)
        k = 1
        while self.f(a - k * self.tau, delta2, phi2, v, a) < 0:
            if k >= self.max_iterations:
                logger.warning(f'bracket search hit max number of iterations ({self.max_iterations})')
                raise NumericDivergence(
                    f'Could not bracket the volatility root within {self.max_iterations} steps of tau={self.tau}',
                    iterations=k,
                )
            k += 1
        return a - k * self.tau

    def new_volatility(self, ctx: RatingPeriodContext) -> float:
        """
        Step 5 of the paper, solves for the new volatility with the Illinois variant of regula falsi.

        Parameters:
            ctx (RatingPeriodContext): the aggregated results of the period

        Returns:
            float: sigma prime
        """
        phi2 = ctx.rating_deviation_squared
        v = ctx.variance_estimate
        a = ctx.alpha

        try:
            delta2 = ctx.delta**2.0
            return self._illinois(delta2, phi2, v, a)
        except OverflowError as err:
            logger.warning(f'volatility root-finding overflowed: {err}')
            raise NumericDivergence(f'Volatility root-finding overflowed for delta={ctx.delta}, v={v}') from err

    def _illinois(self, delta2, phi2, v, a):
        A = a
        B = self.initial_bracket(delta2, phi2, v, a)
        f_A = self.f(A, delta2, phi2, v, a)
        f_B = self.f(B, delta2, phi2, v, a)

        iters = 0
        while math.fabs(B - A) > self.epsilon:
            if iters >= self.max_iterations:
                logger.warning(f'volatility iteration hit max number of iterations ({self.max_iterations})')
                raise NumericDivergence(
                    f'Volatility did not converge to within {self.epsilon} in {self.max_iterations} iterations',
                    iterations=iters,
                )
            if f_B == f_A:
                raise NumericDivergence(f'Secant step is undefined, f(A) == f(B) == {f_A}', iterations=iters)
            C = A + ((A - B) * f_A) / (f_B - f_A)
            if math.fabs(C - B) < self.epsilon / 2.0:
                # minimum step towards A, otherwise a B sitting on the root stalls while f_A is halved
                C = B + math.copysign(self.epsilon / 2.0, A - B)
            f_C = self.f(C, delta2, phi2, v, a)
            if f_C == 0.0:
                # landed exactly on the root
                A = C
                break
            if (f_C * f_B) < 0:
                A = B
                f_A = f_B
            else:
                f_A = f_A / 2.0
            B = C
            f_B = f_C
            iters += 1

        logger.debug(f'volatility converged after {iters} iterations')
        return math.exp(A / 2.0)


def _as_results(results) -> list:
    """normalizes GameResults into Results, anything else is rejected"""
    normalized = []
    for result in results:
        if isinstance(result, Result):
            normalized.append(result)
        elif isinstance(result, GameResult):
            normalized.append(result.to_result())
        else:
            raise InvalidInput(f'Expected a Result or GameResult, got {type(result).__name__}')
    return normalized


def new_rating(
    player: Player,
    results: Sequence[Union[Result, GameResult]],
    opts: Optional[Union[Mapping, Glicko2Options]] = None,
) -> Player:
    """
    Generates a new rating from an existing rating and a series (or lack) of results.

    Recognized opts are system_constant, convergence_tolerance and max_iterations, anything else is ignored.
    Returns the updated player on the same scale given to the function.
    """
    return Glicko2.from_options(opts).new_rating(player, results)


__all__ = ['Glicko2', 'RatingPeriodContext', 'new_rating']
