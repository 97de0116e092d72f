"""
example from: http://www.glicko.net/glicko/glicko2.pdf
"""
import math
import logging
import pytest
import numpy as np
from glicko_engine import (
    Glicko2,
    GameResult,
    Result,
    PlayerV1,
    PlayerV2,
    new_rating,
    new_v1,
    new_v2,
    to_v2,
    rating_to,
    deviation_to,
    GlickoError,
    InvalidInput,
    NumericDivergence,
    DegenerateInput,
)


def example_results():
    return [
        Result.new(new_v1(1400.0, 30.0), 'win'),
        Result.new(new_v1(1550.0, 100.0), 'loss'),
        Result.new(new_v1(1700.0, 300.0), 'loss'),
    ]


def example_player():
    return to_v2(new_v1(1500.0, 200.0))


def test_glicko2():
    player = new_rating(example_player(), example_results(), {'system_constant': 0.5})
    assert isinstance(player, PlayerV2)
    assert player.rating == pytest.approx(rating_to(1464.06, 'v2'), abs=1e-4)
    assert player.rating_deviation == pytest.approx(deviation_to(151.52, 'v2'), abs=1e-4)
    assert player.volatility == pytest.approx(0.05999, abs=1e-5)


def test_glicko2_v1_player():
    player = new_rating(new_v1(1500.0, 200.0), example_results(), {'system_constant': 0.5})
    assert isinstance(player, PlayerV1)
    assert player.rating == pytest.approx(1464.06, abs=1e-2)
    assert player.rating_deviation == pytest.approx(151.52, abs=1e-2)


def test_context_matches_paper():
    # this is a really weak tolerance but alas Mr. Glickoman rounded to 4 decimal points at each step of the example
    ctx = Glicko2.build_context(example_player(), example_results())
    assert ctx.impact_weights == pytest.approx(np.array([0.9955, 0.9531, 0.7242]), abs=1e-4)
    assert ctx.expected_scores == pytest.approx(np.array([0.639, 0.432, 0.303]), abs=1e-3)
    assert ctx.variance_estimate == pytest.approx(1.7785, rel=5e-4)
    assert ctx.delta == pytest.approx(-0.4834, rel=5e-4)
    assert ctx.alpha == pytest.approx(math.log(0.06**2.0))


def test_new_volatility_matches_paper():
    model = Glicko2(system_constant=0.5)
    ctx = model.build_context(example_player(), example_results())
    assert model.new_volatility(ctx) == pytest.approx(0.05999, abs=1e-5)


def test_no_results():
    player = new_rating(example_player(), [])
    assert player.rating_deviation == pytest.approx(deviation_to(200.2714, 'v2'), abs=1e-4)
    assert player.rating == example_player().rating
    assert player.volatility == 0.06


def test_no_results_v1_player():
    player = new_rating(new_v1(1500.0, 200.0), [], {'system_constant': 0.5})
    assert player.rating == 1500.0
    assert player.rating_deviation == pytest.approx(200.2714, abs=1e-4)


@pytest.mark.parametrize('rating_deviation,volatility', [(0.1, 0.06), (1.1513, 0.06), (2.0, 0.5), (0.5, 1e-3)])
def test_decay_only_grows_deviation(rating_deviation, volatility):
    prior = new_v2(0.7, rating_deviation, volatility)
    posterior = new_rating(prior, [])
    assert posterior.rating_deviation > prior.rating_deviation
    assert posterior.rating == prior.rating
    assert posterior.volatility == prior.volatility


def test_self_play_draw():
    prior = new_v2(0.3, 1.0, 0.06)
    results = [Result.new(new_v2(0.3, 1.0), 'draw') for _ in range(3)]
    posterior = new_rating(prior, results)
    assert posterior.rating == pytest.approx(prior.rating, abs=1e-9)
    assert posterior.rating_deviation < prior.rating_deviation


def test_wins_rate_higher_than_losses():
    opponents = [new_v1(1450.0, 80.0), new_v1(1600.0, 150.0), new_v1(1500.0, 50.0)]
    prior = new_v1(1500.0, 200.0)
    all_wins = new_rating(prior, [Result.new(opponent, 'win') for opponent in opponents])
    all_losses = new_rating(prior, [Result.new(opponent, 'loss') for opponent in opponents])
    assert all_wins.rating > prior.rating > all_losses.rating


def test_game_results_match_results():
    opponents = [new_v1(1400.0, 30.0), new_v1(1550.0, 100.0), new_v1(1700.0, 300.0)]
    scores = ['win', 'loss', 'loss']
    game_results = [GameResult.new(opponent, score) for opponent, score in zip(opponents, scores)]
    from_game_results = new_rating(example_player(), game_results, {'system_constant': 0.5})
    from_results = new_rating(example_player(), example_results(), {'system_constant': 0.5})
    assert from_game_results == from_results


def test_prior_is_not_mutated():
    prior = example_player()
    results = example_results()
    new_rating(prior, results, {'system_constant': 0.5})
    assert prior == example_player()
    assert results == example_results()


def test_unknown_options_are_ignored():
    with_extra = new_rating(example_player(), example_results(), {'system_constant': 0.5, 'k_factor': 32})
    without_extra = Glicko2(system_constant=0.5).new_rating(example_player(), example_results())
    assert with_extra == without_extra


def random_v1_player(rng):
    # log-uniform deviations so tiny ones show up as often as large ones
    return new_v1(rng.uniform(-10000.0, 10000.0), 10.0 ** rng.uniform(-2.0, 3.0))


def test_terminates_for_realistic_inputs():
    rng = np.random.default_rng(0)
    model = Glicko2(max_iterations=100)
    for _ in range(500):
        prior = to_v2(random_v1_player(rng), volatility=rng.uniform(0.01, 1.0))
        num_games = rng.integers(1, 6)
        results = [Result.new(random_v1_player(rng), rng.choice([0.0, 0.5, 1.0])) for _ in range(num_games)]
        posterior = model.new_rating(prior, results)
        assert math.isfinite(posterior.rating)
        assert posterior.rating_deviation > 0.0
        assert posterior.volatility > 0.0


def test_strong_favourite_win_keeps_rating():
    posterior = new_rating(new_v1(8000.0, 50.0), [Result.new(new_v1(1000.0, 50.0), 'win')])
    assert isinstance(posterior, PlayerV1)
    assert posterior.rating == pytest.approx(8000.0, abs=1e-6)
    assert posterior.rating_deviation == pytest.approx(51.07, abs=1e-2)


def test_strong_favourite_context_keeps_information():
    ctx = Glicko2.build_context(to_v2(new_v1(8000.0, 50.0)), [Result.new(new_v1(1000.0, 50.0), 'win')])
    assert math.isfinite(ctx.variance_estimate)
    assert ctx.results_effect > 0.0
    assert ctx.delta == pytest.approx(1.0 / ctx.impact_weights[0], rel=1e-6)


def test_underdog_upset_moves_rating():
    posterior = new_rating(new_v1(8000.0, 50.0), [Result.new(new_v1(1000.0, 50.0), 'loss')])
    assert math.isfinite(posterior.rating)
    assert posterior.rating < 8000.0


def test_overflowing_delta_raises_numeric_divergence():
    with pytest.raises(NumericDivergence) as excinfo:
        new_rating(new_v2(0.0, 1.0, 0.06), [Result.from_v2(700.0, 0.01, 'win')])
    assert isinstance(excinfo.value, GlickoError)


def test_iteration_cap():
    model = Glicko2(system_constant=0.5, max_iterations=1)
    with pytest.raises(NumericDivergence):
        model.new_rating(example_player(), example_results())


def test_saturated_results_are_degenerate(caplog):
    results = [Result.from_v2(1000.0, 0.1, 'loss'), Result.from_v2(-1000.0, 0.1, 'win')]
    with caplog.at_level(logging.WARNING, logger='glicko_engine'):
        with pytest.raises(DegenerateInput) as excinfo:
            new_rating(new_v2(0.0, 1.0, 0.06), results)
    assert 'no information' in caplog.text
    assert 'zero or not finite' in str(excinfo.value)


def test_errors_are_arithmetic_errors():
    assert issubclass(NumericDivergence, ArithmeticError)
    assert issubclass(DegenerateInput, ArithmeticError)
    assert issubclass(InvalidInput, ValueError)


def test_rejects_bad_inputs():
    with pytest.raises(InvalidInput):
        new_rating(example_player(), [(1400.0, 30.0, 1.0)])
    with pytest.raises(InvalidInput):
        new_rating((1500.0, 200.0), example_results())
    with pytest.raises(InvalidInput):
        new_rating(example_player(), example_results(), {'convergence_tolerance': 0.0})
