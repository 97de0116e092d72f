"""math utility functions for the glicko 2 update"""
import numpy as np
from scipy.special import expit
from glicko_engine.utils.constants import THREE_OVER_PI_SQUARED


def sigmoid(x):
    """a little faster than implementing it in numpy for d < 100000"""
    return expit(x)


def g_vector(rating_deviations):
    """shrinks the weight of each opponent as their rating deviation grows"""
    return 1.0 / np.sqrt(1.0 + (THREE_OVER_PI_SQUARED * np.square(rating_deviations)))


def expected_score(rating, opponent_ratings, opponent_gs):
    """
    Logistic probability-like score against each opponent, all values on the v2 scale.

    Parameters:
        rating (float): rating of the player being updated
        opponent_ratings (np.ndarray): opponent ratings
        opponent_gs (np.ndarray): g of each opponent's rating deviation

    Returns:
        tuple[np.ndarray, np.ndarray]: expected score E against each opponent and its complement 1 - E
    """
    logits = opponent_gs * (rating - opponent_ratings)
    # 1.0 - E rounds to zero for a heavy favourite, expit(-x) keeps the tail
    return sigmoid(logits), sigmoid(-logits)
