"""
Conversion between the two published Glicko scales

v1 is the familiar scale centered on 1500, v2 is the internal scale of Glicko-2 centered on 0.
rating_v1 = rating_v2 * 173.7178 + 1500 and deviations scale by the same factor with no offset.
"""
from enum import Enum
from glicko_engine.errors import InvalidInput
from glicko_engine.utils.constants import SCALE_FACTOR, RATING_ORIGIN


class Scale(str, Enum):
    """which of the two glicko scales a value lives on"""

    V1 = 'v1'
    V2 = 'v2'

    @classmethod
    def coerce(cls, value) -> 'Scale':
        """accepts a Scale or its string value"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidInput(f'Invalid scale {value!r}, expected one of {[s.value for s in cls]}') from None


def rating_to(value, target_scale):
    """
    Scales a rating to the target scale.

    Works elementwise on numpy arrays as well as on floats.

    Parameters:
        value (float or np.ndarray): rating on the other scale
        target_scale (Scale or str): scale to convert to

    Returns:
        float or np.ndarray: the rating on the target scale
    """
    if Scale.coerce(target_scale) is Scale.V1:
        return value * SCALE_FACTOR + RATING_ORIGIN
    return (value - RATING_ORIGIN) / SCALE_FACTOR


def deviation_to(value, target_scale):
    """scales a rating deviation, no offset involved"""
    if Scale.coerce(target_scale) is Scale.V1:
        return value * SCALE_FACTOR
    return value / SCALE_FACTOR
