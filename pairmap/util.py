import logging
import math

from .constants import PairmapNamespace
from .error import InvalidArgument

logger = logging.getLogger('pairmap')


class WeakPairmapNamespace(PairmapNamespace):
    """
    namespace where every attribute may be overridden by its environment variable equivalent
    """

    def is_env_overwritable(self, attr):
        return True


def positive_int(value, name='value'):
    """
    check that the input is an integer of 1 or greater

    Raises:
        InvalidArgument: the value is not an integer or is less than 1

    Example:
        >>> positive_int(3)
        3
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument('{} must be an integer'.format(name), value)
    if value < 1:
        raise InvalidArgument('{} must be 1 or greater'.format(name), value)
    return value


def finite_score(value, name='score'):
    """
    cast an alignment score to a float, rejecting NaN and infinite values

    Raises:
        InvalidArgument: the value cannot be cast or is not a finite number
    """
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument('{} must be a number'.format(name), value)
    if not math.isfinite(value):
        raise InvalidArgument('{} must be a finite number'.format(name), value)
    return value
