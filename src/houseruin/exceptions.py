"""Exception types raised by the simulation engine."""

import numbers


class InvalidConfigurationError(ValueError):
    """Raised when simulation or histogram inputs are out of range.

    Validation happens before any simulation work starts, so a caller
    never receives partial results for a rejected configuration.
    """


def require_integer(value: object, name: str) -> None:
    """Reject counts that are not whole numbers (bool included).

    Raises:
        InvalidConfigurationError: If value is not an integer.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidConfigurationError(f"{name} must be an integer")
