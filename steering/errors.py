"""Error types raised by the steering core."""


class DomainError(ValueError):
    """A steering call was given inputs it cannot turn into a finite result.

    Raised for non-positive time steps passed to timing-sensitive behaviors,
    non-positive divisors in a behavior configuration, and non-finite
    angles or accelerations.
    """


def require_positive(value, name: str, allow_none: bool = False):
    """Raise DomainError unless value is a number strictly greater than zero."""
    if value is None and allow_none:
        return
    if value is None or not value > 0:
        raise DomainError(f"{name} must be > 0, got {value!r}")


def require_positive_dt(dt: float, behavior: str):
    if not dt > 0:
        raise DomainError(f"{behavior} needs a positive time step, got {dt!r}")
