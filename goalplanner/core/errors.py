import math


class InvalidArgument(ValueError):
    """Raised when a math or solver function receives unusable input."""


def require_finite(**values) -> None:
    for name, value in values.items():
        if value is None or not math.isfinite(value):
            raise InvalidArgument(f"{name} must be a finite number, got {value!r}")


def require_non_negative(**values) -> None:
    require_finite(**values)
    for name, value in values.items():
        if value < 0:
            raise InvalidArgument(f"{name} must not be negative, got {value!r}")
