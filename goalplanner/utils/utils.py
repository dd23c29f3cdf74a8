import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a calculator does: halves always go up."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def safe_ratio_pct(numerator: float, denominator: float) -> float:
    """numerator / denominator as a percentage, 0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return (numerator / denominator) * 100
