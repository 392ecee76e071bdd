import math


def floor(n: float, digits: int = 0) -> float:
    """
    Rounds `n` down (towards negative infinity) to `digits` decimal places.

    floor(200 / 3, 2) == 66.66
    floor(-0.001, 2) == -0.01
    """
    d = 10**digits
    return math.floor(n * d) / d


def trunc_percentage(n: float) -> float:
    """
    Truncates `n` towards zero to one decimal place, keeping its sign.

    This is the display rule. Aggregated percentages are floored with `floor`
    when they are computed, and the two must not be mixed up:

    trunc_percentage(-99.85) == -99.8
    floor(-99.85, 1) == -99.9
    """
    truncated = math.trunc(abs(n) * 10) / 10
    return -truncated if n < 0 else truncated


def format_number(n: float) -> str:
    # integral values have no decimal part and negative zero renders as "0"
    if n == int(n):
        return str(int(n))
    return repr(float(n))
