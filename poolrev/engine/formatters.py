"""Display formatting for BTC, sats, USD, percentages, hashrate and difficulty."""

import math
from typing import Optional

from poolrev.engine.units import format_compact


PLACEHOLDER = "--"


def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def to_exponential(value: float, digits: int) -> str:
    """Exponential notation with a short exponent, e.g. 1.00e-8 or 1.000e+17."""
    if not math.isfinite(value):
        return str(value)
    mantissa, exponent = f"{value:.{digits}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


def format_number(value: Optional[float]) -> str:
    """Thousands-grouped number with at most three fraction digits."""
    if _is_missing(value):
        return PLACEHOLDER
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_btc(btc: Optional[float]) -> str:
    """BTC with precision that grows as the amount shrinks."""
    if _is_missing(btc):
        return PLACEHOLDER

    if btc < 0.00001:
        return to_exponential(btc, 2)
    elif btc < 0.001:
        return f"{btc:.8f}"
    elif btc < 1:
        return f"{btc:.6f}"
    return f"{btc:.4f}"


def format_sats(sats: Optional[float]) -> str:
    if _is_missing(sats):
        return PLACEHOLDER
    return format_number(sats)


def format_usd(usd: Optional[float]) -> str:
    if _is_missing(usd):
        return PLACEHOLDER

    if usd >= 1_000_000:
        return f"${usd / 1_000_000:.2f}M"
    elif usd >= 1000:
        return f"${usd / 1000:.2f}K"
    elif usd >= 1:
        return f"${usd:.2f}"
    return f"${usd:.4f}"


def format_percent(percent: Optional[float]) -> str:
    if _is_missing(percent):
        return PLACEHOLDER

    if percent < 0.0001:
        return f"{to_exponential(percent, 2)}%"
    elif percent < 0.01:
        return f"{percent:.6f}%"
    elif percent < 1:
        return f"{percent:.4f}%"
    return f"{percent:.2f}%"


def format_hashrate(hashrate_hps: Optional[float]) -> str:
    """Hashrate across H/s ... ZH/s with two decimals."""
    if _is_missing(hashrate_hps):
        return PLACEHOLDER
    return format_compact(hashrate_hps, decimals=2)


def format_hashrate_short(hashrate_hps: Optional[float]) -> str:
    """Hashrate with one decimal, for tables and axis labels."""
    if _is_missing(hashrate_hps):
        return PLACEHOLDER
    return format_compact(hashrate_hps, decimals=1)


def format_difficulty(difficulty: Optional[float]) -> str:
    """Difficulty with T/B/M suffixes."""
    if _is_missing(difficulty) or not difficulty:
        return PLACEHOLDER

    if difficulty >= 1e12:
        return f"{difficulty / 1e12:.2f}T"
    elif difficulty >= 1e9:
        return f"{difficulty / 1e9:.2f}B"
    elif difficulty >= 1e6:
        return f"{difficulty / 1e6:.2f}M"
    return format_number(difficulty)
