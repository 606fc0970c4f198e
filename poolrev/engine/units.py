"""Hashrate unit conversion."""

# Power-of-1000 factors for input units
HASHRATE_MULTIPLIERS = {
    "H": 1,
    "KH": 1e3,
    "MH": 1e6,
    "GH": 1e9,
    "TH": 1e12,
    "PH": 1e15,
    "EH": 1e18,
}

# Display tiers, ZH/s is the ceiling
HASHRATE_DISPLAY_UNITS = ["H/s", "KH/s", "MH/s", "GH/s", "TH/s", "PH/s", "EH/s", "ZH/s"]


def to_hash_per_second(value: float, unit: str) -> float:
    """
    Convert a hashrate magnitude to H/s.

    Unknown units are treated as plain H/s.

    Args:
        value: Hashrate magnitude
        unit: Unit label (H, KH, MH, GH, TH, PH, EH)

    Returns:
        Hashrate in H/s
    """
    return value * HASHRATE_MULTIPLIERS.get(unit, 1)


def format_compact(hashrate_hps: float, decimals: int = 2) -> str:
    """Render a H/s value with the largest fitting unit, e.g. "1.50 EH/s"."""
    unit_index = 0
    value = hashrate_hps

    while value >= 1000 and unit_index < len(HASHRATE_DISPLAY_UNITS) - 1:
        value /= 1000
        unit_index += 1

    return f"{value:.{decimals}f} {HASHRATE_DISPLAY_UNITS[unit_index]}"
