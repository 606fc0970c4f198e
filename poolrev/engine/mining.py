"""Bitcoin mining revenue formulas and pool payout models."""

from typing import Dict, Optional


SECONDS_PER_DAY = 86400
BLOCKS_PER_DAY = 144  # One block every ~10 minutes
TWO_POW_32 = 2**32
SATS_PER_BTC = 100_000_000

DEFAULT_TX_FEE_RATIO = 0.03
DEFAULT_LUCK_FACTOR = 1.0


def calculate_daily_btc_difficulty(
    hashrate_hps: float,
    difficulty: Optional[float],
    block_reward_btc: float,
) -> float:
    """
    Calculate daily BTC mined from network difficulty.

    Daily BTC = (hashrate * block reward * 86400) / (difficulty * 2^32)

    Args:
        hashrate_hps: Pool hashrate in H/s
        difficulty: Current network difficulty
        block_reward_btc: Subsidy plus fees per block in BTC

    Returns:
        Expected BTC mined per day, 0 when difficulty is missing or zero
    """
    if not difficulty:
        return 0.0

    return (hashrate_hps * block_reward_btc * SECONDS_PER_DAY) / (difficulty * TWO_POW_32)


def calculate_daily_btc_hashrate_ratio(
    hashrate_hps: float,
    network_hashrate_hps: Optional[float],
    block_reward_btc: float,
    blocks_per_day: int = BLOCKS_PER_DAY,
) -> float:
    """
    Calculate daily BTC mined from the pool's share of network hashrate.

    Daily BTC = (hashrate / network hashrate) * 144 * block reward

    Args:
        hashrate_hps: Pool hashrate in H/s
        network_hashrate_hps: Network hashrate in H/s
        block_reward_btc: Subsidy plus fees per block in BTC
        blocks_per_day: Expected blocks per day (default 144)

    Returns:
        Expected BTC mined per day, 0 when network hashrate is missing or zero
    """
    if not network_hashrate_hps:
        return 0.0

    our_share = hashrate_hps / network_hashrate_hps
    return our_share * blocks_per_day * block_reward_btc


def calculate_daily_btc(
    formula_type: str,
    hashrate_hps: float,
    difficulty: Optional[float],
    network_hashrate_hps: Optional[float],
    block_reward_btc: float,
) -> float:
    """Dispatch to the difficulty formula or, for any other value, the hashrate-ratio one."""
    if formula_type == "difficulty":
        return calculate_daily_btc_difficulty(hashrate_hps, difficulty, block_reward_btc)
    return calculate_daily_btc_hashrate_ratio(hashrate_hps, network_hashrate_hps, block_reward_btc)


def calculate_network_share(hashrate_hps: float, network_hashrate_hps: Optional[float]) -> float:
    """Calculate pool share of network hashrate in percent."""
    if not network_hashrate_hps:
        return 0.0
    return (hashrate_hps / network_hashrate_hps) * 100


def calculate_expected_blocks_per_day(
    hashrate_hps: float,
    network_hashrate_hps: Optional[float],
) -> float:
    """Calculate how many blocks the pool should find per day on average."""
    if not network_hashrate_hps:
        return 0.0
    return (hashrate_hps / network_hashrate_hps) * BLOCKS_PER_DAY


# Payout models. Each returns the POOL OPERATOR's fee revenue in BTC/day.


def calculate_pps_plus_revenue(
    daily_btc: float,
    fee_percent: float,
    tx_fee_ratio: float = DEFAULT_TX_FEE_RATIO,
) -> float:
    """
    PPS+ (Pay Per Share Plus).

    The pool keeps its fee on the block subsidy only; transaction fees
    pass through to miners.

    Args:
        daily_btc: Total daily BTC mined by the pool
        fee_percent: Pool fee percentage (e.g. 2 for 2%)
        tx_fee_ratio: Share of the reward that is transaction fees
    """
    subsidy_portion = daily_btc * (1 - tx_fee_ratio)
    return subsidy_portion * (fee_percent / 100)


def calculate_fpps_revenue(daily_btc: float, fee_percent: float) -> float:
    """FPPS (Full Pay Per Share): fee on subsidy and transaction fees."""
    return daily_btc * (fee_percent / 100)


def calculate_pplns_revenue(
    daily_btc: float,
    fee_percent: float,
    luck_factor: float = DEFAULT_LUCK_FACTOR,
) -> float:
    """
    PPLNS (Pay Per Last N Shares).

    Variance is shared with miners, so revenue scales with pool luck
    (1.0 = average, >1 lucky, <1 unlucky).
    """
    actual_btc = daily_btc * luck_factor
    return actual_btc * (fee_percent / 100)


def calculate_proportional_revenue(daily_btc: float, fee_percent: float) -> float:
    """Proportional: flat fee on all rewards."""
    return daily_btc * (fee_percent / 100)


def calculate_all_payout_models(
    daily_btc: float,
    fee_percent: float,
    tx_fee_ratio: float = DEFAULT_TX_FEE_RATIO,
    luck_factor: float = DEFAULT_LUCK_FACTOR,
) -> Dict[str, float]:
    """Calculate operator revenue under every supported payout model."""
    return {
        "pps_plus": calculate_pps_plus_revenue(daily_btc, fee_percent, tx_fee_ratio),
        "fpps": calculate_fpps_revenue(daily_btc, fee_percent),
        "pplns": calculate_pplns_revenue(daily_btc, fee_percent, luck_factor),
        "proportional": calculate_proportional_revenue(daily_btc, fee_percent),
    }


def project_earnings(daily_btc: float) -> Dict[str, float]:
    """Scale a daily amount to week, 30-day month and 365-day year."""
    return {
        "daily": daily_btc,
        "weekly": daily_btc * 7,
        "monthly": daily_btc * 30,
        "yearly": daily_btc * 365,
    }


def btc_to_sats(btc: float) -> int:
    """Convert BTC to whole satoshis."""
    return round(btc * SATS_PER_BTC)


def btc_to_usd(btc: float, btc_price_usd: float) -> float:
    """Convert BTC to USD."""
    return btc * btc_price_usd
