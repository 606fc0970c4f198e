"""Block reward model: halving-epoch subsidy plus transaction fees."""

from typing import Optional


INITIAL_SUBSIDY_BTC = 50.0
HALVING_INTERVAL_BLOCKS = 210_000
# After 34 halvings the subsidy is below one satoshi
MAX_HALVINGS = 34


def subsidy_at_height(block_height: int) -> float:
    """
    Calculate the block subsidy for a given block height.

    Bitcoin started with 50 BTC per block and halves every 210,000 blocks.

    Args:
        block_height: Blockchain height

    Returns:
        Block subsidy in BTC
    """
    halvings = block_height // HALVING_INTERVAL_BLOCKS

    if halvings >= MAX_HALVINGS:
        return 0.0

    # Round to 8 decimals to avoid float artifacts (BTC precision)
    return round(INITIAL_SUBSIDY_BTC / (2**halvings), 8)


def effective_tx_fees(observed_fees_btc: float, override_btc: Optional[float] = None) -> float:
    """Pick the per-block fee contribution; a user override always wins."""
    if override_btc is not None:
        return override_btc
    return observed_fees_btc


def total_reward(subsidy_btc: float, tx_fees_btc: float) -> float:
    """Calculate the total block reward (subsidy + fees) in BTC."""
    return subsidy_btc + tx_fees_btc
