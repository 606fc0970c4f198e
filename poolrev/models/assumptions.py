from pydantic import BaseModel, Field
from poolrev.core.config import ASSUMPTIONS_VERSION
from poolrev.engine.mining import BLOCKS_PER_DAY, DEFAULT_LUCK_FACTOR, DEFAULT_TX_FEE_RATIO
from poolrev.engine.projection import DAYS_PER_MONTH, MAX_PERIODS
from poolrev.engine.reward import HALVING_INTERVAL_BLOCKS


class Assumptions(BaseModel):
    """Model constants and their version."""

    assumptions_version: str = Field(
        default=ASSUMPTIONS_VERSION,
        description="Version identifier for the calculation methodology",
    )
    blocks_per_day: int = Field(
        default=BLOCKS_PER_DAY,
        description="Expected number of blocks mined per day",
    )
    halving_interval_blocks: int = Field(
        default=HALVING_INTERVAL_BLOCKS,
        description="Blocks between subsidy halvings",
    )
    days_per_month: int = Field(
        default=DAYS_PER_MONTH,
        description="Fixed month length used for growth rates",
    )
    max_periods: dict[str, int] = Field(
        default_factory=lambda: dict(MAX_PERIODS),
        description="Maximum projection points per granularity",
    )
    default_tx_fee_ratio: float = Field(
        default=DEFAULT_TX_FEE_RATIO,
        description="Tx fee share of the reward assumed by PPS+",
    )
    default_luck_factor: float = Field(
        default=DEFAULT_LUCK_FACTOR,
        description="Pool luck multiplier assumed by PPLNS",
    )
    simplifications: list[str] = Field(
        default=[
            "Block reward held constant over projections (future halvings not modeled)",
            "Projections use the hashrate-ratio formula (future difficulty not modeled)",
            "Months are fixed 30-day units for growth rates",
            "Growth compounds from period 1, so the first period already includes partial growth",
            "PPLNS luck is a fixed multiplier, not a variance model",
        ],
        description="Known simplifications in the current model",
    )


def get_default_assumptions() -> Assumptions:
    """Get the default assumptions for calculations."""
    return Assumptions()
