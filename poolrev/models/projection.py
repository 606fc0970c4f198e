from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


Granularity = Literal["daily", "weekly", "monthly"]


class ProjectionParams(BaseModel):
    """Inputs for a forward revenue projection."""

    model_config = ConfigDict(frozen=True)

    pool_hashrate_hps: float = Field(..., description="Pool hashrate at the start in H/s")
    network_hashrate_hps: float = Field(..., description="Network hashrate at the start in H/s")
    block_reward_btc: float = Field(
        ..., description="Subsidy plus fees per block in BTC, constant over the horizon"
    )
    pool_fee_percent: float = Field(..., description="Pool fee percentage (e.g. 2 for 2%)")
    pool_growth_percent_per_month: float = Field(
        default=0.0, description="Compound monthly growth of pool hashrate in percent"
    )
    network_growth_percent_per_month: float = Field(
        default=0.0, description="Compound monthly growth of network hashrate in percent"
    )
    start_date: date = Field(..., description="First period date")
    end_date: date = Field(..., description="Last date a period may start on")
    granularity: Granularity = Field(default="monthly", description="Period bucket size")


class ProjectionPoint(BaseModel):
    """One period of a forward projection."""

    model_config = ConfigDict(frozen=True)

    period: int = Field(..., description="1-based sequential period number")
    date: date
    label: str = Field(..., description="Chronological label, e.g. 'Month 3'")
    display_date: str = Field(..., description="Short display date, e.g. 'Mar 2, 2026'")
    pool_hashrate: float = Field(..., description="Projected pool hashrate in H/s")
    network_hashrate: float = Field(..., description="Projected network hashrate in H/s")
    share_percent: float = Field(..., description="Pool share of network hashrate in percent")
    daily_btc: float = Field(..., description="BTC mined by the pool per day")
    period_btc: float = Field(..., description="BTC mined by the pool over the period")
    period_revenue: float = Field(..., description="Pool fee revenue over the period in BTC")
    cumulative_revenue: float = Field(..., description="Running fee revenue in BTC")
    months_elapsed: float = Field(..., description="Growth exponent in 30-day months")


class QuarterSummary(BaseModel):
    """Calendar-quarter roll-up of projection points."""

    model_config = ConfigDict(frozen=True)

    year: int
    quarter: int = Field(..., ge=1, le=4)
    label: str = Field(..., description="e.g. 'Q1 2026'")
    revenue: float = Field(..., description="Sum of period revenue in BTC")
    end_share_percent: float = Field(..., description="Share of the last point in the quarter")
    end_pool_hashrate: float = Field(..., description="Pool hashrate of the last point in H/s")
    cumulative_at_end: float = Field(..., description="Cumulative revenue at the last point")
    period_count: int
