from pydantic import BaseModel, Field
from typing import Optional, List, Dict

from poolrev.core.config import SERVICE_NAME
from poolrev.models.projection import ProjectionParams, ProjectionPoint, QuarterSummary


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="ok")
    service: str = Field(default=SERVICE_NAME)


class EarningsProjection(BaseModel):
    """A daily amount scaled to longer horizons."""

    daily: float
    weekly: float
    monthly: float = Field(..., description="30 days")
    yearly: float = Field(..., description="365 days")


class PayoutModelRevenue(BaseModel):
    """Pool operator fee revenue per day in BTC under each payout model."""

    pps_plus: float
    fpps: float
    pplns: float
    proportional: float


class CalculationResponse(BaseModel):
    """Response model for the current-period revenue calculation."""

    assumptions_version: str = Field(..., description="Assumptions version used")
    formula_type: str = Field(..., description="Formula used for daily BTC")
    pool_hashrate_hps: float = Field(..., description="Pool hashrate in H/s")
    network_hashrate_hps: float = Field(..., description="Network hashrate in H/s")
    difficulty: float
    block_subsidy_btc: float
    tx_fees_btc: float = Field(..., description="Per-block tx fees used (override or observed)")
    block_reward_btc: float = Field(..., description="Subsidy plus tx fees")
    share_percent: float = Field(..., description="Pool share of network hashrate in percent")
    expected_blocks_per_day: float
    daily_btc_mined: float = Field(..., description="BTC mined by the pool per day")
    pool_revenue_btc: EarningsProjection = Field(..., description="Pool fee revenue in BTC")
    pool_revenue_sats: EarningsProjection = Field(..., description="Pool fee revenue in sats")
    pool_revenue_usd: EarningsProjection = Field(..., description="Pool fee revenue in USD")
    payout_models: PayoutModelRevenue
    display: Dict[str, str] = Field(default_factory=dict, description="Formatted values")
    notes: List[str] = Field(default_factory=list, description="Calculation notes and warnings")


class ProjectionResponse(BaseModel):
    """Response model for a forward revenue projection."""

    params: ProjectionParams
    total_points: int
    total_revenue_btc: float = Field(..., description="Cumulative revenue at the last point")
    page: int
    page_size: int
    total_pages: int
    points: List[ProjectionPoint] = Field(default_factory=list, description="Points on this page")
    quarters: List[QuarterSummary] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)


class DifficultyAdjustment(BaseModel):
    """Progress towards the next difficulty retarget."""

    progress_percent: Optional[float] = Field(None, description="Progress through the epoch")
    difficulty_change_percent: Optional[float] = Field(None, description="Estimated change")
    remaining_blocks: Optional[int] = None
    remaining_time_ms: Optional[int] = None
    next_retarget_height: Optional[int] = None
    estimated_retarget_date_ms: Optional[int] = None


class LiveDataResponse(BaseModel):
    """Live Bitcoin network and market data from mempool.space."""

    source: str = Field(default="mempool.space", description="Data source identifier")
    updated_at: str = Field(..., description="UTC ISO timestamp of data fetch")
    btc_price_usd: Optional[float] = Field(None, description="Current BTC price in USD")
    btc_price_eur: Optional[float] = Field(None, description="Current BTC price in EUR")
    block_height: Optional[int] = Field(None, description="Current blockchain tip height")
    block_subsidy_btc: Optional[float] = Field(
        None, description="Current block subsidy in BTC (computed from block height)"
    )
    difficulty: Optional[float] = Field(None, description="Current network difficulty")
    network_hashrate_hps: Optional[float] = Field(None, description="Network hashrate in H/s")
    avg_fees_btc_per_block: Optional[float] = Field(
        None, description="Average transaction fees per block in BTC (over recent blocks)"
    )
    fee_window_blocks: Optional[int] = Field(
        None, description="Number of recent blocks used for fee average"
    )
    difficulty_adjustment: DifficultyAdjustment = Field(default_factory=DifficultyAdjustment)
    notes: List[str] = Field(default_factory=list, description="Warnings and fallback notes")
