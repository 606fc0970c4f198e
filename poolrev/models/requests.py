from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

from poolrev.models.projection import Granularity
from poolrev.models.snapshot import NetworkSnapshot


HashrateUnit = Literal["H", "KH", "MH", "GH", "TH", "PH", "EH"]
FormulaType = Literal["difficulty", "hashrate"]


class PoolInputs(BaseModel):
    """User-supplied pool parameters."""

    hashrate: float = Field(..., ge=0, description="Pool hashrate magnitude")
    hashrate_unit: HashrateUnit = Field(default="PH", description="Unit of the hashrate magnitude")
    pool_fee_percent: float = Field(default=2.0, ge=0, description="Pool fee percentage (e.g. 2 for 2%)")
    formula_type: FormulaType = Field(
        default="hashrate",
        description="Daily BTC formula: difficulty-based or hashrate-ratio",
    )
    tx_fee_override: Optional[float] = Field(
        default=None,
        ge=0,
        description="Average tx fees per block in BTC (replaces the observed average)",
    )
    tx_fee_ratio: float = Field(
        default=0.03, ge=0, le=1, description="Share of the reward that is tx fees (PPS+)"
    )
    luck_factor: float = Field(default=1.0, ge=0, description="Pool luck multiplier (PPLNS)")


class CalculationRequest(BaseModel):
    """Request model for the current-period revenue calculation."""

    pool: PoolInputs
    network: Optional[NetworkSnapshot] = Field(
        default=None,
        description="Network state to use (defaults to live mempool.space data)",
    )


class ProjectionRequest(BaseModel):
    """Request model for a forward revenue projection."""

    pool: PoolInputs
    network: Optional[NetworkSnapshot] = Field(
        default=None,
        description="Network state to start from (defaults to live mempool.space data)",
    )
    pool_growth_percent_per_month: float = Field(default=0.0, description="Pool hashrate growth %/month")
    network_growth_percent_per_month: float = Field(
        default=0.0, description="Network hashrate growth %/month"
    )
    start_date: date
    end_date: date
    granularity: Granularity = Field(default="monthly")
    page: int = Field(default=1, ge=1, description="1-based page of projection points")
    page_size: int = Field(default=50, ge=1, le=500, description="Points per page")
