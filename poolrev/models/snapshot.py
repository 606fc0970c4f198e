from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NetworkSnapshot(BaseModel):
    """Point-in-time Bitcoin network state consumed by the calculators."""

    model_config = ConfigDict(frozen=True)

    network_hashrate: float = Field(..., description="Network hashrate in H/s")
    difficulty: float = Field(..., description="Current network difficulty")
    block_height: int = Field(default=0, description="Blockchain tip height")
    block_subsidy: float = Field(..., description="Block subsidy in BTC")
    avg_block_fees: float = Field(default=0.0, description="Average tx fees per block in BTC")
    btc_price_usd: float = Field(default=0.0, description="BTC price in USD")
    observed_at: datetime = Field(..., description="When the data was fetched")
