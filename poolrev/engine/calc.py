"""Main calculation orchestration."""

import logging
import math

from poolrev.core.config import ASSUMPTIONS_VERSION
from poolrev.models.projection import ProjectionParams
from poolrev.models.requests import PoolInputs, ProjectionRequest
from poolrev.models.responses import (
    CalculationResponse,
    EarningsProjection,
    PayoutModelRevenue,
    ProjectionResponse,
)
from poolrev.models.snapshot import NetworkSnapshot
from poolrev.engine.units import to_hash_per_second
from poolrev.engine.reward import effective_tx_fees, total_reward
from poolrev.engine.mining import (
    calculate_daily_btc,
    calculate_network_share,
    calculate_expected_blocks_per_day,
    calculate_all_payout_models,
    project_earnings,
    btc_to_sats,
    btc_to_usd,
)
from poolrev.engine.projection import project
from poolrev.engine.quarterly import summarize
from poolrev.engine.formatters import (
    format_btc,
    format_difficulty,
    format_hashrate,
    format_percent,
    format_usd,
)


logger = logging.getLogger(__name__)


def block_reward_for(inputs: PoolInputs, snapshot: NetworkSnapshot) -> tuple[float, float]:
    """
    Resolve the per-block tx fees and total block reward.

    Returns:
        (tx_fees_btc, block_reward_btc)
    """
    tx_fees = effective_tx_fees(snapshot.avg_block_fees, inputs.tx_fee_override)
    return tx_fees, total_reward(snapshot.block_subsidy, tx_fees)


def calculate_pool_revenue(inputs: PoolInputs, snapshot: NetworkSnapshot) -> CalculationResponse:
    """
    Perform the current-period pool revenue calculation.

    Args:
        inputs: Pool hashrate, fee and formula choice
        snapshot: Network state to calculate against

    Returns:
        Calculation response with results, formatted values and notes
    """
    hashrate_hps = to_hash_per_second(inputs.hashrate, inputs.hashrate_unit)
    tx_fees, block_reward = block_reward_for(inputs, snapshot)

    daily_btc = calculate_daily_btc(
        formula_type=inputs.formula_type,
        hashrate_hps=hashrate_hps,
        difficulty=snapshot.difficulty,
        network_hashrate_hps=snapshot.network_hashrate,
        block_reward_btc=block_reward,
    )
    share_percent = calculate_network_share(hashrate_hps, snapshot.network_hashrate)
    expected_blocks = calculate_expected_blocks_per_day(hashrate_hps, snapshot.network_hashrate)

    # Headline revenue: pool keeps fee% of everything mined
    pool_revenue = daily_btc * (inputs.pool_fee_percent / 100)
    revenue_btc = project_earnings(pool_revenue)
    revenue_sats = {horizon: btc_to_sats(value) for horizon, value in revenue_btc.items()}
    revenue_usd = {
        horizon: btc_to_usd(value, snapshot.btc_price_usd) for horizon, value in revenue_btc.items()
    }

    payout_models = calculate_all_payout_models(
        daily_btc,
        inputs.pool_fee_percent,
        tx_fee_ratio=inputs.tx_fee_ratio,
        luck_factor=inputs.luck_factor,
    )

    if inputs.formula_type == "difficulty":
        equation = "(Hash × Reward × 86400) ÷ (Diff × 2³²)"
        substituted = f"{format_btc(daily_btc)} BTC/day"
    else:
        equation = "(Hashrate ÷ Network) × 144 × Reward"
        substituted = (
            f"{format_percent(share_percent)} × 144 × {block_reward:g} = "
            f"{format_btc(daily_btc)} BTC/day"
        )

    display = {
        "pool_hashrate": f"{inputs.hashrate:g} {inputs.hashrate_unit}/s",
        "network_hashrate": format_hashrate(snapshot.network_hashrate),
        "difficulty": format_difficulty(snapshot.difficulty),
        "share": format_percent(share_percent),
        "share_equation": (
            f"{inputs.hashrate:g} {inputs.hashrate_unit}/s ÷ "
            f"{format_hashrate(snapshot.network_hashrate)} = {format_percent(share_percent)}"
        ),
        "fee_equation": (
            f"{format_btc(daily_btc)} BTC/day × {inputs.pool_fee_percent:g}% = "
            f"{format_btc(pool_revenue)} BTC"
        ),
        "formula_equation": equation,
        "formula_values": substituted,
        "daily_revenue_btc": format_btc(pool_revenue),
        "daily_revenue_usd": format_usd(revenue_usd["daily"]),
    }

    notes = [
        "Pool revenue is the pool fee applied to all BTC mined (FPPS-style)",
        "Expected values; actual block discovery is random",
    ]
    if inputs.tx_fee_override is not None:
        notes.append("Transaction fees taken from user override")
    else:
        notes.append("Transaction fees taken from recent block average")
    if not snapshot.btc_price_usd:
        notes.append("BTC price unavailable; USD values are zero")

    return CalculationResponse(
        assumptions_version=ASSUMPTIONS_VERSION,
        formula_type=inputs.formula_type,
        pool_hashrate_hps=hashrate_hps,
        network_hashrate_hps=snapshot.network_hashrate,
        difficulty=snapshot.difficulty,
        block_subsidy_btc=snapshot.block_subsidy,
        tx_fees_btc=tx_fees,
        block_reward_btc=block_reward,
        share_percent=share_percent,
        expected_blocks_per_day=expected_blocks,
        daily_btc_mined=daily_btc,
        pool_revenue_btc=EarningsProjection(**revenue_btc),
        pool_revenue_sats=EarningsProjection(**revenue_sats),
        pool_revenue_usd=EarningsProjection(**revenue_usd),
        payout_models=PayoutModelRevenue(**payout_models),
        display=display,
        notes=notes,
    )


def projection_params_for(request: ProjectionRequest, snapshot: NetworkSnapshot) -> ProjectionParams:
    """Derive engine parameters from a projection request and network state."""
    _, block_reward = block_reward_for(request.pool, snapshot)
    return ProjectionParams(
        pool_hashrate_hps=to_hash_per_second(request.pool.hashrate, request.pool.hashrate_unit),
        network_hashrate_hps=snapshot.network_hashrate,
        block_reward_btc=block_reward,
        pool_fee_percent=request.pool.pool_fee_percent,
        pool_growth_percent_per_month=request.pool_growth_percent_per_month,
        network_growth_percent_per_month=request.network_growth_percent_per_month,
        start_date=request.start_date,
        end_date=request.end_date,
        granularity=request.granularity,
    )


def build_projection(request: ProjectionRequest, snapshot: NetworkSnapshot) -> ProjectionResponse:
    """
    Run the forward projection and quarterly roll-up for a request.

    The full sequence is always computed; only the requested page of
    points is returned, while quarters and totals cover everything.
    """
    params = projection_params_for(request, snapshot)
    points = project(params)
    quarters = summarize(points)
    logger.debug(
        "Projected %d %s points into %d quarters", len(points), params.granularity, len(quarters)
    )

    total_pages = max(1, math.ceil(len(points) / request.page_size))
    offset = (request.page - 1) * request.page_size
    page_points = points[offset:offset + request.page_size]

    notes = ["Projections use the hashrate-ratio formula regardless of the selected formula"]
    if request.pool.formula_type == "difficulty":
        notes.append("Future difficulty is not modeled, so the difficulty formula is not used here")

    return ProjectionResponse(
        params=params,
        total_points=len(points),
        total_revenue_btc=points[-1].cumulative_revenue if points else 0.0,
        page=request.page,
        page_size=request.page_size,
        total_pages=total_pages,
        points=page_points,
        quarters=quarters,
        notes=notes,
    )
