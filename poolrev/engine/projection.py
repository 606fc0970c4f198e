"""Forward projection of pool revenue under compound hashrate growth."""

import math
from datetime import date, timedelta
from typing import List

from poolrev.engine.mining import calculate_daily_btc_hashrate_ratio, calculate_network_share
from poolrev.models.projection import ProjectionParams, ProjectionPoint


# Months are fixed 30-day units for growth purposes
DAYS_PER_MONTH = 30

# (period length in days, fraction of a month per period)
PERIOD_SETTINGS = {
    "daily": (1, 1 / DAYS_PER_MONTH),
    "weekly": (7, 7 / DAYS_PER_MONTH),
    "monthly": (DAYS_PER_MONTH, 1.0),
}

# Upper bound on emitted periods, whatever the date range
MAX_PERIODS = {
    "daily": 365,
    "weekly": 104,
    "monthly": 36,
}

PERIOD_LABELS = {
    "daily": "Day",
    "weekly": "Week",
    "monthly": "Month",
}


def compound_growth_factor(growth_percent: float, months: float) -> float:
    """
    Growth multiplier after `months` of compound monthly growth.

    Overflow yields inf and a negative base yields NaN, matching plain
    float arithmetic instead of raising.
    """
    try:
        return math.pow(1 + growth_percent / 100, months)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def format_display_date(value: date) -> str:
    """Short display date, e.g. 'Mar 2, 2026'."""
    return f"{value:%b} {value.day}, {value.year}"


def count_periods(start_date: date, end_date: date, granularity: str) -> int:
    """Number of periods the range spans, before the per-granularity cap."""
    period_days, _ = PERIOD_SETTINGS[granularity]
    total_days = (end_date - start_date).days
    if total_days <= 0:
        return 0
    return math.ceil(total_days / period_days)


def project(params: ProjectionParams) -> List[ProjectionPoint]:
    """
    Project per-period and cumulative pool fee revenue.

    Growth is anchored at period 1: period N has had N * month_fraction
    months of compound growth applied, so even the first point reflects
    partial growth. Daily BTC always uses the hashrate-ratio formula since
    future difficulty is not modelled. The block reward is constant over
    the whole horizon.

    Args:
        params: Starting hashrates, reward, fee, growth rates and date range

    Returns:
        Points ordered by period and date; empty when end_date < start_date
    """
    period_days, month_fraction = PERIOD_SETTINGS[params.granularity]
    label = PERIOD_LABELS[params.granularity]

    total_periods = count_periods(params.start_date, params.end_date, params.granularity)
    total_periods = min(total_periods, MAX_PERIODS[params.granularity])

    points: List[ProjectionPoint] = []
    cumulative_revenue = 0.0

    for period in range(1, total_periods + 1):
        period_date = params.start_date + timedelta(days=(period - 1) * period_days)
        if period_date > params.end_date:
            break

        months_elapsed = period * month_fraction

        pool_hashrate = params.pool_hashrate_hps * compound_growth_factor(
            params.pool_growth_percent_per_month, months_elapsed
        )
        network_hashrate = params.network_hashrate_hps * compound_growth_factor(
            params.network_growth_percent_per_month, months_elapsed
        )

        share_percent = calculate_network_share(pool_hashrate, network_hashrate)
        daily_btc = calculate_daily_btc_hashrate_ratio(
            pool_hashrate, network_hashrate, params.block_reward_btc
        )
        period_btc = daily_btc * period_days
        period_revenue = period_btc * (params.pool_fee_percent / 100)
        cumulative_revenue += period_revenue

        points.append(
            ProjectionPoint(
                period=period,
                date=period_date,
                label=f"{label} {period}",
                display_date=format_display_date(period_date),
                pool_hashrate=pool_hashrate,
                network_hashrate=network_hashrate,
                share_percent=share_percent,
                daily_btc=daily_btc,
                period_btc=period_btc,
                period_revenue=period_revenue,
                cumulative_revenue=cumulative_revenue,
                months_elapsed=months_elapsed,
            )
        )

    return points
