"""CSV export of projection tables."""

import csv
import io
from typing import Sequence

from poolrev.engine.formatters import to_exponential
from poolrev.models.projection import ProjectionParams, ProjectionPoint


CSV_COLUMNS = [
    "Date",
    "Period",
    "Pool Hashrate H/s",
    "Network Hashrate H/s",
    "Share %",
    "Period Revenue BTC",
    "Cumulative Revenue BTC",
]


def _plain(value: float) -> str:
    """Shortest round-trippable text for a parameter value."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _metadata_lines(params: ProjectionParams) -> list[str]:
    return [
        "# Pool Revenue Projection",
        f"# Start Date: {params.start_date.isoformat()}",
        f"# End Date: {params.end_date.isoformat()}",
        f"# Granularity: {params.granularity}",
        f"# Pool Hashrate (H/s): {to_exponential(params.pool_hashrate_hps, 3)}",
        f"# Network Hashrate (H/s): {to_exponential(params.network_hashrate_hps, 3)}",
        f"# Block Reward (BTC): {_plain(params.block_reward_btc)}",
        f"# Pool Fee (%): {_plain(params.pool_fee_percent)}",
        f"# Pool Growth (%/month): {_plain(params.pool_growth_percent_per_month)}",
        f"# Network Growth (%/month): {_plain(params.network_growth_percent_per_month)}",
    ]


def projection_to_csv(params: ProjectionParams, points: Sequence[ProjectionPoint]) -> str:
    """
    Serialize a projection to CSV text.

    Commented metadata lines record the parameters, followed by the header
    and one row per point. No timestamps are embedded, so the same inputs
    always produce the same bytes.
    """
    buffer = io.StringIO()
    for line in _metadata_lines(params):
        buffer.write(line + "\n")

    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for point in points:
        writer.writerow(
            [
                point.date.isoformat(),
                point.period,
                to_exponential(point.pool_hashrate, 3),
                to_exponential(point.network_hashrate, 3),
                f"{point.share_percent:.6f}",
                f"{point.period_revenue:.8f}",
                f"{point.cumulative_revenue:.8f}",
            ]
        )

    return buffer.getvalue()
