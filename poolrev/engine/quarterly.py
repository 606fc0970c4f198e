"""Calendar-quarter roll-up of projection points."""

from typing import Dict, List, Sequence, Tuple

from poolrev.models.projection import ProjectionPoint, QuarterSummary


def quarter_of(month: int) -> int:
    """Calendar quarter (1-4) for a month number (1-12)."""
    return (month - 1) // 3 + 1


def summarize(points: Sequence[ProjectionPoint]) -> List[QuarterSummary]:
    """
    Group projection points by calendar quarter.

    Quarters keep first-seen order. Revenue is summed over the members;
    share, hashrate and cumulative revenue come from the last member.
    """
    groups: Dict[Tuple[int, int], List[ProjectionPoint]] = {}
    for point in points:
        key = (point.date.year, quarter_of(point.date.month))
        groups.setdefault(key, []).append(point)

    summaries = []
    for (year, quarter), members in groups.items():
        last = members[-1]
        summaries.append(
            QuarterSummary(
                year=year,
                quarter=quarter,
                label=f"Q{quarter} {year}",
                revenue=sum(p.period_revenue for p in members),
                end_share_percent=last.share_percent,
                end_pool_hashrate=last.pool_hashrate,
                cumulative_at_end=last.cumulative_revenue,
                period_count=len(members),
            )
        )

    return summaries
