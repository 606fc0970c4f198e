"""Live Bitcoin network data fetcher with caching (mempool.space)."""

import logging
import os
from typing import Optional

import httpx

from poolrev.engine.cache import TTLCache
from poolrev.engine.mining import SATS_PER_BTC
from poolrev.engine.reward import subsidy_at_height
from poolrev.models.responses import DifficultyAdjustment, LiveDataResponse
from poolrev.models.snapshot import NetworkSnapshot


logger = logging.getLogger(__name__)

# Configuration from environment
MEMPOOL_BASE_URL = os.getenv("MEMPOOL_BASE_URL", "https://mempool.space")
CACHE_TTL_SECONDS = int(os.getenv("LIVE_CACHE_TTL_SECONDS", "30"))
HTTP_TIMEOUT_SECONDS = float(os.getenv("LIVE_HTTP_TIMEOUT_SECONDS", "3.0"))

TARGET_BLOCK_SECONDS = 600


class LiveDataError(RuntimeError):
    """Raised when live data is not usable for a calculation."""


def estimate_hashrate_hps(difficulty: Optional[float]) -> Optional[float]:
    """
    Estimate network hashrate in H/s from difficulty.

    hashrate = difficulty * 2^32 / 600 (target block interval)
    """
    if difficulty is None:
        return None
    return difficulty * (2**32) / TARGET_BLOCK_SECONDS


def average_block_fees_btc(blocks: list) -> tuple[Optional[float], int]:
    """
    Average total fees of recent blocks, converted from sats to BTC.

    Accepts either `extras.totalFees` or a flat `fee` field per block.

    Returns:
        (average fees in BTC rounded to 8 decimals, number of blocks used)
    """
    fees_sats = []
    for block in blocks:
        extras = block.get("extras") or {}
        fee = extras.get("totalFees", block.get("fee"))
        if fee is not None:
            fees_sats.append(fee)

    if not fees_sats:
        return None, 0

    avg_btc = sum(fees_sats) / len(fees_sats) / SATS_PER_BTC
    return round(avg_btc, 8), len(fees_sats)


class LiveDataService:
    """
    Fetches network data from mempool.space and caches it.

    Each endpoint is fetched independently; a failing endpoint becomes a
    note on the response instead of an error.
    """

    def __init__(
        self,
        base_url: str = MEMPOOL_BASE_URL,
        cache: Optional[TTLCache[LiveDataResponse]] = None,
        timeout: float = HTTP_TIMEOUT_SECONDS,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache = cache if cache is not None else TTLCache(CACHE_TTL_SECONDS)
        self.timeout = timeout

    def _get(self, path: str) -> httpx.Response:
        response = httpx.get(f"{self.base_url}{path}", timeout=self.timeout)
        response.raise_for_status()
        return response

    def _fetch_prices(self) -> tuple[Optional[float], Optional[float], list[str]]:
        """
        Fetch BTC prices.

        Returns:
            (usd_price, eur_price, notes)
        """
        notes = []
        try:
            data = self._get("/api/v1/prices").json()
            usd = data.get("USD")
            eur = data.get("EUR")

            if usd is None:
                notes.append("USD price not available from mempool")
            if eur is None:
                notes.append("EUR price not available from mempool")

            return usd, eur, notes
        except Exception as e:
            logger.warning("Price fetch failed: %s", e)
            notes.append(f"Failed to fetch prices: {str(e)}")
            return None, None, notes

    def _fetch_mining_stats(self) -> tuple[Optional[float], Optional[float], list[str]]:
        """
        Fetch current network hashrate (H/s) and difficulty.

        Returns:
            (hashrate, difficulty, notes)
        """
        notes = []
        try:
            data = self._get("/api/v1/mining/hashrate/3d").json()
            hashrate = data.get("currentHashrate")
            difficulty = data.get("currentDifficulty")

            if hashrate is None:
                notes.append("Hashrate field not found in mempool response")
            if difficulty is None:
                notes.append("Difficulty field not found in mempool response")

            return (
                float(hashrate) if hashrate is not None else None,
                float(difficulty) if difficulty is not None else None,
                notes,
            )
        except Exception as e:
            logger.warning("Mining stats fetch failed: %s", e)
            notes.append(f"Failed to fetch hashrate and difficulty: {str(e)}")
            return None, None, notes

    def _fetch_tip_height(self) -> tuple[Optional[int], list[str]]:
        """
        Fetch current blockchain tip height.

        Returns:
            (tip_height, notes)
        """
        notes = []
        try:
            # This endpoint returns plain text integer
            tip_height = int(self._get("/api/blocks/tip/height").text.strip())
            return tip_height, notes
        except Exception as e:
            logger.warning("Tip height fetch failed: %s", e)
            notes.append(f"Failed to fetch tip height: {str(e)}")
            return None, notes

    def _fetch_block_fees(self) -> tuple[Optional[float], Optional[int], list[str]]:
        """
        Fetch average tx fees over the most recent blocks.

        Returns:
            (avg_fees_btc, window_blocks, notes)
        """
        notes = []
        try:
            blocks = self._get("/api/v1/blocks").json()
            avg_fees, window = average_block_fees_btc(blocks)
            if avg_fees is None:
                notes.append("Block fee fields not found in mempool response")
                return None, None, notes

            notes.append("Converted fees from satoshis to BTC")
            return avg_fees, window, notes
        except Exception as e:
            logger.warning("Block fee fetch failed: %s", e)
            notes.append(f"Failed to fetch block fees: {str(e)}")
            return None, None, notes

    def _fetch_difficulty_adjustment(self) -> tuple[DifficultyAdjustment, list[str]]:
        """
        Fetch progress towards the next difficulty retarget.

        Returns:
            (DifficultyAdjustment, notes)
        """
        notes = []
        try:
            data = self._get("/api/v1/difficulty-adjustment").json()
            adjustment = DifficultyAdjustment(
                progress_percent=data.get("progressPercent"),
                difficulty_change_percent=data.get("difficultyChange"),
                remaining_blocks=data.get("remainingBlocks"),
                remaining_time_ms=data.get("remainingTime"),
                next_retarget_height=data.get("nextRetargetHeight"),
                estimated_retarget_date_ms=data.get("estimatedRetargetDate"),
            )
            return adjustment, notes
        except Exception as e:
            logger.warning("Difficulty adjustment fetch failed: %s", e)
            notes.append(f"Failed to fetch difficulty adjustment: {str(e)}")
            return DifficultyAdjustment(), notes

    def fetch_live_data(self) -> LiveDataResponse:
        """
        Fetch live Bitcoin network data.

        Returns cached data while it is fresh, and falls back to stale
        cached data if mempool.space is temporarily unavailable.
        """
        cached = self.cache.get()
        if not self.cache.is_expired():
            logger.debug("Serving live data from cache")
            return cached

        notes = []

        usd_price, eur_price, price_notes = self._fetch_prices()
        notes.extend(price_notes)

        hashrate, difficulty, stats_notes = self._fetch_mining_stats()
        notes.extend(stats_notes)

        tip_height, height_notes = self._fetch_tip_height()
        notes.extend(height_notes)

        avg_fees, fee_window, fee_notes = self._fetch_block_fees()
        notes.extend(fee_notes)

        adjustment, adjustment_notes = self._fetch_difficulty_adjustment()
        notes.extend(adjustment_notes)

        has_any_data = any(
            value is not None
            for value in (usd_price, eur_price, hashrate, difficulty, tip_height, avg_fees)
        )

        # If all fetches failed and we have cached data, return it with a note
        if not has_any_data and cached is not None:
            logger.info("mempool.space unreachable, serving stale data from %s", cached.updated_at)
            notes.append(
                f"Using cached data from {cached.updated_at} (mempool temporarily unavailable)"
            )
            return cached.model_copy(update={"notes": notes}, deep=True)

        if not has_any_data:
            notes.append("No cached data available; mempool.space is unreachable")

        block_subsidy = None
        if tip_height is not None:
            block_subsidy = subsidy_at_height(tip_height)
            notes.append("Block subsidy computed from current block height")

        if hashrate is None and difficulty is not None:
            hashrate = estimate_hashrate_hps(difficulty)
            notes.append("Network hashrate estimated from difficulty")

        now = self.cache.now()
        response = LiveDataResponse(
            source="mempool.space",
            updated_at=now.isoformat(),
            btc_price_usd=usd_price,
            btc_price_eur=eur_price,
            block_height=tip_height,
            block_subsidy_btc=block_subsidy,
            difficulty=difficulty,
            network_hashrate_hps=hashrate,
            avg_fees_btc_per_block=avg_fees,
            fee_window_blocks=fee_window,
            difficulty_adjustment=adjustment,
            notes=notes,
        )

        if has_any_data:
            self.cache.set(response)

        return response

    def current_snapshot(self) -> NetworkSnapshot:
        """
        Build a NetworkSnapshot from live data.

        Raises:
            LiveDataError: if network hashrate or block height is unavailable
        """
        data = self.fetch_live_data()
        if data.network_hashrate_hps is None or data.block_subsidy_btc is None:
            raise LiveDataError("; ".join(data.notes) or "Network data unavailable")

        return NetworkSnapshot(
            network_hashrate=data.network_hashrate_hps,
            difficulty=data.difficulty or 0.0,
            block_height=data.block_height,
            block_subsidy=data.block_subsidy_btc,
            avg_block_fees=data.avg_fees_btc_per_block or 0.0,
            btc_price_usd=data.btc_price_usd or 0.0,
            observed_at=self.cache.updated_at or self.cache.now(),
        )
