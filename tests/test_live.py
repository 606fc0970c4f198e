"""Tests for the mempool.space collaborator and /v1/live endpoint."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch, Mock

import httpx
import pytest
from fastapi.testclient import TestClient

from poolrev.main import create_app
from poolrev.engine.cache import TTLCache
from poolrev.engine.live_data import LiveDataError, LiveDataService, estimate_hashrate_hps


class FakeClock:
    def __init__(self):
        self.current = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.current

    def advance(self, seconds):
        self.current += timedelta(seconds=seconds)


MEMPOOL_PAYLOADS = {
    "/api/v1/prices": {"USD": 95000.50, "EUR": 88000.25},
    "/api/v1/mining/hashrate/3d": {
        "currentHashrate": 6.5e20,
        "currentDifficulty": 95672703408223.94,
    },
    "/api/blocks/tip/height": "825000",
    "/api/v1/blocks": [
        {"extras": {"totalFees": 25000000}},  # 0.25 BTC in sats
        {"extras": {"totalFees": 30000000}},  # 0.30 BTC in sats
        {"extras": {"totalFees": 28000000}},  # 0.28 BTC in sats
    ],
    "/api/v1/difficulty-adjustment": {
        "progressPercent": 42.5,
        "difficultyChange": 1.8,
        "remainingBlocks": 1159,
        "remainingTime": 695400000,
        "nextRetargetHeight": 826560,
        "estimatedRetargetDate": 1767900000000,
    },
}


def mempool_mock(overrides=None, failing=()):
    """Build an httpx.get side effect serving canned mempool.space payloads."""
    payloads = dict(MEMPOOL_PAYLOADS)
    payloads.update(overrides or {})

    def mock_response(url, **kwargs):
        response = Mock()
        path = next(p for p in payloads if url.endswith(p))

        if path in failing:
            response.raise_for_status = Mock(
                side_effect=httpx.HTTPStatusError(
                    "503 Server Error", request=Mock(), response=Mock()
                )
            )
            return response

        response.raise_for_status = Mock()
        payload = payloads[path]
        if isinstance(payload, str):
            response.text = payload
        else:
            response.json = Mock(return_value=payload)
        return response

    return mock_response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(clock):
    return LiveDataService(base_url="https://mempool.test", cache=TTLCache(30, clock=clock))


def test_live_data_full_success(service):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock()
        data = service.fetch_live_data()

    assert data.source == "mempool.space"
    assert data.updated_at == "2026-01-01T00:00:00+00:00"
    assert data.btc_price_usd == 95000.50
    assert data.btc_price_eur == 88000.25
    assert data.block_height == 825000
    assert data.block_subsidy_btc == 6.25
    assert data.network_hashrate_hps == 6.5e20
    assert data.difficulty == 95672703408223.94
    assert data.avg_fees_btc_per_block == round((0.25 + 0.30 + 0.28) / 3, 8)
    assert data.fee_window_blocks == 3
    assert data.difficulty_adjustment.progress_percent == 42.5
    assert data.difficulty_adjustment.next_retarget_height == 826560

    assert any("Block subsidy computed" in note for note in data.notes)
    assert any("Converted fees from satoshis to BTC" in note for note in data.notes)


def test_live_data_partial_failure_prices(service):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock(failing={"/api/v1/prices"})
        data = service.fetch_live_data()

    assert data.btc_price_usd is None
    assert data.btc_price_eur is None
    assert data.block_height == 825000
    assert data.network_hashrate_hps == 6.5e20
    assert any("Failed to fetch prices" in note for note in data.notes)


def test_live_data_missing_eur_price(service):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock({"/api/v1/prices": {"USD": 95000.50}})
        data = service.fetch_live_data()

    assert data.btc_price_usd == 95000.50
    assert data.btc_price_eur is None
    assert any("EUR price not available" in note for note in data.notes)


def test_live_data_hashrate_estimated_from_difficulty(service):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock(
            {"/api/v1/mining/hashrate/3d": {"currentDifficulty": 60000000000000.0}}
        )
        data = service.fetch_live_data()

    assert data.difficulty == 60000000000000.0
    assert data.network_hashrate_hps == 60000000000000.0 * (2**32) / 600
    assert any("estimated from difficulty" in note for note in data.notes)


def test_live_data_mining_stats_failure(service):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock(failing={"/api/v1/mining/hashrate/3d"})
        data = service.fetch_live_data()

    assert data.difficulty is None
    assert data.network_hashrate_hps is None
    assert data.block_subsidy_btc == 6.25
    assert any("Failed to fetch hashrate and difficulty" in note for note in data.notes)


def test_live_data_block_fees_failure(service):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock(failing={"/api/v1/blocks"})
        data = service.fetch_live_data()

    assert data.avg_fees_btc_per_block is None
    assert data.fee_window_blocks is None
    assert any("Failed to fetch block fees" in note for note in data.notes)


def test_live_data_fee_unit_conversion(service):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock(
            {
                "/api/v1/blocks": [
                    {"fee": 25000000},
                    {"fee": 30000000},
                    {"fee": 28000000},
                ]
            }
        )
        data = service.fetch_live_data()

    assert data.avg_fees_btc_per_block == round((0.25 + 0.30 + 0.28) / 3, 8)
    assert data.fee_window_blocks == 3


def test_live_data_far_future_block_height(service):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock({"/api/blocks/tip/height": "8400000"})
        data = service.fetch_live_data()

    assert data.block_height == 8400000
    assert data.block_subsidy_btc == 0.0


def test_live_data_served_from_cache_within_ttl(service, clock):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock()
        first = service.fetch_live_data()
        calls = mock_get.call_count

        clock.advance(10)
        second = service.fetch_live_data()

        assert mock_get.call_count == calls
        assert second == first


def test_live_data_refetched_after_ttl(service, clock):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock()
        service.fetch_live_data()
        calls = mock_get.call_count

        clock.advance(31)
        data = service.fetch_live_data()

        assert mock_get.call_count == calls * 2
        assert data.updated_at == clock.current.isoformat()


def test_live_data_stale_cache_fallback(service, clock):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock()
        cached_timestamp = service.fetch_live_data().updated_at

    clock.advance(61)

    with patch("httpx.get") as mock_get:
        mock_get.side_effect = httpx.ConnectError("Connection failed")
        data = service.fetch_live_data()

    assert data.btc_price_usd == 95000.50
    assert data.block_height == 825000
    assert data.block_subsidy_btc == 6.25
    assert any("Using cached data" in note for note in data.notes)
    assert any(cached_timestamp in note for note in data.notes)


def test_live_data_no_cache_all_fail(service):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = httpx.ConnectError("Connection failed")
        data = service.fetch_live_data()

    assert data.btc_price_usd is None
    assert data.block_height is None
    assert data.block_subsidy_btc is None
    assert data.network_hashrate_hps is None
    assert any("No cached data available" in note for note in data.notes)
    # Empty responses are not cached
    assert service.cache.get() is None


def test_current_snapshot(service, clock):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock()
        snapshot = service.current_snapshot()

    assert snapshot.network_hashrate == 6.5e20
    assert snapshot.block_subsidy == 6.25
    assert snapshot.avg_block_fees == round((0.25 + 0.30 + 0.28) / 3, 8)
    assert snapshot.btc_price_usd == 95000.50
    assert snapshot.observed_at == clock.current


def test_current_snapshot_unavailable(service):
    with patch("httpx.get") as mock_get:
        mock_get.side_effect = httpx.ConnectError("Connection failed")
        with pytest.raises(LiveDataError):
            service.current_snapshot()


def test_estimate_hashrate_hps():
    assert estimate_hashrate_hps(None) is None
    assert estimate_hashrate_hps(600.0) == 2**32


def test_live_endpoint(service):
    client = TestClient(create_app(service))

    with patch("httpx.get") as mock_get:
        mock_get.side_effect = mempool_mock()
        response = client.get("/v1/live")

    assert response.status_code == 200
    data = response.json()
    assert data["block_subsidy_btc"] == 6.25
    assert data["network_hashrate_hps"] == 6.5e20
    assert data["difficulty_adjustment"]["remaining_blocks"] == 1159
