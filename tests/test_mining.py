"""Revenue formula and payout model tests."""

import pytest

from poolrev.engine.mining import (
    calculate_all_payout_models,
    calculate_daily_btc,
    calculate_daily_btc_difficulty,
    calculate_daily_btc_hashrate_ratio,
    calculate_expected_blocks_per_day,
    calculate_fpps_revenue,
    calculate_network_share,
    calculate_pplns_revenue,
    calculate_pps_plus_revenue,
    calculate_proportional_revenue,
    btc_to_sats,
    btc_to_usd,
    project_earnings,
)


POOL_HPS = 1e17  # 100 PH/s
NETWORK_HPS = 5e20  # 500 EH/s
REWARD = 3.125


def test_hashrate_ratio_formula():
    daily = calculate_daily_btc_hashrate_ratio(POOL_HPS, NETWORK_HPS, REWARD)
    assert daily == (POOL_HPS / NETWORK_HPS) * 144 * REWARD
    assert daily == pytest.approx(0.09)


def test_difficulty_formula_agrees_with_hashrate_ratio():
    # Difficulty consistent with the network hashrate at a 600 s block interval
    difficulty = NETWORK_HPS * 600 / 2**32

    by_difficulty = calculate_daily_btc_difficulty(POOL_HPS, difficulty, REWARD)
    by_ratio = calculate_daily_btc_hashrate_ratio(POOL_HPS, NETWORK_HPS, REWARD)

    assert by_difficulty == pytest.approx(by_ratio, rel=1e-12)


@pytest.mark.parametrize("hashrate", [0, 1e12, 1e17])
def test_zero_denominators_yield_zero(hashrate):
    assert calculate_daily_btc_hashrate_ratio(hashrate, 0, REWARD) == 0
    assert calculate_daily_btc_difficulty(hashrate, 0, REWARD) == 0
    assert calculate_daily_btc_difficulty(hashrate, None, REWARD) == 0
    assert calculate_network_share(hashrate, 0) == 0
    assert calculate_expected_blocks_per_day(hashrate, 0) == 0


def test_dispatcher_selects_formula():
    difficulty = 1e14
    assert calculate_daily_btc("difficulty", POOL_HPS, difficulty, NETWORK_HPS, REWARD) == (
        calculate_daily_btc_difficulty(POOL_HPS, difficulty, REWARD)
    )
    assert calculate_daily_btc("hashrate", POOL_HPS, difficulty, NETWORK_HPS, REWARD) == (
        calculate_daily_btc_hashrate_ratio(POOL_HPS, NETWORK_HPS, REWARD)
    )


def test_share_and_expected_blocks():
    assert calculate_network_share(POOL_HPS, NETWORK_HPS) == pytest.approx(0.02)
    assert calculate_expected_blocks_per_day(POOL_HPS, NETWORK_HPS) == pytest.approx(0.0288)


def test_pool_revenue_scenario():
    """100 PH/s on a 500 EH/s network at 2% fee earns 0.0018 BTC/day."""
    daily = calculate_daily_btc_hashrate_ratio(POOL_HPS, NETWORK_HPS, REWARD)
    assert calculate_fpps_revenue(daily, 2) == pytest.approx(0.0018)


def test_payout_models():
    assert calculate_pps_plus_revenue(1, 2, 0.03) == pytest.approx(0.0194)
    assert calculate_fpps_revenue(1, 2) == pytest.approx(0.02)
    assert calculate_proportional_revenue(1, 2) == pytest.approx(0.02)
    assert calculate_pplns_revenue(1, 2, 1.0) == pytest.approx(0.02)
    assert calculate_pplns_revenue(1, 2, 1.5) == pytest.approx(0.03)


def test_all_payout_models_uses_defaults():
    models = calculate_all_payout_models(1, 2)
    assert models == {
        "pps_plus": pytest.approx(0.0194),
        "fpps": pytest.approx(0.02),
        "pplns": pytest.approx(0.02),
        "proportional": pytest.approx(0.02),
    }


def test_project_earnings():
    assert project_earnings(0.5) == {
        "daily": 0.5,
        "weekly": 3.5,
        "monthly": 15.0,
        "yearly": 182.5,
    }


def test_conversions():
    assert btc_to_sats(0.0018) == 180_000
    assert btc_to_sats(0.00000001) == 1
    assert btc_to_usd(0.5, 90_000) == 45_000
