from __future__ import annotations

import pytest

from prizewheel.config import WheelConfig
from prizewheel.engine import RewardPoolRegistry, StreamKind
from prizewheel.simulation import expected_distribution, simulate


def test_expected_distribution_of_stock_main_stream():
    expected = expected_distribution(RewardPoolRegistry.from_config(WheelConfig()), StreamKind.MAIN)

    assert expected.sum() == pytest.approx(1.0)
    assert expected["1000"] == pytest.approx(0.3)
    assert expected["500"] == pytest.approx(0.2)
    assert expected["FREE SPINS"] == pytest.approx(0.5 * 100 / 106)
    assert expected["5"] == pytest.approx(0.5 / 106)


def test_expected_distribution_of_bonus_stream_is_uniform():
    expected = expected_distribution(RewardPoolRegistry.from_config(WheelConfig()), StreamKind.BONUS)

    assert sorted(expected.index) == sorted(["250", "150", "100", "50", "25", "5"])
    assert all(value == pytest.approx(1 / 6) for value in expected)


def test_simulation_tracks_expected_frequencies():
    report = simulate(WheelConfig(), spins=20_000, seed=7)

    assert report.spins == 20_000
    assert report.main.loc["1000", "observed"] == pytest.approx(0.3)
    assert (report.main["diff"].abs() < 0.01).all()
    assert (report.bonus["diff"].abs() < 0.01).all()
    assert report.trigger_rate == pytest.approx(0.5 * 100 / 106, abs=0.01)
    # Three free spins averaging (250+150+100+50+25+5)/6 each.
    assert report.mean_bonus_total == pytest.approx(290.0, abs=15.0)


def test_report_renders_markdown_and_dict():
    report = simulate(WheelConfig(), spins=200, seed=1)

    markdown = report.to_markdown()
    payload = report.as_dict()

    assert "## Main Stream" in markdown
    assert "FREE SPINS" in markdown
    assert payload["spins"] == 200
    assert set(payload["main"]) == {"1000", "500", "250", "150", "100", "50", "25", "5", "FREE SPINS"}


def test_simulate_rejects_non_positive_spins():
    with pytest.raises(ValueError):
        simulate(WheelConfig(), spins=0)
