from __future__ import annotations

from core.ledger_flags import generate_ledger_flags
from trade_ledger_engine import config


def _snapshot(**overrides):
    snapshot = {
        "mode": "equity_reconciled",
        "trades": {"total": 10, "win_rate_pct": 60.0},
        "profit": {"total": 250.0},
        "data_quality": {"invalid_trade_rows": 0, "invalid_trade_share_pct": 0.0, "undated_trades": 0},
        "pct_change_sources": {
            "daily": {"trade": 0, "equity": 5},
            "monthly": {"trade": 0, "equity": 1},
        },
    }
    snapshot.update(overrides)
    return snapshot


def _types(flags):
    return [flag["type"] for flag in flags]


def test_profitable_ledger_only():
    flags = generate_ledger_flags(_snapshot())
    assert _types(flags) == ["profitable_ledger"]
    assert flags[0]["severity"] == "success"


def test_no_trades():
    flags = generate_ledger_flags(
        _snapshot(trades={"total": 0, "win_rate_pct": 0.0}, profit={"total": 0.0}, mode="trade_only")
    )
    assert _types(flags) == ["no_trades"]


def test_losing_ledger_with_low_win_rate():
    flags = generate_ledger_flags(
        _snapshot(trades={"total": 10, "win_rate_pct": 10.0}, profit={"total": -120.5})
    )
    by_type = {flag["type"]: flag for flag in flags}

    assert by_type["negative_total_profit"]["total_profit"] == -120.5
    assert by_type["low_win_rate"]["severity"] == "warning"
    assert "profitable_ledger" not in by_type


def test_moderately_low_win_rate_is_info():
    flags = generate_ledger_flags(_snapshot(trades={"total": 10, "win_rate_pct": 30.0}))
    low = [flag for flag in flags if flag["type"] == "low_win_rate"]
    assert low[0]["severity"] == "info"


def test_low_win_rate_threshold_is_configurable():
    config.configure(FLAG_THRESHOLDS={"low_win_rate_pct": 70.0, "invalid_row_share_pct": 5.0})
    flags = generate_ledger_flags(_snapshot())
    assert "low_win_rate" in _types(flags)


def test_invalid_rows_severity_follows_share():
    minor = generate_ledger_flags(
        _snapshot(data_quality={"invalid_trade_rows": 1, "invalid_trade_share_pct": 2.0})
    )
    major = generate_ledger_flags(
        _snapshot(data_quality={"invalid_trade_rows": 4, "invalid_trade_share_pct": 40.0})
    )

    assert [f["severity"] for f in minor if f["type"] == "invalid_rows_skipped"] == ["info"]
    assert [f["severity"] for f in major if f["type"] == "invalid_rows_skipped"] == ["warning"]


def test_undated_trades():
    flags = generate_ledger_flags(_snapshot(data_quality={"undated_trades": 3}))
    undated = [flag for flag in flags if flag["type"] == "undated_trades"]
    assert undated[0]["undated_trades"] == 3


def test_trade_only_mode():
    flags = generate_ledger_flags(_snapshot(mode="trade_only"))
    assert "no_equity_data" in _types(flags)


def test_mixed_sources():
    flags = generate_ledger_flags(
        _snapshot(pct_change_sources={"daily": {"trade": 2, "equity": 3}, "monthly": {"trade": 0, "equity": 1}})
    )
    assert _types(flags)[0] == "mixed_pct_change_sources"


def test_sorted_by_severity():
    flags = generate_ledger_flags(
        _snapshot(
            mode="trade_only",
            profit={"total": -5.0},
            data_quality={"undated_trades": 1},
        )
    )
    severities = [flag["severity"] for flag in flags]
    assert severities == sorted(severities, key=["error", "warning", "info", "success"].index)
    assert severities[0] == "warning"


def test_tolerates_bad_payload():
    assert generate_ledger_flags(None) == []
    assert generate_ledger_flags({}) == [
        {
            "type": "no_trades",
            "severity": "warning",
            "message": "No closed positions with a numeric profit were found",
        }
    ]
