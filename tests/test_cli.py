"""
Tests for the command-line interface (CSV mode only, no network).
"""

import pytest

from regime_seeker.cli import create_parser, main
from regime_seeker.core.models import Candle
from regime_seeker.historical import save_candles_csv


@pytest.fixture
def uptrend_csv(tmp_path):
    candles = [
        Candle(
            time=1_700_000_000 + i * 3600,
            open=99.5 + i,
            high=101.0 + i,
            low=98.5 + i,
            close=100.0 + i,
            volume=100.0 + i,
        )
        for i in range(60)
    ]
    return save_candles_csv(candles, tmp_path / "BTCUSDT_1h.csv")


class TestCLI:
    def test_parser_defaults(self):
        args = create_parser().parse_args([])
        assert args.exchange == "binance.us"
        assert args.symbol == "BTC"
        assert args.ema_length == 50
        assert args.bins == 100

    def test_report_from_csv(self, uptrend_csv, capsys):
        assert main(["--csv", str(uptrend_csv), "--rows", "5"]) == 0

        out = capsys.readouterr().out
        assert "Current regime: STRONG_UPTREND" in out
        assert "POC" in out

    def test_missing_csv(self, tmp_path, capsys):
        assert main(["--csv", str(tmp_path / "nope.csv")]) == 1
        assert "not found" in capsys.readouterr().out

    def test_watch_requires_exchange(self, uptrend_csv):
        with pytest.raises(SystemExit):
            main(["--csv", str(uptrend_csv), "--watch", "5"])

    def test_invalid_config_rejected(self, uptrend_csv):
        with pytest.raises(SystemExit):
            main(["--csv", str(uptrend_csv), "--bins", "0"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
