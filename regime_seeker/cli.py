#!/usr/bin/env python3
"""
Command-line interface for the Regime Seeker.

Loads candles from a CSV file or fetches them from an exchange, runs the
regime pipeline and volume profile, and prints a summary.

Usage:
    python -m regime_seeker.cli --csv data/BTCUSDT_1h.csv
    python -m regime_seeker.cli --exchange kraken --symbol ETH --interval 4h
"""

import argparse
import logging
import sys
import time
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from regime_seeker.core.config import ConfigError, IndicatorConfig, VolumeProfileConfig
from regime_seeker.core.models import Candle, EnrichedCandle, RegimeState
from regime_seeker.historical import (
    EXCHANGES,
    KRAKEN_INTERVALS,
    FetchError,
    KlineFetcher,
    load_candles_csv,
    save_candles_csv,
)
from regime_seeker.indicators import compute_signals, compute_volume_profile, regime_zones
from regime_seeker.indicators.volume_profile import VolumeProfileResult
from regime_seeker.signals import RegimeChange, RegimeMonitor, calculate_confluence

logger = logging.getLogger(__name__)

console = Console()

# Timeframes scanned for multi-timeframe confluence
MTF_TIMEFRAMES = ["1m", "5m", "15m", "1h", "4h", "1d", "1w"]

# Minimum bars for a timeframe to count toward confluence
MTF_MIN_BARS = 50


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Classify market regime (ADX/EMA) and build a volume profile",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Analyse a saved CSV window
    %(prog)s --csv data/BTCUSDT_1h.csv

    # Fetch 1h BTC candles from Binance.US and save them
    %(prog)s --symbol BTC --interval 1h --save data/BTCUSDT_1h.csv

    # Refresh every 60s and report regime changes
    %(prog)s --symbol SOL --interval 5m --watch 60

    # Multi-timeframe confluence on Kraken
    %(prog)s --exchange kraken --symbol ETH --mtf
        """,
    )

    source = parser.add_argument_group("data source")
    source.add_argument("--csv", help="Load candles from CSV instead of fetching")
    source.add_argument(
        "--exchange",
        "-x",
        default="binance.us",
        choices=list(EXCHANGES),
        help="Exchange to fetch from (default: binance.us)",
    )
    source.add_argument("--symbol", "-S", default="BTC", help="Base asset (default: BTC)")
    source.add_argument(
        "--interval",
        "-i",
        default="1h",
        choices=list(KRAKEN_INTERVALS),
        help="Candle interval (default: 1h)",
    )
    source.add_argument(
        "--limit", type=int, default=200, help="Candles to fetch (default: 200)"
    )
    source.add_argument("--save", help="Save the loaded candles to this CSV path")

    indicators = parser.add_argument_group("indicators")
    indicators.add_argument("--adx-length", type=int, default=14, help="ADX length (default: 14)")
    indicators.add_argument(
        "--adx-threshold", type=float, default=25.0, help="Strong trend ADX (default: 25)"
    )
    indicators.add_argument("--ema-length", type=int, default=50, help="EMA length (default: 50)")
    indicators.add_argument(
        "--value-area", type=float, default=68.0, help="Value area %% (default: 68)"
    )
    indicators.add_argument("--bins", type=int, default=100, help="Profile bins (default: 100)")

    output = parser.add_argument_group("output")
    output.add_argument("--rows", type=int, default=10, help="Recent bars to show (default: 10)")
    output.add_argument(
        "--watch", type=float, metavar="SECONDS", help="Refresh every N seconds until Ctrl+C"
    )
    output.add_argument(
        "--mtf", action="store_true", help="Show multi-timeframe confluence instead"
    )
    output.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


def build_signals_table(enriched: Sequence[EnrichedCandle], rows: int) -> Table:
    """Table of the most recent bars with indicators and regime."""
    table = Table(title="Recent Bars", show_lines=False)
    table.add_column("Time", justify="right")
    table.add_column("Close", justify="right")
    table.add_column("EMA", justify="right")
    table.add_column("DI+", justify="right")
    table.add_column("DI-", justify="right")
    table.add_column("ADX", justify="right")
    table.add_column("Regime")

    for candle in enriched[-rows:]:
        ema_text = f"{candle.ema:,.4f}" if candle.ema is not None else "--"
        table.add_row(
            time.strftime("%Y-%m-%d %H:%M", time.gmtime(candle.time)),
            f"{candle.close:,.4f}",
            ema_text,
            f"{candle.di_plus:.2f}",
            f"{candle.di_minus:.2f}",
            f"{candle.adx:.2f}",
            Text(candle.state.value, style=candle.state.color),
        )

    return table


def build_zones_table(enriched: Sequence[EnrichedCandle]) -> Table:
    """Table of regime zones, most recent last."""
    table = Table(title="Regime Zones")
    table.add_column("From", justify="right")
    table.add_column("To", justify="right")
    table.add_column("Bars", justify="right")
    table.add_column("Regime")

    for zone in regime_zones(enriched):
        table.add_row(
            time.strftime("%Y-%m-%d %H:%M", time.gmtime(zone.start_time)),
            time.strftime("%Y-%m-%d %H:%M", time.gmtime(zone.end_time)),
            str(zone.bar_count),
            Text(zone.state.short_name, style=zone.state.color),
        )

    return table


def build_profile_table(profile: VolumeProfileResult) -> Table:
    """Summary table for a volume profile."""
    table = Table(title="Volume Profile", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("VAH", f"{profile.vah:,.4f}")
    table.add_row(Text("POC", style="bold"), Text(f"{profile.poc:,.4f}", style="bold"))
    table.add_row("VAL", f"{profile.val:,.4f}")
    table.add_row("Range", f"{profile.price_range.min:,.4f} - {profile.price_range.max:,.4f}")
    table.add_row("Total volume", f"{profile.total_volume:,.2f}")
    table.add_row(
        "Value area volume",
        f"{profile.value_area_volume:,.2f} ({profile.value_area_pct:.1f}%)",
    )

    return table


def load_candles(args: argparse.Namespace, fetcher: KlineFetcher | None) -> list[Candle]:
    """Load candles from CSV or fetch them from the exchange."""
    if args.csv:
        return load_candles_csv(args.csv)
    assert fetcher is not None
    return fetcher.fetch(args.symbol, args.interval, limit=args.limit)


def report(
    candles: Sequence[Candle],
    indicator_config: IndicatorConfig,
    profile_config: VolumeProfileConfig,
    rows: int,
) -> list[EnrichedCandle]:
    """Run the pipeline and print the summary tables."""
    enriched = compute_signals(candles, indicator_config)
    profile = compute_volume_profile(candles, profile_config)

    console.print(build_signals_table(enriched, rows))
    console.print(build_zones_table(enriched))

    if profile is None:
        console.print("[yellow]No volume profile available (flat or empty window)[/yellow]")
    else:
        console.print(build_profile_table(profile))

    if enriched:
        state = enriched[-1].state
        console.print(Text(f"Current regime: {state.value}", style=f"bold {state.color}"))
        console.print(f"[dim]{state.tip}[/dim]")

    return enriched


def report_confluence(
    fetcher: KlineFetcher, symbol: str, indicator_config: IndicatorConfig
) -> None:
    """Fetch every MTF timeframe and print the confluence reading."""
    regimes: dict[str, RegimeState] = {}
    table = Table(title=f"{symbol} Multi-Timeframe")
    table.add_column("Timeframe")
    table.add_column("Regime")
    table.add_column("ADX", justify="right")

    for timeframe in MTF_TIMEFRAMES:
        try:
            candles = fetcher.fetch(symbol, timeframe)
        except FetchError as e:
            logger.warning(f"Skipping {timeframe}: {e}")
            continue

        if len(candles) <= MTF_MIN_BARS:
            logger.warning(f"Skipping {timeframe}: only {len(candles)} candles")
            continue

        last = compute_signals(candles, indicator_config)[-1]
        regimes[timeframe] = last.state
        table.add_row(
            timeframe,
            Text(last.state.short_name, style=last.state.color),
            f"{last.adx:.1f}",
        )

    console.print(table)

    confluence = calculate_confluence(regimes)
    style = {"bullish": "green", "bearish": "red"}.get(confluence.confluence_type.value, "white")
    console.print(
        Text(f"Confluence: {confluence.percent:.0f}% - {confluence.text}", style=f"bold {style}")
    )


def on_regime_change(change: RegimeChange) -> None:
    color = change.current.color
    console.print(Text(f"🔔 Regime change: {change}", style=f"bold {color}"))


def main(argv: Sequence[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        indicator_config = IndicatorConfig(
            adx_length=args.adx_length,
            adx_threshold=args.adx_threshold,
            ema_length=args.ema_length,
        )
        profile_config = VolumeProfileConfig(
            value_area_percent=args.value_area,
            num_bins=args.bins,
        )
    except ConfigError as e:
        parser.error(str(e))

    if args.csv and (args.watch or args.mtf):
        parser.error("--watch and --mtf need exchange data, not --csv")

    fetcher = None if args.csv else KlineFetcher(args.exchange)

    try:
        if args.mtf:
            assert fetcher is not None
            report_confluence(fetcher, args.symbol, indicator_config)
            return 0

        candles = load_candles(args, fetcher)
        if args.save:
            save_candles_csv(candles, args.save)
            console.print(f"💾 Saved {len(candles)} candles to {args.save}")

        enriched = report(candles, indicator_config, profile_config, args.rows)

        if args.watch:
            monitor = RegimeMonitor(on_change=on_regime_change)
            key = f"{args.symbol}/{args.interval}"
            monitor.update(key, enriched)

            while True:
                time.sleep(args.watch)
                try:
                    candles = load_candles(args, fetcher)
                except FetchError as e:
                    console.print(f"[red]Error: {e}[/red]")
                    continue
                enriched = compute_signals(candles, indicator_config)
                monitor.update(key, enriched)
                if enriched:
                    last = enriched[-1]
                    console.print(
                        f"[dim]{time.strftime('%H:%M:%S')}[/dim] "
                        f"{last.close:,.4f} | State: {last.state.value} | ADX {last.adx:.1f}"
                    )

    except FetchError as e:
        console.print(f"[red]❌ {e}[/red]")
        return 1
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        return 1
    except KeyboardInterrupt:
        console.print("\nStopped.")
    finally:
        if fetcher is not None:
            fetcher.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
