"""CLI entry point for the trade journal."""

from __future__ import annotations

import json
from pathlib import Path

import click

from .core.clock import FixedClock, IClock, WallClock
from .core.config import Settings, load_settings
from .core.enums import RecentPeriod, Timeframe
from .core.errors import JournalError


def _bootstrap(config: str | None) -> Settings:
    from .observability.logger import new_run_id, setup_logging

    try:
        settings = load_settings(config)
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(settings.observability.log_level, settings.observability.log_format)
    new_run_id()
    return settings


def _clock(now: str | None, settings: Settings) -> IClock:
    """``--now`` pins the clock; otherwise wall-clock time in the configured zone."""
    from .journal.normalizer import parse_trade_timestamp

    if now is None:
        return WallClock(settings.journal.tzinfo)
    parsed = parse_trade_timestamp(now, settings.journal.tzinfo)
    if parsed is None:
        raise click.BadParameter(f"not an ISO date/time: {now}", param_hint="--now")
    return FixedClock(parsed)


def _load(trades_file: str, settings: Settings):
    from .journal.loader import load_trades

    try:
        return load_trades(
            trades_file,
            tz=settings.journal.tzinfo,
            dedupe=settings.journal.dedupe_on_load,
        )
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
def main() -> None:
    """Trade Journal analytics."""


@main.command()
@click.argument("trades_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", default=None, help="Config file path (TOML)")
@click.option("--now", default=None, help="Report instant (ISO); defaults to the current time")
@click.option(
    "--timeframe",
    type=click.Choice([t.value for t in Timeframe]),
    default=None,
    help="Equity curve window (default from config)",
)
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table")
def report(trades_file: str, config: str | None, now: str | None, timeframe: str | None, fmt: str) -> None:
    """Compute performance analytics for a trade file."""
    from .journal.engine import build_report
    from .journal.export import TradeExporter
    from .observability.logger import get_logger

    settings = _bootstrap(config)
    trades = _load(trades_file, settings)
    result = build_report(
        trades,
        now=_clock(now, settings).now(),
        timeframe=timeframe or settings.journal.default_timeframe,
        tz=settings.journal.tzinfo,
    )
    get_logger(__name__).info(
        "report_built",
        trades=result.trade_count,
        skipped=result.skipped_count,
        timeframe=result.timeframe.value,
    )

    if fmt == "json":
        click.echo(json.dumps(TradeExporter().report_to_dict(result), indent=2))
        return
    _print_report(result)


@main.command()
@click.argument("trades_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", default=None, help="Config file path (TOML)")
@click.option("--now", default=None, help="Reference instant (ISO); defaults to the current time")
@click.option(
    "--period",
    type=click.Choice([p.value for p in RecentPeriod]),
    default=None,
    help="Period filter (default from config)",
)
@click.option("--search", default="", help="Match ticker or comment")
def recent(trades_file: str, config: str | None, now: str | None, period: str | None, search: str) -> None:
    """List recent trades, newest first."""
    from .journal.recent import recent_trades

    settings = _bootstrap(config)
    trades = _load(trades_file, settings)
    selected = recent_trades(
        trades,
        now=_clock(now, settings).now(),
        period=period or settings.journal.recent_period,
        search=search,
    )
    if not selected:
        click.echo("No trades.")
        return
    for t in selected:
        when = t.trade_date.strftime("%Y-%m-%d %H:%M") if t.trade_date else "-"
        direction = t.direction.value if t.direction else "?"
        result = t.result.value if t.result else "open"
        click.echo(
            f"{when}  {t.ticker:<12} {direction:<5} {result:<5} "
            f"{t.gain_loss:>10.2f}  {t.pnl_percent:>8.2f}%"
        )


@main.command()
@click.argument("trades_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", default=None, help="Config file path (TOML)")
@click.option("--output", required=True, type=click.Path(dir_okay=False), help="Destination file")
@click.option("--format", "fmt", type=click.Choice(["csv", "json"]), default=None,
              help="Output format (default: from the output file extension)")
def export(trades_file: str, config: str | None, output: str, fmt: str | None) -> None:
    """Normalize, de-duplicate and re-export a trade file."""
    from .journal.export import TradeExporter
    from .observability.logger import get_logger

    settings = _bootstrap(config)
    trades = _load(trades_file, settings)
    fmt = fmt or ("csv" if output.lower().endswith(".csv") else "json")

    exporter = TradeExporter()
    text = exporter.to_csv(trades) if fmt == "csv" else exporter.to_json(trades)
    Path(output).write_text(text, encoding="utf-8")
    get_logger(__name__).info("trades_exported", trades=len(trades), output=output, format=fmt)
    click.echo(f"Wrote {len(trades)} trades to {output}")


def _print_report(result) -> None:
    click.echo(
        f"Trades: {result.trade_count} "
        f"(skipped {result.skipped_count} without a trade date)"
    )
    click.echo(f"Total P&L: {result.total_pnl:.2f}")

    cards = "  ".join(
        f"{c.period.value}: {c.pnl_percent:+.2f}% ({c.trade_count})"
        for c in result.period_cards
    )
    click.echo(f"Period P&L%: {cards}")

    d = result.dashboard
    click.echo(
        f"This month ({d.month}): pnl={d.total_pnl:.2f} win_rate={d.win_rate:.1f}% "
        f"pf={d.profit_factor:.2f} expectancy={d.expectancy:.1f}%"
    )

    s = result.streaks
    current = f"{s.current_type.value} x{s.current_length}" if s.current_type else "none"
    click.echo(
        f"Streaks: best win {s.max_win_streak}, worst loss {s.max_loss_streak}, "
        f"current {current}"
    )

    click.echo("")
    click.echo("By direction:")
    for ds in result.directions:
        click.echo(
            f"  {ds.direction.value:<10} {ds.wins:>3}W {ds.losses:>3}L "
            f"win_rate={ds.win_rate:5.1f}% pnl={ds.total_pnl:10.2f} "
            f"avg={ds.avg_pnl_percent:+.2f}%"
        )

    click.echo("By time of day:")
    for b in result.time_buckets:
        click.echo(
            f"  {b.session.value:<10} {b.start_hour:02d}-{b.end_hour - 1:02d}h "
            f"{b.trades:>3} trades win_rate={b.win_rate:5.1f}% pnl={b.total_pnl:10.2f}"
        )
    if result.best_session:
        click.echo(
            f"  best: {result.best_session.value}, worst: {result.worst_session.value}"
        )

    click.echo("")
    click.echo("Weekly:")
    for w in result.weekly:
        click.echo(
            f"  {w.label:<26} {w.wins:>3}W {w.losses:>3}L pnl={w.pnl:10.2f} "
            f"fees={w.fees:7.2f} pf={w.profit_factor:5.2f} "
            f"expectancy={w.expectancy:6.1f}%"
        )

    click.echo("Monthly:")
    for m in result.monthly:
        click.echo(
            f"  {m.label:<16} {m.grade.value} ({m.score:>3}) "
            f"pnl%={m.monthly_pnl_percent:+8.2f} pnl={m.total_pnl:10.2f} "
            f"pf={m.profit_factor:5.2f} expectancy={m.expectancy:+6.2f}%"
        )
