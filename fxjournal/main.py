"""
FX Trade Journal CLI Application.

Command-line interface for the trade coach.
"""

from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from fxjournal.config import get_config_file, load_config, settings
from fxjournal.logging_utils import configure_logging

# Initialize CLI app
app = typer.Typer(
    name="fxjournal",
    help="FX Trade Journal Coach - rule-based feedback for your forex trades",
    add_completion=False,
)

# Sub-command groups
config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")

console = Console()

# Configure logging
configure_logging(settings.log_level)


def _load(file: Path):
    """Load a journal file, exiting with a red message on failure."""
    from fxjournal.journal.ingest import load_trades

    try:
        return load_trades(file)
    except FileNotFoundError:
        console.print(f"[red]Journal file not found: {file}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        console.print(f"[red]Invalid date: {value} (expected YYYY-MM-DD)[/red]")
        raise typer.Exit(1)


# ==================== TRADE COMMANDS ====================


@app.command("analyze")
def analyze(
    file: Path = typer.Argument(..., help="Journal file (.csv or .json)"),
    index: int = typer.Option(0, "--index", "-i", help="Trade to analyze (0 = most recent)"),
):
    """Analyze one trade against its recent history."""
    from fxjournal.coach.analyzer import get_analyzer
    from fxjournal.journal.ingest import history_for

    trades = _load(file)
    if not trades:
        console.print("[yellow]No trades found[/yellow]")
        return
    if not 0 <= index < len(trades):
        console.print(f"[red]Trade index {index} out of range (0-{len(trades) - 1})[/red]")
        raise typer.Exit(1)

    trade = trades[index]
    history = history_for(trade, trades, limit=settings.history_limit)
    feedback = get_analyzer().analyze_trade(trade, history)

    score_style = "green" if feedback.execution_score >= 7 else (
        "yellow" if feedback.execution_score >= 5 else "red"
    )
    body = [
        f"[bold]{trade.currency_pair} {trade.direction.value}[/bold] "
        f"({trade.date}, {trade.session.value}, {trade.strategy_name})",
        "",
        f"Execution Score: [{score_style}]{feedback.execution_score}/10[/{score_style}]",
        f"Risk Assessment: {feedback.risk_assessment.value}",
        f"Emotional State: {feedback.emotional_state.value}",
        "",
        "[bold green]Strengths[/bold green]",
        *(f"  ✓ {s}" for s in feedback.strengths),
    ]
    if feedback.mistakes:
        body.extend(["", "[bold red]Mistakes[/bold red]"])
        body.extend(f"  ✗ {m}" for m in feedback.mistakes)
    if feedback.patterns:
        body.extend(["", f"Patterns: {', '.join(feedback.patterns)}"])
    body.extend(["", f"[bold]Suggestion:[/bold] {feedback.suggestion}"])

    console.print(Panel("\n".join(body), title="🧠 Trade Feedback", border_style="blue"))


@app.command("annotate")
def annotate(
    file: Path = typer.Argument(..., help="Journal file (.csv or .json)"),
    out: Path = typer.Option(..., "--out", "-o", help="JSON file to write"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Re-analyze trades with feedback"),
):
    """Attach feedback to every trade and write the journal as JSON."""
    from fxjournal.coach.analyzer import annotate_journal
    from fxjournal.journal.ingest import save_trades

    trades = _load(file)
    annotated = annotate_journal(trades, overwrite=overwrite)
    output_path = save_trades(annotated, out)
    console.print(f"[green]✓ Annotated {len(annotated)} trades: {output_path}[/green]")


# ==================== REPORT COMMANDS ====================


@app.command("review")
def review(
    file: Path = typer.Argument(..., help="Journal file (.csv or .json)"),
    period: str = typer.Option("weekly", "--period", "-p", help="weekly or monthly"),
    today: str = typer.Option(None, "--today", help="End of the window (YYYY-MM-DD)"),
    save: bool = typer.Option(False, "--save", help="Save the review to the outputs directory"),
):
    """Generate a weekly or monthly review."""
    from fxjournal.coach.analyzer import annotate_journal
    from fxjournal.reports.period import PeriodReport

    end_date = _parse_date(today) if today else None
    trades = annotate_journal(_load(file))
    generator = PeriodReport()

    try:
        report = generator.generate_report(trades, period, end_date)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(Markdown(generator.format_report(report)))

    if save:
        output_path = generator.save_report(report)
        console.print(f"\n[green]Report saved to: {output_path}[/green]")


# ==================== STATS COMMANDS ====================


@app.command("summary")
def summary(
    file: Path = typer.Argument(..., help="Journal file (.csv or .json)"),
):
    """Show overall performance summary."""
    from fxjournal.journal.analytics import summarize_journal

    stats = summarize_journal(_load(file), recent_trades=settings.recent_trades)

    if stats.message:
        console.print(f"[yellow]{stats.message}[/yellow]")
        return

    emoji = "🟢" if stats.net_pips >= 0 else "🔴"
    score = f"{stats.avg_execution_score:.1f}" if stats.avg_execution_score is not None else "N/A"

    console.print(
        Panel(
            f"Total Trades: {stats.total_trades}\n"
            f"Wins: {stats.win_count} | Losses: {stats.loss_count} | BE: {stats.breakeven_count}\n"
            f"Win Rate: {stats.win_rate:.1f}% (last {settings.recent_trades}: "
            f"{stats.recent_win_rate:.1f}%)\n"
            f"\n"
            f"[bold]Net Pips: {stats.net_pips:+.1f} {emoji}[/bold]\n"
            f"Avg R:R: {stats.avg_rr:.2f}\n"
            f"Avg Execution Score: {score}\n"
            f"Best Strategy: {stats.best_strategy}\n"
            f"Most Common Mistake: {stats.common_mistake}",
            title="📊 Performance Summary",
            border_style="blue",
        )
    )

    for title, label, rows in (
        ("Sessions", "Session", stats.session_performance),
        ("Strategies", "Strategy", stats.strategy_breakdown),
    ):
        table = Table(title=title)
        table.add_column(label, style="cyan")
        table.add_column("Trades", justify="right")
        table.add_column("Win%", justify="right")
        table.add_column("Pips", justify="right")
        for row in rows:
            style = "green" if row.total_pips >= 0 else "red"
            table.add_row(
                row.name,
                str(row.trades),
                f"{row.win_rate:.1f}%",
                f"[{style}]{row.total_pips:+.1f}[/{style}]",
            )
        console.print(table)


@app.command("trends")
def trends(
    file: Path = typer.Argument(..., help="Journal file (.csv or .json)"),
):
    """Show weekly performance trends."""
    from fxjournal.journal.analytics import weekly_trends

    weeks = weekly_trends(_load(file))
    if not weeks:
        console.print("[yellow]No trades found[/yellow]")
        return

    table = Table(title="Weekly Trends")
    table.add_column("Week of")
    table.add_column("Trades", justify="right")
    table.add_column("Win%", justify="right")
    table.add_column("Pips", justify="right")

    for w in weeks:
        style = "green" if w.total_pips >= 0 else "red"
        table.add_row(
            str(w.week),
            str(w.trades),
            f"{w.win_rate:.1f}%",
            f"[{style}]{w.total_pips:+.1f}[/{style}]",
        )

    console.print(table)


@app.command("export")
def export(
    file: Path = typer.Argument(..., help="Journal file (.csv or .json)"),
    out: Path = typer.Option(None, "--out", "-o", help="CSV file to write (default: stdout)"),
):
    """Export the journal as CSV."""
    from fxjournal.journal.export import NoTradesError, export_trades_csv

    try:
        csv_text = export_trades_csv(_load(file), out)
    except NoTradesError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if out is None:
        typer.echo(csv_text, nl=False)
    else:
        console.print(f"[green]✓ Exported to {out}[/green]")


# ==================== CONFIG COMMANDS ====================


@config_app.command("show")
def config_show():
    """Show current configuration and file locations."""
    config = load_config()
    thresholds = settings.thresholds

    console.print(Panel("[bold]Configuration & File Locations[/bold]", border_style="blue"))

    console.print("\n[bold cyan]📁 Key File Locations:[/bold cyan]")
    console.print(f"  Config:      [green]{get_config_file()}[/green]")
    console.print(f"  Outputs:     [green]{settings.outputs_dir}/[/green]")
    console.print("  Env vars:    .env")

    console.print("\n[bold cyan]⚙️  Settings:[/bold cyan]")
    console.print(f"  Log Level:      {settings.log_level}")
    console.print(f"  History Limit:  {settings.history_limit}")
    console.print(f"  Recent Trades:  {settings.recent_trades}")
    console.print(f"  Report Format:  {config.get('reports', {}).get('format', 'markdown')}")

    table = Table(title="Coach Thresholds")
    table.add_column("Name", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in asdict(thresholds).items():
        table.add_row(name, str(value))
    console.print(table)


@app.callback()
def main():
    """
    FX Trade Journal Coach

    Rule-based feedback on logged forex trades plus weekly and
    monthly reviews.

    ⚠️  Advisory only. It does NOT place trades.
    """
    pass


if __name__ == "__main__":
    app()
