"""Mini README: Entry point CLI for Pocketledger.

Commands:
    * run - start the FastAPI service with uvicorn.
    * summary - print balance, month-to-date totals and a short balance
      history for a freshly seeded demo ledger.

Settings are read from ``POCKETLEDGER_*`` environment variables; command
options override them.
"""

from __future__ import annotations

from typing import Optional

import typer
import uvicorn

from pocketledger.configuration import get_settings
from pocketledger.ledger import InMemoryLedgerStorage, LedgerAggregator, seed_demo_transactions
from pocketledger.logging_utils import configure_root_logger

cli = typer.Typer(help="Launch and inspect the Pocketledger service.")


@cli.command()
def run(
    host: Optional[str] = typer.Option(None, help="Host interface to bind."),
    port: Optional[int] = typer.Option(None, help="Port to listen on."),
    production: Optional[bool] = typer.Option(
        None,
        "--production/--development",
        help="Disable auto-reload. Defaults to POCKETLEDGER_ENVIRONMENT=production.",
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    effective_production = settings.is_production if production is None else production
    configure_root_logger(settings.log_level)

    # Browsers cannot open 0.0.0.0, so point them at loopback instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Pocketledger on {effective_host}:{effective_port}.\n"
        f"API available at http://{browser_host}:{effective_port}/api/balance"
    )
    uvicorn.run(
        "pocketledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not effective_production,
    )


@cli.command()
def summary(
    days: int = typer.Option(7, help="Length of the balance history window."),
) -> None:
    """Print derived figures for the demo ledger."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    with InMemoryLedgerStorage() as storage:
        aggregator = LedgerAggregator(storage, tz=settings.tzinfo)
        owner = settings.default_owner
        seed_demo_transactions(aggregator, owner)

        stats = aggregator.monthly_stats(owner)
        typer.echo(f"Balance:          {aggregator.current_balance(owner):>12.2f}")
        typer.echo(f"Month income:     {stats.income:>12.2f}")
        typer.echo(f"Month expenses:   {stats.expenses:>12.2f}")
        typer.echo(f"Month entries:    {stats.count:>12d}")
        for point in aggregator.balance_history(owner, window_days=days):
            typer.echo(f"  {point.day.isoformat()}  {point.balance:>12.2f}")


if __name__ == "__main__":
    cli()
