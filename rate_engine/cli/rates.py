"""CLI commands for conversions and matrix refreshes."""

from __future__ import annotations

import json

import click
from flask import current_app
from flask.cli import with_appcontext

from rate_engine.schemas import ConversionResultSchema, RateEntrySchema, SweepSummarySchema
from rate_engine.services import ConversionEngine


def _engine() -> ConversionEngine:
    engine = current_app.extensions.get("conversion_engine")
    if engine is None:
        raise click.ClickException("Conversion engine is not initialised.")
    return engine


@click.command("convert")
@click.argument("amount", type=float)
@click.argument("from_currency")
@click.argument("to_currency")
@with_appcontext
def convert_amount(amount: float, from_currency: str, to_currency: str) -> None:
    """Convert AMOUNT from FROM_CURRENCY to TO_CURRENCY and print the result as JSON."""

    try:
        result = _engine().convert(amount, from_currency, to_currency)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    click.echo(json.dumps(ConversionResultSchema().dump(result), ensure_ascii=False))
    if result.is_fallback:
        click.echo("Warning: no provider returned a rate; converted at parity.", err=True)


@click.command("rate")
@click.argument("base")
@click.argument("target")
@with_appcontext
def show_rate(base: str, target: str) -> None:
    """Print the current BASE/TARGET rate entry, resolving it if needed."""

    try:
        entry = _engine().get_exchange_rate(base, target)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    click.echo(json.dumps(RateEntrySchema().dump(entry)))


@click.command("refresh-rates")
@with_appcontext
def refresh_rates() -> None:
    """Resolve every pair of the configured currency matrix now."""

    engine = _engine()
    click.echo(f"Refreshing {len(list(engine.refresher.pairs()))} currency pairs...")
    summary = engine.refresher.refresh_all()
    click.echo(json.dumps(SweepSummarySchema().dump(summary)))
