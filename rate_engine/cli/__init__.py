"""CLI entry points."""

from __future__ import annotations

from flask import Flask

from .rates import convert_amount, refresh_rates, show_rate


def register_cli(app: Flask) -> None:
    """Register CLI commands on the given Flask app."""

    app.cli.add_command(convert_amount)
    app.cli.add_command(refresh_rates)
    app.cli.add_command(show_rate)
