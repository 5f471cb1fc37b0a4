"""Health blueprint exposing liveness and rate cache status."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Health", __name__, description="Liveness and rate cache status")

from . import routes  # noqa: E402,F401
