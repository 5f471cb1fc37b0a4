"""Route handlers for health checks."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from rate_engine.errors import EngineUnavailable
from rate_engine.schemas import HealthRatesSchema, HealthStatusSchema
from rate_engine.services import ConversionEngine
from rate_engine.utils.datetime import EPOCH

from . import blp


@blp.route("")
class HealthStatus(MethodView):
    @blp.response(200, HealthStatusSchema())
    def get(self):
        return {
            "status": "ok",
            "app": current_app.config.get("APP_NAME", "fx-rate-engine"),
        }


@blp.route("/rates")
class HealthRates(MethodView):
    @blp.response(200, HealthRatesSchema())
    def get(self):
        engine: ConversionEngine | None = current_app.extensions.get("conversion_engine")  # type: ignore[assignment]
        if engine is None:
            raise EngineUnavailable()

        cache = engine.cache
        refresher = engine.refresher
        last_bulk_update = refresher.last_bulk_update
        return {
            "status": "stale" if refresher.is_due() else "ok",
            "cached_pairs": len(cache),
            "ttl_seconds": int(cache.ttl.total_seconds()),
            "providers": [provider.name for provider in cache.providers],
            "matrix_currencies": list(refresher.currencies),
            "last_bulk_update": None if last_bulk_update == EPOCH else last_bulk_update.isoformat(),
        }
