"""JSON error responses for the service's HTTP surface."""

from __future__ import annotations

from typing import Any

from flask import Flask, jsonify


class APIError(Exception):
    """An error rendered to the client as ``{"message": ..., **payload}``."""

    status_code: int = 400
    default_message = "Request could not be processed."

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        payload: dict[str, Any] | None = None,
    ):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload or {}


class EngineUnavailable(APIError):
    status_code = 503
    default_message = "Conversion engine not initialised."


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(APIError)
    def handle_api_error(error: APIError):
        return jsonify({"message": error.message, **error.payload}), error.status_code
