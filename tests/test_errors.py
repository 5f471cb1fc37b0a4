from __future__ import annotations

from flask import Flask

from rate_engine.errors import APIError, EngineUnavailable, register_error_handlers


def make_app(exc: Exception) -> Flask:
    app = Flask(__name__)
    register_error_handlers(app)

    @app.get("/raises")
    def raises():
        raise exc

    return app


def test_api_error_renders_message_and_payload():
    app = make_app(APIError("Unsupported currency.", status_code=422, payload={"code": "XYZ"}))

    response = app.test_client().get("/raises")

    assert response.status_code == 422
    assert response.get_json() == {"message": "Unsupported currency.", "code": "XYZ"}


def test_engine_unavailable_defaults_to_503():
    response = make_app(EngineUnavailable()).test_client().get("/raises")

    assert response.status_code == 503
    assert response.get_json() == {"message": "Conversion engine not initialised."}

