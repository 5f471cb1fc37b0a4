from __future__ import annotations

from flask import Flask

from rate_engine.services import scheduler as scheduler_module
from rate_engine.services.scheduler import SCHEDULER_EXT_KEY, init_scheduler


class DummyRefresher:
    def __init__(self, due: bool = True) -> None:
        self.due = due
        self.calls = 0

    def update_rates_if_needed(self) -> bool:
        self.calls += 1
        return self.due


def test_scheduler_disabled_by_default():
    app = Flask(__name__)

    assert init_scheduler(app) is None
    assert SCHEDULER_EXT_KEY not in app.extensions


def test_scheduler_registers_matrix_job_when_enabled():
    app = Flask(__name__)
    app.config.update(SCHEDULER_ENABLED=True, RATES_REFRESH_CRON="*/5 * * * *")

    scheduler = init_scheduler(app)
    try:
        assert scheduler is not None
        assert app.extensions[SCHEDULER_EXT_KEY] is scheduler
        assert init_scheduler(app) is scheduler
        job = scheduler.get_job("refresh_matrix")
        assert job is not None
        assert job.args == (app,)
    finally:
        scheduler.shutdown(wait=False)


def test_run_refresh_delegates_to_matrix_refresher():
    app = Flask(__name__)
    refresher = DummyRefresher()
    app.extensions["matrix_refresher"] = refresher

    scheduler_module._run_refresh(app)

    assert refresher.calls == 1


def test_run_refresh_without_refresher_is_noop():
    app = Flask(__name__)

    scheduler_module._run_refresh(app)
