"""Append-only audit trail of fetched exchange rates."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rate_engine.database import get_session, worker_session
from rate_engine.models import ExchangeRateRecord
from rate_engine.providers.schemas import RateEntry

logger = logging.getLogger(__name__)

SessionProvider = Callable[[], Session]


class RateStore:
    """Persist every successfully fetched rate without slowing down resolution.

    With an executor, ``record`` only schedules the insert and returns at once.
    Database errors, duplicate observations included, are logged and dropped.
    """

    def __init__(
        self,
        session_provider: SessionProvider | None = None,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self._session_provider = session_provider or get_session()
        self._executor = executor

    def record(self, entry: RateEntry) -> Future | None:
        """Append ``entry`` to the audit table, asynchronously when an executor is set."""

        if self._executor is None:
            self._write(entry)
            return None
        try:
            future = self._executor.submit(self._write, entry)
        except RuntimeError as exc:
            # Executor already shut down during application teardown.
            logger.warning("Rate store unavailable, dropping %s/%s: %s", *entry.pair, exc)
            return None
        future.add_done_callback(self._report_unexpected)
        return future

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)

    def _write(self, entry: RateEntry) -> None:
        if self._executor is None:
            self._insert(self._session_provider(), entry)
            return
        with worker_session(self._session_provider) as session:
            self._insert(session, entry)

    def _insert(self, session: Session, entry: RateEntry) -> None:
        try:
            session.add(
                ExchangeRateRecord(
                    base_currency=entry.base_currency,
                    target_currency=entry.target_currency,
                    rate=entry.rate,
                    provider=entry.provider,
                    timestamp=entry.timestamp,
                    as_of=entry.as_of,
                )
            )
            session.commit()
        except IntegrityError:
            session.rollback()
            logger.debug(
                "Duplicate rate observation ignored",
                extra={"event": "store.write", "status": "duplicate", "pair": "/".join(entry.pair)},
            )
        except SQLAlchemyError as exc:
            session.rollback()
            logger.warning(
                "Failed to record rate %s/%s: %s",
                entry.base_currency,
                entry.target_currency,
                exc,
                extra={"event": "store.write", "status": "error", "pair": "/".join(entry.pair)},
            )

    @staticmethod
    def _report_unexpected(future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error("Unexpected rate store failure: %s", exc, exc_info=exc)


def create_rate_store(app) -> RateStore | None:
    """Build the rate store configured for ``app``; ``None`` when disabled."""

    if not app.config.get("RATE_STORE_ENABLED", True):
        return None
    executor = None
    if app.config.get("RATE_STORE_ASYNC", True):
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="rate-store")
    return RateStore(executor=executor)
