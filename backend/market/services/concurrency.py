# Overview: Retry helpers for DB operations that can lose a race.

from __future__ import annotations

import time

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from ..extensions import db


def run_with_retry(func, *, attempts: int = 3, backoff_base: float = 0.05, retry_on=(OperationalError, StaleDataError)):
    """
    Execute a DB operation with retry on concurrency-related failures.

    Retries on OperationalError (database locked) and StaleDataError by
    default; callers allocating keys also pass IntegrityError. The session is
    rolled back before every retry so func() starts from a clean transaction.
    """
    for attempt in range(attempts):
        try:
            return func()
        except retry_on:
            db.session.rollback()
            if attempt >= attempts - 1:
                raise
            time.sleep(backoff_base * (2 ** attempt))


KEY_COLLISION_ERRORS = (IntegrityError, OperationalError, StaleDataError)
