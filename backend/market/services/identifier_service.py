# Overview: Product id allocation.

"""
Product ids are time-derived tokens (epoch milliseconds as text) that the
frontend shows and posts back, so their shape is kept. Two requests in the
same millisecond must still get different ids: within a process the token is
forced to be strictly increasing, and a collision with another process shows
up as a primary-key IntegrityError that products_service retries with a fresh
token.
"""

from __future__ import annotations

import threading

from ..time_utils import epoch_millis

_lock = threading.Lock()
_last_issued = 0


def new_product_id() -> str:
    global _last_issued
    with _lock:
        candidate = max(epoch_millis(), _last_issued + 1)
        _last_issued = candidate
    return str(candidate)
