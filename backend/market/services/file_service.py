# Overview: Stored-file handling for product images and payment proofs.

"""
Stored files live outside the database; rows only keep the generated
filename. Two rules tie them to record mutation:

- Files replaced or orphaned by a product update/delete are removed only
  AFTER the database commit succeeds (discard_after_commit). A rollback
  keeps them.
- Removal is best-effort: a missing or locked file is logged and ignored,
  never raised to the caller.
"""

from __future__ import annotations

import os
import re

from flask import current_app
from sqlalchemy import event
from sqlalchemy.orm import Session
from werkzeug.utils import secure_filename

from ..extensions import db
from ..time_utils import epoch_millis
from ..validation import ValidationError

_PENDING_KEY = "market.pending_file_removals"
_WHITESPACE = re.compile(r"\s+")


def build_stored_name(original_name: str, *, infix: str = "") -> str:
    """
    '<epoch-ms>-<infix><name>' with whitespace runs collapsed to '-'.

    The client-supplied part goes through secure_filename before the prefix is
    added, so it can never escape the storage folder.
    """
    collapsed = _WHITESPACE.sub("-", (original_name or "").strip())
    safe = secure_filename(collapsed) or "upload"
    return f"{epoch_millis()}-{infix}{safe}"


def _extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def save_upload(file_storage, *, folder: str, allowed_extensions: set[str], infix: str = "") -> str:
    """
    Persist an uploaded werkzeug FileStorage into folder and return its stored name.

    Size is bounded by Flask's MAX_CONTENT_LENGTH (413 before we get here);
    the extension must be in allowed_extensions.
    """
    original = file_storage.filename or ""
    ext = _extension(original)
    if ext not in allowed_extensions:
        raise ValidationError(
            f"File type not allowed. Allowed: {', '.join(sorted(allowed_extensions))}"
        )

    os.makedirs(folder, exist_ok=True)
    stored_name = build_stored_name(original, infix=infix)
    file_storage.save(os.path.join(folder, stored_name))
    return stored_name


def discard_file(folder: str, filename: str | None) -> bool:
    """Remove a stored file now. Returns True if a file was removed; never raises."""
    if not filename:
        return False
    path = os.path.join(folder, filename)
    try:
        os.remove(path)
        return True
    except FileNotFoundError:
        return False
    except OSError:
        current_app.logger.warning("Could not remove stored file %s", path, exc_info=True)
        return False


def discard_after_commit(folder: str, filename: str | None) -> None:
    """Queue a stored file for removal once the current DB transaction commits."""
    if not filename:
        return
    session = db.session()
    if not session.in_transaction():
        session.begin()
    session.info.setdefault(_PENDING_KEY, []).append((folder, filename))


@event.listens_for(Session, "after_commit")
def _remove_pending_files(session) -> None:
    pending = session.info.pop(_PENDING_KEY, None)
    for folder, filename in pending or ():
        discard_file(folder, filename)


@event.listens_for(Session, "after_rollback")
def _forget_pending_files(session) -> None:
    session.info.pop(_PENDING_KEY, None)
