from __future__ import annotations

from flask import request


def form_payload() -> dict:
    """
    Body fields from a form post (urlencoded or multipart) or a JSON body.

    Only keys the client actually sent are present, so callers can tell
    "omitted" from "sent empty".
    """
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form.to_dict()
