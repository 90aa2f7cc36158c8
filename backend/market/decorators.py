# Overview: Request decorators for API routes.

from functools import wraps
from flask import request, g

from .identity import get_identity_provider


def with_identity(f):
    """
    Resolve the acting username before the route runs.

    Sets the following Flask g attributes:
    - g.actor: the resolved username, or None
    - g.actor_source: "query", "header", "cookie" or None

    This does NOT reject anonymous callers; routes decide what an absent
    identity means (unscoped listing, unowned product, ...).
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        provider = get_identity_provider()
        g.actor = provider.resolve(request)
        g.actor_source = provider.source(request)
        return f(*args, **kwargs)

    return decorated_function
