# Overview: Caller identity resolution.

"""
Who is making this request?

The marketplace has no real authentication: the acting username is taken
from the request itself, with precedence

    ?username=<name>  >  X-Username header  >  username cookie

Any caller can claim any identity this way. Routes never read these
sources directly; they go through the IdentityProvider registered on the
app (app.extensions["identity_provider"]) so a session-backed provider can
replace this one without touching the services.
"""

from __future__ import annotations

from flask import current_app


class IdentityProvider:
    """Interface: map a Flask request to an acting username (or None)."""

    def resolve(self, request) -> str | None:
        raise NotImplementedError

    def source(self, request) -> str | None:
        """Name of the signal the identity came from, for logging."""
        return None


class RequestIdentityResolver(IdentityProvider):
    def __init__(self, *, query_param: str = "username", header: str = "X-Username", cookie: str = "username"):
        self.query_param = query_param
        self.header = header
        self.cookie = cookie

    @classmethod
    def from_config(cls, config) -> "RequestIdentityResolver":
        return cls(
            query_param=config["IDENTITY_QUERY_PARAM"],
            header=config["IDENTITY_HEADER"],
            cookie=config["IDENTITY_COOKIE_NAME"],
        )

    def _candidates(self, request):
        yield "query", request.args.get(self.query_param)
        yield "header", request.headers.get(self.header)
        yield "cookie", request.cookies.get(self.cookie)

    def resolve(self, request) -> str | None:
        for _, value in self._candidates(request):
            if value:
                return value
        return None

    def source(self, request) -> str | None:
        for name, value in self._candidates(request):
            if value:
                return name
        return None


def get_identity_provider() -> IdentityProvider:
    return current_app.extensions["identity_provider"]


def cookie_identity(request) -> str | None:
    """The identity cookie alone (what /whoami reports)."""
    return request.cookies.get(current_app.config["IDENTITY_COOKIE_NAME"]) or None
