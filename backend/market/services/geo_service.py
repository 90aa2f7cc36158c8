# Overview: Google Maps pass-through for elevation and reverse geocoding.

"""
Thin client for the Google Maps Elevation and Geocoding web services.

Each call has its own bounded timeout. The provider's first result is
returned; when it has none, a response is synthesized from the requested
coordinates. Provider error messages are surfaced verbatim through
UpstreamError.
"""

from __future__ import annotations

import math

import httpx
from flask import current_app

from ..validation import UpstreamError, ValidationError

OK_STATUSES = {"OK", "ZERO_RESULTS"}


def parse_coordinates(lat_raw, lng_raw) -> tuple[float, float]:
    try:
        lat = float(lat_raw)
        lng = float(lng_raw)
    except (TypeError, ValueError):
        raise ValidationError("Invalid latitude or longitude")
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise ValidationError("Invalid latitude or longitude")
    return lat, lng


def format_coordinates(lat: float, lng: float) -> str:
    return f"{lat:.6f}, {lng:.6f}"


class MapsClient:
    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str,
        elevation_timeout: float = 1.0,
        geocode_timeout: float = 2.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.elevation_timeout = elevation_timeout
        self.geocode_timeout = geocode_timeout
        self.transport = transport

    @classmethod
    def from_config(cls, config, transport: httpx.BaseTransport | None = None) -> "MapsClient":
        return cls(
            api_key=config.get("MAPS_API_KEY"),
            base_url=config["MAPS_BASE_URL"],
            elevation_timeout=config["MAPS_ELEVATION_TIMEOUT"],
            geocode_timeout=config["MAPS_GEOCODE_TIMEOUT"],
            transport=transport,
        )

    def _get(self, path: str, params: dict, *, timeout: float, fallback_error: str) -> dict:
        params = dict(params, key=self.api_key) if self.api_key else params
        try:
            with httpx.Client(base_url=self.base_url, timeout=timeout, transport=self.transport) as client:
                response = client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(fallback_error) from exc

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        message = data.get("error_message")
        if response.is_error:
            raise UpstreamError(message or fallback_error)
        if data.get("status") not in OK_STATUSES:
            raise UpstreamError(message or fallback_error)
        return data

    def elevation(self, lat: float, lng: float) -> dict:
        data = self._get(
            "/elevation/json",
            {"locations": f"{lat},{lng}"},
            timeout=self.elevation_timeout,
            fallback_error="Failed to get elevation data",
        )
        results = data.get("results") or []
        if not results:
            return {"elevation": None, "location": {"lat": lat, "lng": lng}}
        first = results[0]
        return {
            "elevation": first.get("elevation"),
            "location": first.get("location"),
        }

    def reverse_geocode(self, lat: float, lng: float) -> dict:
        data = self._get(
            "/geocode/json",
            {"latlng": f"{lat},{lng}"},
            timeout=self.geocode_timeout,
            fallback_error="Failed to get location data",
        )
        results = data.get("results") or []
        if results:
            address = results[0].get("formatted_address")
        else:
            address = format_coordinates(lat, lng)
        return {
            "formatted_address": address,
            "coordinates": {"lat": lat, "lng": lng},
        }


def get_maps_client() -> MapsClient:
    return current_app.extensions["maps_client"]
