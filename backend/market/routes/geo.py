# Overview: Flask routes proxying elevation and reverse-geocoding lookups.

from flask import Blueprint, current_app, jsonify, request

from ..services.geo_service import get_maps_client, parse_coordinates
from ..validation import UpstreamError, ValidationError

geo_bp = Blueprint("geo", __name__, url_prefix="/api")


@geo_bp.get("/elevation")
def elevation_route():
    try:
        lat, lng = parse_coordinates(request.args.get("lat"), request.args.get("lng"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        return jsonify(get_maps_client().elevation(lat, lng))
    except UpstreamError as e:
        current_app.logger.error("Google Maps API error: %s", e)
        return jsonify({"error": str(e)}), 500
    except Exception:
        current_app.logger.exception("Elevation lookup failed")
        return jsonify({"error": "Failed to get elevation data"}), 500


@geo_bp.get("/geocode")
def geocode_route():
    try:
        lat, lng = parse_coordinates(request.args.get("lat"), request.args.get("lng"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        return jsonify(get_maps_client().reverse_geocode(lat, lng))
    except UpstreamError as e:
        current_app.logger.error("Google Maps geocoding error: %s", e)
        return jsonify({"error": str(e)}), 500
    except Exception:
        current_app.logger.exception("Reverse geocoding failed")
        return jsonify({"error": "Failed to get location data"}), 500
