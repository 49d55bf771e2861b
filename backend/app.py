import asyncio
import logging

from flask import Flask, jsonify, request
from flask_cors import CORS

import config
from controller import COORDINATE_SEARCH_FAILED, NAME_SEARCH_FAILED
from errors import NotFound, UpstreamError
from geocoding import autocomplete_city
from resolver import LocationResolver

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)

resolver = LocationResolver()


@app.route("/api/hello")
def hello():
    return jsonify({"message": "Hello from Python!"})


@app.route("/api/autocomplete")
def autocomplete():
    """Return city suggestions for a partial name."""
    q = request.args.get("q", "").strip()
    if len(q) < config.MIN_QUERY_LENGTH:
        return jsonify({"suggestions": []})
    try:
        results = autocomplete_city(q)
    except UpstreamError as e:
        logger.warning("Autocomplete for %r failed: %s", q, e)
        results = []
    return jsonify({"suggestions": [item.to_dict() for item in results]})


@app.route("/api/search")
def search():
    """Geocode a city name and return its current weather."""
    city = request.args.get("city", "").strip()
    if not city:
        return jsonify({"error": "Missing query parameter 'city'"}), 400

    try:
        resolution = asyncio.run(resolver.resolve_by_name(city))
    except NotFound:
        return jsonify({"error": NAME_SEARCH_FAILED}), 404
    except UpstreamError as e:
        logger.warning("Search for %r failed: %s", city, e)
        return jsonify({"error": NAME_SEARCH_FAILED}), 502

    return jsonify(resolution.to_dict())


@app.route("/api/location-weather")
def location_weather():
    """Return current weather and a place name for a lat/lon pair."""
    try:
        lat = float(request.args["lat"])
        lon = float(request.args["lon"])
    except (KeyError, ValueError):
        return jsonify({"error": "Missing or invalid 'lat' and 'lon' parameters"}), 400
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return jsonify({"error": "Coordinates out of range"}), 400

    try:
        resolution = asyncio.run(resolver.resolve_by_coordinates(lat, lon))
    except UpstreamError as e:
        logger.warning("Weather for %.4f,%.4f failed: %s", lat, lon, e)
        return jsonify({"error": COORDINATE_SEARCH_FAILED}), 502

    return jsonify(resolution.to_dict())


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL)
    app.run(debug=True, host=config.API_HOST, port=config.API_PORT)
