"""HTTP entrypoint serving company searches to the browser extension."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

from flask import Flask, jsonify, request

from company_finder.core.config import get_settings
from company_finder.core.errors import NotFoundError, TransportError
from company_finder.etl.transform import to_company_payload
from company_finder.pipeline import find_companies
from company_finder.vendors import local_backend

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    return "IT Company Finder API is running", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Health endpoint; pings the local backend only when it is the company source."""
    settings = get_settings()
    payload = {
        "status": "ok",
        "company_source": settings.company_source,
        "worker_port_config": settings.worker_port,
        "sample_fallback": settings.sample_fallback,
    }
    if settings.company_source == "backend":
        payload["backend_reachable"] = local_backend.ping()
    return jsonify(payload), 200


def _int_arg(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    value = int(raw)
    if value < 0 or (value == 0 and name == "radius"):
        raise ValueError(f"{name} must be positive")
    return value


@app.get("/api/companies")
def list_companies() -> Any:
    """
    Search IT companies near a place.
    Required query param: location
    Optional: radius (meters), max_emails (int)
    """
    location = (request.args.get("location") or "").strip()
    if not location:
        return jsonify({"error": "location is required"}), 400

    try:
        radius = _int_arg("radius")
        max_emails = _int_arg("max_emails")
    except ValueError:
        return jsonify({"error": "radius and max_emails must be positive integers"}), 400

    logger.info("Company search for location=%s radius=%s", location, radius)
    try:
        center, companies = find_companies(location, radius_m=radius, max_emails=max_emails)
    except NotFoundError:
        return jsonify({"error": "place not found"}), 404
    except TransportError as exc:
        logger.error("Company search failed for %s: %s", location, exc)
        return jsonify({"error": "search failed"}), 502

    return (
        jsonify(
            {
                "data": {
                    "query": location,
                    "status": "ok" if companies else "empty",
                    "center": center.to_dict() if center else None,
                    "companies": [to_company_payload(record) for record in companies],
                }
            }
        ),
        200,
    )


def main() -> None:
    env_port = os.getenv("PORT")
    logger.info("[BOOT] ENV PORT=%s", env_port)

    port = int(env_port or 8080)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
