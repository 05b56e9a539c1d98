"""HTTP surface over the stats pipeline, weekly aggregator and replacement report."""

import logging
from typing import Any

from flask import Flask, Response, jsonify, request

from fantasy_points_tracker.dates import is_valid_date
from fantasy_points_tracker.exceptions import FptException, InvalidInputError
from fantasy_points_tracker.services.container import ServiceContainer

logger = logging.getLogger(__name__)


def _parse_season(raw: str | None) -> int | None:
    if raw is None or raw == "":
        return None
    if len(raw) != 4 or not raw.isdigit():
        raise InvalidInputError(f"Invalid season: {raw!r}", user_message="Invalid season. Please use YYYY.")
    return int(raw)


_UNEXPECTED_ERROR = "An unexpected error occurred. Please try again later."


def _error_body(e: Exception, requested_date: str | None, container: ServiceContainer) -> dict[str, Any]:
    if isinstance(e, FptException):
        error, details = e.user_message, e.message
    else:
        error, details = _UNEXPECTED_ERROR, str(e)
    return {
        "error": error,
        "details": details,
        "timestamp": container.now().isoformat(),
        "date": requested_date,
    }


def create_app(container: ServiceContainer) -> Flask:
    """Create the Flask app.

    GET /stats serves one date's per-player lines through the cache, GET
    /weekly-points the season's week-by-week totals and GET /replacement-level
    the positional replacement report.
    """
    app = Flask(__name__)

    @app.route("/stats")
    def stats() -> tuple[Response, int]:
        requested = request.args.get("date") or None
        no_cache = "nocache" in request.args
        if requested is not None and not is_valid_date(requested):
            return jsonify({"error": "Invalid date format. Please use YYYY-MM-DD.", "stats": [], "date": requested}), 400
        try:
            daily = container.pipeline.get_stats(requested, no_cache=no_cache)
        except InvalidInputError as e:
            return jsonify({"error": e.user_message, "stats": [], "date": requested}), 400
        except FptException as e:
            logger.error("Failed to serve stats for %s: %s", requested or "yesterday", e.message)
            return jsonify(_error_body(e, requested, container)), 500
        except Exception as e:
            logger.exception("Unexpected error serving stats for %s", requested or "yesterday")
            return jsonify(_error_body(e, requested, container)), 500
        return jsonify(daily.to_dict()), 200

    @app.route("/weekly-points")
    def weekly_points() -> tuple[Response, int]:
        end_date = request.args.get("endDate") or None
        try:
            season = _parse_season(request.args.get("season"))
            if end_date is not None and not is_valid_date(end_date):
                raise InvalidInputError(
                    f"Invalid endDate: {end_date!r}",
                    user_message="Invalid endDate format. Please use YYYY-MM-DD.",
                )
            report = container.weekly_aggregator.aggregate(season=season, end_date=end_date)
        except InvalidInputError as e:
            return jsonify({"error": e.user_message}), 400
        except FptException as e:
            logger.error("Failed to aggregate weekly points: %s", e.message)
            return jsonify(_error_body(e, end_date, container)), 500
        except Exception as e:
            logger.exception("Unexpected error aggregating weekly points")
            return jsonify(_error_body(e, end_date, container)), 500
        return jsonify([p.to_dict() for p in report.players]), 200

    @app.route("/replacement-level")
    def replacement_level() -> tuple[Response, int]:
        try:
            season = _parse_season(request.args.get("season"))
            report = container.replacement_service.build(season)
        except InvalidInputError as e:
            return jsonify({"error": e.user_message}), 400
        except FptException as e:
            logger.error("Failed to build replacement levels: %s", e.message)
            return jsonify(_error_body(e, None, container)), 500
        except Exception as e:
            logger.exception("Unexpected error building replacement levels")
            return jsonify(_error_body(e, None, container)), 500
        return jsonify(report.to_dict()), 200

    return app
