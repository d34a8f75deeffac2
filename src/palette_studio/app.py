from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .codec import ParseError, format_color, get_space, to_hex
from .hues import group_common_hues
from .locator import find_matching_luminosity
from .projector import chart_channels, project
from .ratios import create_theme, distribute_luminosity, distribute_ratios
from .scale import build_diverging, build_scale

log = logging.getLogger(__name__)

DEFAULTS: Mapping[str, Any] = {
    "MAX_SAMPLES": 512,
    "LOG_LEVEL": "INFO",
}


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _count(value: Any, default: int, upper: int) -> int:
    try:
        n = int(value if value is not None else default)
    except (TypeError, ValueError):
        raise ValueError("n must be an integer") from None
    return max(1, min(n, upper))


def _colors(body: Mapping[str, Any], key: str) -> list[str]:
    values = body.get(key)
    if values is None:
        return []
    if not isinstance(values, list):
        raise ValueError(f"{key} must be a list of colors")
    return [to_hex(v) for v in values]


def _scale_from(body: Mapping[str, Any]):
    space = get_space(body.get("space", "CAM02")).tag
    smooth = _flag(body.get("smooth", False))
    if body.get("end_keys") is not None:
        middle = body.get("middle")
        return build_diverging(
            _colors(body, "keys"),
            _colors(body, "end_keys"),
            to_hex(middle) if middle else None,
            smooth=smooth,
            space=space,
        )
    return build_scale(_colors(body, "keys"), smooth=smooth, space=space)


# ----------------------------- Flask app ----------------------------------


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update(DEFAULTS)
    if config:
        app.config.update(config)
    logging.basicConfig(
        level=getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO),
        format="%(levelname)s: %(message)s",
    )

    def body() -> Mapping[str, Any]:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        return data

    @app.errorhandler(ValueError)
    def bad_request(exc: ValueError):
        # ParseError included
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(Exception)
    def failed(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        log.exception("Request failed")
        return jsonify({"error": str(exc)}), 500

    @app.route("/convert")
    def convert():
        color = request.args.get("color", "")
        space = request.args.get("space", "HEX")
        if not color:
            raise ParseError(color, space, "empty color")
        as_object = _flag(request.args.get("object", False))
        return jsonify(
            {"hex": to_hex(color), "value": format_color(color, space, as_object)}
        )

    @app.route("/scale", methods=["POST"])
    def scale():
        data = body()
        n = _count(data.get("n"), 11, app.config["MAX_SAMPLES"])
        built = _scale_from(data)
        return jsonify({"colors": built.samples(n)})

    @app.route("/luminosity", methods=["POST"])
    def luminosity():
        data = body()
        built = _scale_from(data)
        values = [float(v) for v in data.get("luminosities", [])]
        colors = find_matching_luminosity(
            built, built.domain_max, values, _flag(data.get("smooth", False))
        )
        return jsonify({"colors": colors})

    @app.route("/chart", methods=["POST"])
    def chart():
        data = body()
        space = get_space(data.get("space", "LCH")).tag
        series = project(_colors(data, "colors"), space)
        return jsonify({"channels": list(chart_channels(space)), **series})

    @app.route("/hues", methods=["POST"])
    def hues():
        data = body()
        return jsonify({"groups": group_common_hues(_colors(data, "colors"))})

    @app.route("/ratios/distribute", methods=["POST"])
    def distribute():
        data = body()
        mode = data.get("mode", "ratios")
        if mode not in ("ratios", "luminosity"):
            raise ValueError(f"mode must be 'ratios' or 'luminosity', not {mode!r}")
        theme = create_theme(
            _scale_from(data),
            [float(r) for r in data.get("ratios", [])],
            background=data.get("background", "#ffffff"),
            smooth=_flag(data.get("smooth", False)),
        )
        theme = distribute_ratios(theme) if mode == "ratios" else distribute_luminosity(theme)
        return jsonify(
            {
                "entries": [
                    {"ratio": e.ratio, "luminosity": e.luminosity, "swatch": e.swatch}
                    for e in theme.entries
                ]
            }
        )

    return app


__all__ = ["create_app"]
