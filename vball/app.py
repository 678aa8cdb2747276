"""Application factory and command-line entry point for the API server."""

import argparse
import os
import sys
from typing import Optional, Sequence

from flask import Flask, Response, request
from sqlalchemy.engine import Engine

from .ability_handlers import make_abilities_blueprint
from .database import DatabaseConfigError, connect
from .game_handlers import make_admin_blueprint, make_game_blueprint
from .vps_handlers import make_matchmaking_blueprint

ALLOWED_ORIGINS = frozenset({"http://localhost:3000"})
ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH")
ALLOWED_HEADERS = ("Origin", "Content-Type", "Authorization")
DEFAULT_PORT = "8080"


def _install_cors(app: Flask) -> None:
    """Allow credentialed cross-origin requests from the dashboard only."""

    @app.before_request
    def check_origin():
        origin = request.headers.get("Origin")
        if not origin:
            return None
        if origin not in ALLOWED_ORIGINS:
            return Response(status=403)
        if request.method == "OPTIONS":
            response = Response(status=204)
            response.headers["Access-Control-Allow-Methods"] = ",".join(ALLOWED_METHODS)
            response.headers["Access-Control-Allow-Headers"] = ",".join(ALLOWED_HEADERS)
            return response
        return None

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        origin = request.headers.get("Origin")
        if origin in ALLOWED_ORIGINS:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.vary.add("Origin")
        return response


def create_app(engine: Engine) -> Flask:
    """Build the API application with every route backed by the given engine."""
    app = Flask(__name__)
    _install_cors(app)
    app.register_blueprint(make_abilities_blueprint(engine))
    app.register_blueprint(make_admin_blueprint(engine))
    app.register_blueprint(make_game_blueprint(engine))
    app.register_blueprint(make_matchmaking_blueprint(engine))
    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Connect to the database and serve the API on $PORT (default 8080)."""
    parser = argparse.ArgumentParser(
        prog="vball", description="Serve the volleyball game backend API."
    )
    parser.parse_args(argv)
    try:
        engine = connect()
    except DatabaseConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    app = create_app(engine)
    port = os.environ.get("PORT") or DEFAULT_PORT
    print(f"Server running on http://localhost:{port}")
    app.run(host="0.0.0.0", port=int(port))
    return 0