"""HTTP endpoints for matchmaking and game server synchronisation."""

from typing import Any

from flask import Blueprint, jsonify, request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from . import match_service
from .vps_repo import ServerNotFoundError

_SERVICE_ERRORS = (
    SQLAlchemyError,
    ServerNotFoundError,
    match_service.NoAvailableServerError,
    match_service.InvalidServerIdError,
)


def _object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return data


def _string(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _sync_request(data: Any) -> tuple[int, list[str]]:
    body = _object(data)
    server_id = body.get("serverId")
    if server_id is None:
        server_id = 0
    elif not isinstance(server_id, int) or isinstance(server_id, bool):
        raise ValueError("field 'serverId' must be an integer")
    players = body.get("players")
    if players is None:
        players = []
    elif not isinstance(players, list) or not all(isinstance(p, str) for p in players):
        raise ValueError("field 'players' must be a list of strings")
    return server_id, players


def _body() -> Any:
    return request.get_json(force=True, silent=True)


def make_matchmaking_blueprint(engine: Engine) -> Blueprint:
    """Build the matchmaking and server sync endpoints under ``/game``."""
    bp = Blueprint("matchmaking", __name__, url_prefix="/game")

    @bp.post("/matchmaking/join")
    def join():
        try:
            body = _object(_body())
            player_id, region = _string(body, "playerId"), _string(body, "region")
        except ValueError as exc:
            return jsonify(error=str(exc)), 400
        try:
            ip, port = match_service.join_player(engine, player_id, region)
        except _SERVICE_ERRORS as exc:
            print(f"Error joining player: {exc}")
            return jsonify(error=str(exc)), 500
        return jsonify(serverIp=ip, port=port)

    @bp.post("/matchmaking/leave")
    def leave():
        try:
            player_id = _string(_object(_body()), "playerId")
        except ValueError as exc:
            return jsonify(error=str(exc)), 400
        try:
            match_service.leave_player(engine, player_id)
        except _SERVICE_ERRORS as exc:
            return jsonify(error=str(exc)), 500
        return jsonify(status="player removed")

    @bp.post("/server/sync")
    def sync_server():
        try:
            server_id, players = _sync_request(_body())
        except ValueError as exc:
            return jsonify(error=str(exc)), 400
        try:
            match_service.sync_server_players(engine, server_id, players)
        except _SERVICE_ERRORS as exc:
            return jsonify(error=str(exc)), 500
        return jsonify(status="server players synced")

    return bp