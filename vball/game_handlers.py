"""HTTP endpoints for the game client and the admin dashboard."""

from typing import Any

from flask import Blueprint, jsonify, request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from . import game_service, match_service
from .player_repo import PlayerNotFoundError


def _login_request(data: Any) -> tuple[str, str]:
    """Read the Steam id and username from a login body."""
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    values = []
    for key in ("steamId", "username"):
        value = data.get(key)
        if value is None:
            value = ""
        elif not isinstance(value, str):
            raise ValueError(f"field {key!r} must be a string")
        values.append(value)
    return values[0], values[1]


def make_admin_blueprint(engine: Engine) -> Blueprint:
    """Build the ``/admin`` endpoints backed by the given engine."""
    bp = Blueprint("admin", __name__, url_prefix="/admin")

    @bp.get("")
    def admin_loadout():
        try:
            players = game_service.get_admin_loadout(engine)
        except SQLAlchemyError as exc:
            print("Error fetching players:", exc)
            return jsonify(error="failed to load players"), 500
        try:
            main_abilities, sub_abilities = game_service.get_all_abilities(engine)
        except SQLAlchemyError as exc:
            print("Error fetching abilities:", exc)
            return jsonify(error="failed to load abilities"), 500
        try:
            regions = match_service.get_regions(engine)
        except SQLAlchemyError as exc:
            print("Error fetching regions:", exc)
            return jsonify(error="failed to load regions"), 500
        return jsonify(
            players=[player.to_dict() for player in players],
            mainAbilities=[ability.to_dict() for ability in main_abilities],
            subAbilities=[ability.to_dict() for ability in sub_abilities],
            regions=[region.to_dict() for region in regions],
        )

    @bp.get("/players/<steamid>")
    def player_by_steam_id(steamid: str):
        try:
            player = game_service.get_player_by_steam_id(engine, steamid)
        except PlayerNotFoundError:
            return jsonify(error="player not found"), 404
        except SQLAlchemyError:
            return jsonify(error="failed to fetch player"), 500
        return jsonify(player.to_dict())

    return bp


def make_game_blueprint(engine: Engine) -> Blueprint:
    """Build the ``/game`` login and ability endpoints backed by the given engine."""
    bp = Blueprint("game", __name__, url_prefix="/game")

    @bp.post("/auth")
    def steam_login():
        try:
            steam_id, username = _login_request(request.get_json(force=True, silent=True))
        except ValueError:
            return jsonify(error="invalid request body"), 400
        try:
            player = game_service.steam_login(engine, steam_id, username)
        except (SQLAlchemyError, PlayerNotFoundError) as exc:
            print(f"Error creating player: {exc}")
            return jsonify(error="failed to get steam login URL"), 500
        return jsonify(redirectURL=player.to_dict())

    @bp.get("/abilities")
    def game_abilities():
        try:
            main_abilities, sub_abilities = game_service.get_all_abilities(engine)
        except SQLAlchemyError:
            return jsonify(error="failed to load abilities"), 500
        return jsonify(
            mainAbilities=[ability.to_dict() for ability in main_abilities],
            subAbilities=[ability.to_dict() for ability in sub_abilities],
        )

    return bp