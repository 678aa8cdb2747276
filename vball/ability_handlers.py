"""HTTP endpoints for managing main and sub abilities from the dashboard."""

import re
from typing import Any

from flask import Blueprint, jsonify, request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from . import ability_repo
from .ability_repo import AbilityNotFoundError
from .models import CreateAbilityRequest, MainAbility, SubAbility

_INTEGER = re.compile(r"[+-]?\d+")
_STORAGE_ERRORS = (SQLAlchemyError, AbilityNotFoundError)


def _path_id(raw: str) -> int:
    """Read an id from the URL; anything that is not an integer reads as zero."""
    return int(raw) if _INTEGER.fullmatch(raw) else 0


def _body() -> Any:
    return request.get_json(force=True, silent=True)


def make_abilities_blueprint(engine: Engine) -> Blueprint:
    """Build the ``/abilities`` endpoints backed by the given engine."""
    bp = Blueprint("abilities", __name__, url_prefix="/abilities")

    @bp.post("/main")
    def create_main_ability():
        try:
            new_ability = CreateAbilityRequest.from_dict(_body())
        except ValueError as exc:
            print("Error binding JSON:", exc)
            return jsonify(error="invalid request"), 400
        try:
            created = ability_repo.create_main_ability(engine, new_ability)
        except _STORAGE_ERRORS as exc:
            print("Error creating main ability:", exc)
            return jsonify(error="creation failed"), 500
        print("Main ability created successfully")
        return jsonify(message="ability created", ability=created.to_dict())

    @bp.get("/main")
    def get_main_abilities():
        try:
            abilities = ability_repo.get_main_abilities(engine)
        except SQLAlchemyError as exc:
            print("Error fetching main abilities:", exc)
            return jsonify(error="failed"), 500
        print("Main abilities fetched successfully")
        return jsonify([ability.to_dict() for ability in abilities])

    @bp.get("/main/<ability_id>")
    def get_main_ability(ability_id: str):
        try:
            ability = ability_repo.get_main_ability(engine, _path_id(ability_id))
        except _STORAGE_ERRORS:
            return jsonify(error="not found"), 404
        return jsonify(ability.to_dict())

    @bp.patch("/main/<ability_id>")
    def update_main_ability(ability_id: str):
        try:
            ability = MainAbility.from_dict(_body())
        except ValueError:
            return jsonify(error="invalid request"), 400
        try:
            ability_repo.update_main_ability(engine, _path_id(ability_id), ability)
        except SQLAlchemyError as exc:
            print("Error updating main ability:", exc)
            return jsonify(message="update failed", error=True), 500
        print("Main ability updated successfully")
        return jsonify(message="updated", error=False)

    @bp.delete("/main/<ability_id>")
    def delete_main_ability(ability_id: str):
        try:
            ability_repo.delete_main_ability(engine, _path_id(ability_id))
        except SQLAlchemyError as exc:
            print("Error deleting main ability:", exc)
            return jsonify(error=True, message="deletion failed"), 500
        print("Main ability deleted successfully")
        return jsonify(message="deleted", error=False)

    @bp.post("/sub")
    def create_sub_ability():
        try:
            ability = SubAbility.from_dict(_body())
        except ValueError:
            return jsonify(error="invalid request"), 400
        try:
            ability_repo.create_sub_ability(engine, ability)
        except SQLAlchemyError:
            return jsonify(error="creation failed"), 500
        return jsonify(message="sub ability created")

    @bp.get("/sub")
    def get_sub_abilities():
        try:
            abilities = ability_repo.get_sub_abilities(engine)
        except SQLAlchemyError:
            return jsonify(error="failed"), 500
        return jsonify([ability.to_dict() for ability in abilities])

    @bp.get("/sub/<ability_id>")
    def get_sub_ability(ability_id: str):
        try:
            ability = ability_repo.get_sub_ability(engine, _path_id(ability_id))
        except _STORAGE_ERRORS:
            return jsonify(error="not found"), 404
        return jsonify(ability.to_dict())

    @bp.patch("/sub/<ability_id>")
    def update_sub_ability(ability_id: str):
        try:
            ability = SubAbility.from_dict(_body())
        except ValueError:
            return jsonify(error="invalid request"), 400
        try:
            ability_repo.update_sub_ability(engine, _path_id(ability_id), ability)
        except SQLAlchemyError:
            return jsonify(error="update failed"), 500
        return jsonify(message="updated")

    @bp.delete("/sub/<ability_id>")
    def delete_sub_ability(ability_id: str):
        try:
            ability_repo.delete_sub_ability(engine, _path_id(ability_id))
        except SQLAlchemyError:
            return jsonify(error="delete failed"), 500
        return jsonify(message="deleted")

    return bp