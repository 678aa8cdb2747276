"""Queries that load the ability catalogue for game clients."""

from sqlalchemy.engine import Engine

from .ability_repo import get_main_abilities, get_sub_abilities
from .models import MainAbility, SubAbility


def get_all_abilities(engine: Engine) -> tuple[list[MainAbility], list[SubAbility]]:
    """Return all main abilities and all sub abilities."""
    return get_main_abilities(engine), get_sub_abilities(engine)