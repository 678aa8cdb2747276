"""Storage of main and sub abilities."""

from sqlalchemy import text
from sqlalchemy.engine import Engine, Row

from .models import CreateAbilityRequest, MainAbility, SubAbility


class AbilityNotFoundError(LookupError):
    """Raised when no ability has the requested id."""


_MAIN_COLUMNS = (
    "id, name, description, type, tier, duration, cooldown, "
    "spike_modifier, jump_modifier, set_modifier, receive_modifier, "
    "ball_force_multiplier"
)
_MAIN_FLOATS = frozenset(
    {
        "duration", "cooldown", "spike_modifier", "jump_modifier",
        "set_modifier", "receive_modifier", "ball_force_multiplier",
    }
)
_SUB_COLUMNS = "id, name, description, tier, modifier_type, modifier_value"


def _main_from_row(row: Row) -> MainAbility:
    values = {
        key: float(value) if key in _MAIN_FLOATS else value
        for key, value in row._mapping.items()
    }
    values["id"] = int(values["id"])
    return MainAbility(**values)


def _sub_from_row(row: Row) -> SubAbility:
    values = dict(row._mapping)
    values["id"] = int(values["id"])
    values["modifier_value"] = float(values["modifier_value"])
    return SubAbility(**values)


def create_main_ability(engine: Engine, request: CreateAbilityRequest) -> MainAbility:
    """Insert a main ability and return it as stored."""
    query = text(
        """
        INSERT INTO main_abilities
        (name, description, type, tier, duration, cooldown,
         spike_modifier, jump_modifier, set_modifier, receive_modifier,
         ball_force_multiplier)
        VALUES (:name, :description, :type, :tier, :duration, :cooldown,
                :spike_modifier, :jump_modifier, :set_modifier,
                :receive_modifier, :ball_force_multiplier)
        RETURNING id
        """
    )
    with engine.begin() as conn:
        new_id = conn.execute(query, request.to_dict()).scalar_one()
    return get_main_ability(engine, int(new_id))


def get_main_abilities(engine: Engine) -> list[MainAbility]:
    """Return every main ability."""
    with engine.connect() as conn:
        rows = conn.execute(text(f"SELECT {_MAIN_COLUMNS} FROM main_abilities"))
        return [_main_from_row(row) for row in rows]


def get_main_ability(engine: Engine, ability_id: int) -> MainAbility:
    """Return the main ability with the given id."""
    with engine.connect() as conn:
        row = conn.execute(
            text(f"SELECT {_MAIN_COLUMNS} FROM main_abilities WHERE id = :id"),
            {"id": ability_id},
        ).first()
    if row is None:
        raise AbilityNotFoundError("ability not found")
    return _main_from_row(row)


def update_main_ability(engine: Engine, ability_id: int, ability: MainAbility) -> None:
    """Overwrite every stored field of a main ability."""
    params = ability.to_dict()
    params["id"] = ability_id
    with engine.begin() as conn:
        conn.execute(
            text(
                """
                UPDATE main_abilities
                SET name = :name,
                    description = :description,
                    type = :type,
                    tier = :tier,
                    duration = :duration,
                    cooldown = :cooldown,
                    spike_modifier = :spike_modifier,
                    jump_modifier = :jump_modifier,
                    set_modifier = :set_modifier,
                    receive_modifier = :receive_modifier,
                    ball_force_multiplier = :ball_force_multiplier
                WHERE id = :id
                """
            ),
            params,
        )


def delete_main_ability(engine: Engine, ability_id: int) -> None:
    """Delete a main ability; deleting a missing id is not an error."""
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM main_abilities WHERE id = :id"), {"id": ability_id})


def create_sub_ability(engine: Engine, ability: SubAbility) -> None:
    """Insert a sub ability; its id is assigned by the database."""
    with engine.begin() as conn:
        conn.execute(
            text(
                """
                INSERT INTO sub_abilities
                (name, description, tier, modifier_type, modifier_value)
                VALUES (:name, :description, :tier, :modifier_type, :modifier_value)
                """
            ),
            {
                "name": ability.name,
                "description": ability.description,
                "tier": ability.tier,
                "modifier_type": ability.modifier_type,
                "modifier_value": ability.modifier_value,
            },
        )


def get_sub_abilities(engine: Engine) -> list[SubAbility]:
    """Return every sub ability."""
    with engine.connect() as conn:
        rows = conn.execute(text(f"SELECT {_SUB_COLUMNS} FROM sub_abilities"))
        return [_sub_from_row(row) for row in rows]


def get_sub_ability(engine: Engine, ability_id: int) -> SubAbility:
    """Return the sub ability with the given id."""
    with engine.connect() as conn:
        row = conn.execute(
            text(f"SELECT {_SUB_COLUMNS} FROM sub_abilities WHERE id = :id"),
            {"id": ability_id},
        ).first()
    if row is None:
        raise AbilityNotFoundError("ability not found")
    return _sub_from_row(row)


def update_sub_ability(engine: Engine, ability_id: int, ability: SubAbility) -> None:
    """Update only the modifier type and value of a sub ability."""
    with engine.begin() as conn:
        conn.execute(
            text(
                """
                UPDATE sub_abilities
                SET modifier_type = :modifier_type,
                    modifier_value = :modifier_value
                WHERE id = :id
                """
            ),
            {
                "modifier_type": ability.modifier_type,
                "modifier_value": ability.modifier_value,
                "id": ability_id,
            },
        )


def delete_sub_ability(engine: Engine, ability_id: int) -> None:
    """Delete a sub ability; deleting a missing id is not an error."""
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM sub_abilities WHERE id = :id"), {"id": ability_id})