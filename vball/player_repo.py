"""Storage of player accounts and their equipped abilities."""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine, Row

from .models import PlayerAdmin


class PlayerNotFoundError(LookupError):
    """Raised when no player has the requested Steam id."""


_ADMIN_SELECT = """
    SELECT
        p.player_id,
        p.steam_id,
        p.username,
        p.kash,
        p.ban_status,
        p.matches_played,
        p.wins,
        p.losses,
        p.last_login,
        p.created_at,
        pa.main_ability_id,
        pa.sub_ability_slot1,
        pa.sub_ability_slot2,
        pa.sub_ability_slot3
    FROM players p
    LEFT JOIN player_abilities pa
    ON p.player_id = pa.player_id
"""

_SUB_SLOTS = ("sub_ability_slot1", "sub_ability_slot2", "sub_ability_slot3")


def _as_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    raw = str(value)
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def _admin_from_row(row: Row) -> PlayerAdmin:
    m = row._mapping
    return PlayerAdmin(
        player_id=str(m["player_id"]),
        steam_id=m["steam_id"],
        username=m["username"],
        kash=int(m["kash"]),
        ban_status=m["ban_status"],
        matches_played=int(m["matches_played"]),
        wins=int(m["wins"]),
        losses=int(m["losses"]),
        last_login=_as_datetime(m["last_login"]),
        registered_at=_as_datetime(m["created_at"]),
        main_ability_id=_optional_int(m["main_ability_id"]),
        sub_ability_ids=[int(m[slot]) for slot in _SUB_SLOTS if m[slot] is not None],
    )


def create_player(engine: Engine, steam_id: str, username: str) -> str:
    """Insert a player and return the id the database assigned."""
    with engine.begin() as conn:
        player_id = conn.execute(
            text(
                """
                INSERT INTO players (steam_id, username)
                VALUES (:steam_id, :username)
                RETURNING player_id
                """
            ),
            {"steam_id": steam_id, "username": username},
        ).scalar_one()
    return str(player_id)


def create_player_abilities(engine: Engine, player_id: str) -> None:
    """Create the empty ability loadout row for a player."""
    with engine.begin() as conn:
        conn.execute(
            text("INSERT INTO player_abilities (player_id) VALUES (:player_id)"),
            {"player_id": player_id},
        )


def get_admin_loadout(engine: Engine) -> list[PlayerAdmin]:
    """Return every player with stats and equipped abilities."""
    with engine.connect() as conn:
        return [_admin_from_row(row) for row in conn.execute(text(_ADMIN_SELECT))]


def get_player_by_steam_id(engine: Engine, steam_id: str) -> PlayerAdmin:
    """Return the player with the given Steam id."""
    with engine.connect() as conn:
        row = conn.execute(
            text(_ADMIN_SELECT + " WHERE p.steam_id = :steam_id"),
            {"steam_id": steam_id},
        ).first()
    if row is None:
        raise PlayerNotFoundError(f"no player with steam id {steam_id!r}")
    return _admin_from_row(row)