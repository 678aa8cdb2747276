"""Storage of regions, game servers and the players connected to them."""

from typing import Iterable

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

from .models import GameServer, Region


class ServerNotFoundError(LookupError):
    """Raised when no matching game server exists."""


def find_available_server(conn: Connection, region: str) -> tuple[GameServer, str]:
    """Lock and return the least populated running server in a region, with its IP."""
    query = """
        SELECT
            gs.id,
            gs.machine_id,
            gs.port,
            gs.max_players,
            gs.current_players,
            m.ip_address
        FROM game_servers gs
        JOIN machines m ON m.id = gs.machine_id
        JOIN regions r ON r.id = m.region_id
        WHERE LOWER(r.name) = LOWER(:region)
        AND gs.current_players < gs.max_players
        AND gs.status = 'running'
        ORDER BY gs.current_players ASC
        LIMIT 1
    """
    if conn.dialect.name == "postgresql":
        query += " FOR UPDATE SKIP LOCKED"
    row = conn.execute(text(query), {"region": region}).first()
    if row is None:
        raise ServerNotFoundError(f"no available server in region {region!r}")
    m = row._mapping
    server = GameServer(
        id=int(m["id"]),
        machine_id=str(m["machine_id"]),
        port=int(m["port"]),
        max_players=int(m["max_players"]),
        current_players=int(m["current_players"]),
    )
    return server, m["ip_address"]


def add_player(conn: Connection, server_id: int, player_id: str) -> None:
    """Record a player on a server; an existing record is left alone."""
    conn.execute(
        text(
            """
            INSERT INTO server_players (server_id, player_id)
            VALUES (:server_id, :player_id)
            ON CONFLICT DO NOTHING
            """
        ),
        {"server_id": server_id, "player_id": player_id},
    )


def increment_players(conn: Connection, server_id: int) -> None:
    """Add one to a server's player count."""
    conn.execute(
        text("UPDATE game_servers SET current_players = current_players + 1 WHERE id = :id"),
        {"id": server_id},
    )


def decrement_players(engine: Engine, server_id: int) -> None:
    """Subtract one from a server's player count, never going below zero."""
    with engine.begin() as conn:
        conn.execute(
            text(
                "UPDATE game_servers SET current_players = current_players - 1 "
                "WHERE id = :id AND current_players > 0"
            ),
            {"id": server_id},
        )


def find_player_server(engine: Engine, player_id: str) -> int:
    """Return the id of the server a player is on."""
    with engine.connect() as conn:
        server_id = conn.execute(
            text("SELECT server_id FROM server_players WHERE player_id = :player_id"),
            {"player_id": player_id},
        ).scalar()
    if server_id is None:
        raise ServerNotFoundError(f"player {player_id!r} is not on any server")
    return int(server_id)


def remove_player(engine: Engine, player_id: str) -> None:
    """Remove a player from every server."""
    with engine.begin() as conn:
        conn.execute(
            text("DELETE FROM server_players WHERE player_id = :player_id"),
            {"player_id": player_id},
        )


def sync_server_players(engine: Engine, server_id: int, players: Iterable[str]) -> None:
    """Replace a server's player list and count in one transaction."""
    roster = list(players)
    with engine.begin() as conn:
        conn.execute(
            text("DELETE FROM server_players WHERE server_id = :server_id"),
            {"server_id": server_id},
        )
        for player in roster:
            conn.execute(
                text(
                    "INSERT INTO server_players (server_id, player_id) "
                    "VALUES (:server_id, :player_id)"
                ),
                {"server_id": server_id, "player_id": player},
            )
        conn.execute(
            text("UPDATE game_servers SET current_players = :count WHERE id = :id"),
            {"count": len(roster), "id": server_id},
        )


def get_all_regions(engine: Engine) -> list[Region]:
    """Return every region."""
    with engine.connect() as conn:
        rows = conn.execute(text("SELECT id, name FROM regions"))
        return [Region(id=str(row.id), name=row.name) for row in rows]