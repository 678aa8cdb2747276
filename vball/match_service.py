"""Matchmaking: placing players on game servers and tracking who is where."""

from typing import Iterable

from sqlalchemy.engine import Engine

from . import vps_repo
from .models import Region


class NoAvailableServerError(LookupError):
    """Raised when a region has no running server with a free slot."""


class InvalidServerIdError(ValueError):
    """Raised when a server id of zero is given."""


def join_player(engine: Engine, player_id: str, region: str) -> tuple[str, int]:
    """Place a player on a server in the region and return its IP and port."""
    with engine.begin() as conn:
        try:
            server, ip = vps_repo.find_available_server(conn, region)
        except vps_repo.ServerNotFoundError as exc:
            raise NoAvailableServerError("no available servers") from exc
        vps_repo.add_player(conn, server.id, player_id)
        vps_repo.increment_players(conn, server.id)
    return ip, server.port


def leave_player(engine: Engine, player_id: str) -> None:
    """Take a player off the server they are on."""
    server_id = vps_repo.find_player_server(engine, player_id)
    vps_repo.remove_player(engine, player_id)
    vps_repo.decrement_players(engine, server_id)


def sync_server_players(engine: Engine, server_id: int, players: Iterable[str]) -> None:
    """Replace the recorded player list of a server."""
    if server_id == 0:
        raise InvalidServerIdError("invalid server id")
    vps_repo.sync_server_players(engine, server_id, players)


def get_regions(engine: Engine) -> list[Region]:
    """Return every region."""
    return vps_repo.get_all_regions(engine)


class ServerService:
    """Simulated control of game server processes."""

    def start_server(self, port: int) -> int:
        """Start a server on a port and return its process id."""
        print("Starting Unreal server:", port)
        return port * 100

    def stop_server(self, pid: int) -> None:
        """Stop the server process with the given id."""
        print("Stopping server process:", pid)