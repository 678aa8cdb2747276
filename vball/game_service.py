"""Player and ability operations used by the game client and dashboard."""

from sqlalchemy.engine import Engine

from . import game_repo, player_repo
from .models import MainAbility, PlayerAdmin, SubAbility


def get_all_abilities(engine: Engine) -> tuple[list[MainAbility], list[SubAbility]]:
    """Return the full ability catalogue."""
    return game_repo.get_all_abilities(engine)


def steam_login(engine: Engine, steam_id: str, username: str) -> PlayerAdmin:
    """Return the player for a Steam id, registering a new one if needed."""
    try:
        player = player_repo.get_player_by_steam_id(engine, steam_id)
    except player_repo.PlayerNotFoundError:
        pass
    else:
        print(f"Player with SteamID {steam_id} already exists. Returning existing player.")
        return player
    player_id = player_repo.create_player(engine, steam_id, username)
    player_repo.create_player_abilities(engine, player_id)
    return player_repo.get_player_by_steam_id(engine, steam_id)


def get_admin_loadout(engine: Engine) -> list[PlayerAdmin]:
    """Return every player for the admin dashboard."""
    return player_repo.get_admin_loadout(engine)


def get_player_by_steam_id(engine: Engine, steam_id: str) -> PlayerAdmin:
    """Return the player with the given Steam id."""
    return player_repo.get_player_by_steam_id(engine, steam_id)