from datetime import datetime

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from vball.player_repo import (
    PlayerNotFoundError,
    create_player,
    create_player_abilities,
    get_admin_loadout,
    get_player_by_steam_id,
)

_SCHEMA = [
    """CREATE TABLE players (
        player_id TEXT PRIMARY KEY DEFAULT (lower(hex(randomblob(16)))),
        steam_id TEXT UNIQUE NOT NULL,
        username TEXT NOT NULL,
        kash INTEGER NOT NULL DEFAULT 0,
        ban_status TEXT NOT NULL DEFAULT 'none',
        matches_played INTEGER NOT NULL DEFAULT 0,
        wins INTEGER NOT NULL DEFAULT 0,
        losses INTEGER NOT NULL DEFAULT 0,
        last_login TEXT,
        created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP)""",
    """CREATE TABLE player_abilities (
        player_id TEXT PRIMARY KEY,
        main_ability_id INTEGER,
        sub_ability_slot1 INTEGER,
        sub_ability_slot2 INTEGER,
        sub_ability_slot3 INTEGER)""",
]


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
    )
    with eng.begin() as conn:
        for statement in _SCHEMA:
            conn.exec_driver_sql(statement)
    return eng


def test_create_then_fetch(engine):
    player_id = create_player(engine, "steam_123", "AceSpiker")
    player = get_player_by_steam_id(engine, "steam_123")
    assert player.player_id == player_id
    assert player.username == "AceSpiker"
    assert player.main_ability_id is None
    assert player.sub_ability_ids == []


def test_created_ids_are_distinct(engine):
    first = create_player(engine, "steam_1", "a")
    second = create_player(engine, "steam_2", "b")
    assert first != second and first and second


def test_duplicate_steam_id_rejected(engine):
    create_player(engine, "steam_123", "a")
    with pytest.raises(IntegrityError):
        create_player(engine, "steam_123", "b")


def test_missing_player_raises(engine):
    with pytest.raises(PlayerNotFoundError):
        get_player_by_steam_id(engine, "nobody")


def test_abilities_row_and_slots(engine):
    player_id = create_player(engine, "steam_9", "Viku")
    create_player_abilities(engine, player_id)
    with engine.begin() as conn:
        conn.execute(
            text(
                "UPDATE player_abilities SET main_ability_id = 2, "
                "sub_ability_slot1 = 3, sub_ability_slot3 = 5 WHERE player_id = :p"
            ),
            {"p": player_id},
        )
    player = get_player_by_steam_id(engine, "steam_9")
    assert player.main_ability_id == 2
    assert player.sub_ability_ids == [3, 5]


def test_timestamps_are_parsed(engine):
    with engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO players (player_id, steam_id, username, created_at, last_login) "
                "VALUES ('p1', 's1', 'u', '2024-05-01 12:00:00', '2024-06-02 08:30:00')"
            )
        )
    player = get_player_by_steam_id(engine, "s1")
    assert player.registered_at == datetime(2024, 5, 1, 12, 0)
    assert player.last_login == datetime(2024, 6, 2, 8, 30)


def test_admin_loadout_lists_all(engine):
    assert get_admin_loadout(engine) == []
    create_player(engine, "steam_1", "a")
    create_player(engine, "steam_2", "b")
    players = get_admin_loadout(engine)
    assert sorted(p.steam_id for p in players) == ["steam_1", "steam_2"]