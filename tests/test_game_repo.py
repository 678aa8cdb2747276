import pytest
from sqlalchemy import create_engine, text

from vball.ability_repo import create_main_ability, create_sub_ability
from vball.game_repo import get_all_abilities
from vball.models import CreateAbilityRequest, SubAbility

SCHEMA = [
    """CREATE TABLE main_abilities (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL, description TEXT NOT NULL, type TEXT NOT NULL,
        tier TEXT NOT NULL, duration REAL NOT NULL, cooldown REAL NOT NULL,
        spike_modifier REAL NOT NULL, jump_modifier REAL NOT NULL,
        set_modifier REAL NOT NULL, receive_modifier REAL NOT NULL,
        ball_force_multiplier REAL NOT NULL)""",
    """CREATE TABLE sub_abilities (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL, description TEXT NOT NULL, tier TEXT NOT NULL,
        modifier_type TEXT NOT NULL, modifier_value REAL NOT NULL)""",
]


@pytest.fixture
def engine(tmp_path):
    eng = create_engine(f"sqlite:///{tmp_path / 'game.db'}")
    with eng.begin() as conn:
        for statement in SCHEMA:
            conn.execute(text(statement))
    return eng


def test_empty_catalogue(engine):
    assert get_all_abilities(engine) == ([], [])


def test_returns_both_kinds(engine):
    main = create_main_ability(engine, CreateAbilityRequest(name="Blast", duration=3))
    create_sub_ability(engine, SubAbility(name="Quick", modifier_type="speed",
                                          modifier_value=0.5))
    mains, subs = get_all_abilities(engine)
    assert mains == [main]
    assert [s.name for s in subs] == ["Quick"]
    assert subs[0].modifier_value == 0.5