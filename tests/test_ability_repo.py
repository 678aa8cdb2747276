import pytest
from sqlalchemy import create_engine, text

from vball.ability_repo import (
    AbilityNotFoundError,
    create_main_ability,
    create_sub_ability,
    delete_main_ability,
    delete_sub_ability,
    get_main_abilities,
    get_main_ability,
    get_sub_abilities,
    get_sub_ability,
    update_main_ability,
    update_sub_ability,
)
from vball.models import CreateAbilityRequest, MainAbility, SubAbility

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
    eng = create_engine(f"sqlite:///{tmp_path / 'abilities.db'}")
    with eng.begin() as conn:
        for statement in SCHEMA:
            conn.execute(text(statement))
    return eng


def _request(name="Blast"):
    return CreateAbilityRequest(
        name=name, type="active", tier="S", duration=5, cooldown=10,
        description="big hit", spike_modifier=1.5, ball_force_multiplier=2.0,
    )


def test_create_main_ability_returns_stored(engine):
    created = create_main_ability(engine, _request())
    assert created.name == "Blast"
    assert created.duration == 5.0
    assert created.spike_modifier == 1.5
    assert get_main_ability(engine, created.id) == created


def test_get_main_abilities_lists_all(engine):
    first = create_main_ability(engine, _request("A"))
    second = create_main_ability(engine, _request("B"))
    assert get_main_abilities(engine) == [first, second]


def test_get_main_abilities_empty(engine):
    assert get_main_abilities(engine) == []


def test_get_missing_main_ability_raises(engine):
    with pytest.raises(AbilityNotFoundError, match="ability not found"):
        get_main_ability(engine, 42)


def test_update_main_ability(engine):
    created = create_main_ability(engine, _request())
    changed = MainAbility(
        id=999, name="Renamed", description="x", type="passive", tier="B",
        duration=2.5, cooldown=1.0,
    )
    update_main_ability(engine, created.id, changed)
    stored = get_main_ability(engine, created.id)
    assert stored.name == "Renamed"
    assert stored.duration == 2.5
    assert stored.id == created.id


def test_delete_main_ability(engine):
    created = create_main_ability(engine, _request())
    delete_main_ability(engine, created.id)
    with pytest.raises(AbilityNotFoundError):
        get_main_ability(engine, created.id)


def test_sub_ability_create_and_list(engine):
    create_sub_ability(engine, SubAbility(name="Quick", description="d", tier="A",
                                          modifier_type="speed", modifier_value=0.25))
    subs = get_sub_abilities(engine)
    assert len(subs) == 1
    assert subs[0].name == "Quick"
    assert get_sub_ability(engine, subs[0].id) == subs[0]


def test_sub_abilities_empty(engine):
    assert get_sub_abilities(engine) == []


def test_get_missing_sub_ability_raises(engine):
    with pytest.raises(AbilityNotFoundError):
        get_sub_ability(engine, 7)


def test_update_sub_ability_only_changes_modifier(engine):
    create_sub_ability(engine, SubAbility(name="Quick", description="d", tier="A",
                                          modifier_type="speed", modifier_value=0.25))
    sub_id = get_sub_abilities(engine)[0].id
    update_sub_ability(engine, sub_id, SubAbility(name="Other", tier="C",
                                                  modifier_type="jump", modifier_value=3.0))
    stored = get_sub_ability(engine, sub_id)
    assert stored.modifier_type == "jump"
    assert stored.modifier_value == 3.0
    assert stored.name == "Quick"
    assert stored.tier == "A"


def test_delete_sub_ability(engine):
    create_sub_ability(engine, SubAbility(name="Quick", description="d", tier="A",
                                          modifier_type="speed", modifier_value=0.25))
    sub_id = get_sub_abilities(engine)[0].id
    delete_sub_ability(engine, sub_id)
    assert get_sub_abilities(engine) == []