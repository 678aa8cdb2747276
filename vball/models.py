"""Records exchanged between the HTTP layer, the services and the database."""

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, TypeVar

_T = TypeVar("_T")


def _check(name: str, expected: Any, raw: Any) -> Any:
    """Validate a decoded JSON value against the declared field type."""
    if expected is str and isinstance(raw, str):
        return raw
    if expected is int and isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if (
        expected is float
        and isinstance(raw, (int, float))
        and not isinstance(raw, bool)
    ):
        return float(raw)
    raise ValueError(f"field {name!r} has the wrong type")


def _decode(cls: type[_T], data: Any) -> _T:
    """Build a record from a JSON object; missing or null fields keep their defaults."""
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    values = {}
    for f in dataclasses.fields(cls):
        raw = data.get(f.name)
        if raw is None:
            continue
        values[f.name] = _check(f.name, f.type, raw)
    return cls(**values)


def _format_time(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    text = value.isoformat()
    if text.endswith("+00:00"):
        return text[:-6] + "Z"
    return text


@dataclass
class CreateAbilityRequest:
    """Body of a request that creates a main ability."""

    name: str = ""
    type: str = ""
    tier: str = ""
    duration: int = 0
    cooldown: int = 0
    description: str = ""
    spike_modifier: float = 0.0
    jump_modifier: float = 0.0
    set_modifier: float = 0.0
    receive_modifier: float = 0.0
    ball_force_multiplier: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> "CreateAbilityRequest":
        return _decode(cls, data)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass
class MainAbility:
    """A main ability as stored in ``main_abilities``."""

    id: int = 0
    name: str = ""
    description: str = ""
    type: str = ""
    tier: str = ""
    duration: float = 0.0
    cooldown: float = 0.0
    spike_modifier: float = 0.0
    jump_modifier: float = 0.0
    set_modifier: float = 0.0
    receive_modifier: float = 0.0
    ball_force_multiplier: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> "MainAbility":
        return _decode(cls, data)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass
class SubAbility:
    """A sub ability as stored in ``sub_abilities``."""

    id: int = 0
    name: str = ""
    description: str = ""
    tier: str = ""
    modifier_type: str = ""
    modifier_value: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> "SubAbility":
        return _decode(cls, data)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass
class PlayerLoadout:
    """A player's equipped abilities."""

    player_id: str
    steam_id: str
    username: str
    kash: int = 0
    main_ability_id: Optional[int] = None
    sub_ability_slot1: Optional[int] = None
    sub_ability_slot2: Optional[int] = None
    sub_ability_slot3: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "playerId": self.player_id,
            "steamId": self.steam_id,
            "username": self.username,
            "kash": self.kash,
            "mainAbilityId": self.main_ability_id,
            "subAbilitySlot1": self.sub_ability_slot1,
            "subAbilitySlot2": self.sub_ability_slot2,
            "subAbilitySlot3": self.sub_ability_slot3,
        }


@dataclass
class Region:
    """A geographic region that hosts game machines."""

    id: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass
class Machine:
    """A host machine in a region."""

    id: str
    region_id: str
    name: str
    ip_address: str
    ssh_port: int
    status: str


@dataclass
class GameServer:
    """A game server process running on a machine."""

    id: int
    machine_id: str
    port: int
    max_players: int = 0
    current_players: int = 0
    status: str = ""
    process_id: int = 0


@dataclass
class Match:
    """A match played on a server."""

    id: str
    server_id: str
    status: str


@dataclass
class MatchPlayer:
    """A player's participation in a match."""

    id: str
    match_id: str
    player_id: str
    team: int


@dataclass
class Player:
    """A player with ability names resolved."""

    player_id: str
    username: str
    main_ability: str = ""
    sub_abilities: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "username": self.username,
            "main_ability": self.main_ability,
            "sub_abilities": list(self.sub_abilities),
        }


@dataclass(kw_only=True)
class PlayerAdmin:
    """A player as shown on the admin dashboard."""

    player_id: str
    steam_id: str
    username: str
    registered_at: datetime
    kash: int = 0
    main_ability_id: Optional[int] = None
    sub_ability_ids: list[int] = field(default_factory=list)
    ban_status: str = ""
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    last_login: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "playerId": self.player_id,
            "steamId": self.steam_id,
            "username": self.username,
            "kash": self.kash,
            "mainAbilityId": self.main_ability_id,
            "subAbilityIds": list(self.sub_ability_ids) or None,
            "banStatus": self.ban_status,
            "matchesPlayed": self.matches_played,
            "wins": self.wins,
            "losses": self.losses,
            "lastLogin": _format_time(self.last_login),
            "registeredAt": _format_time(self.registered_at),
        }