"""Core data models for LanChat."""

import time
from dataclasses import dataclass, field
from enum import Enum


def current_time_millis() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)


class Setting(str, Enum):
    """Identifiers for settings, passed to settings listeners."""

    NICK_NAME = "nick_name"
    OWN_COLOR = "own_color"
    SYS_COLOR = "sys_color"
    LOGGING = "logging"
    SOUND = "sound"
    BROWSER = "browser"
    SMILEYS = "smileys"
    LOOK_AND_FEEL = "look_and_feel"
    BALLOONS = "balloons"
    NETWORK_INTERFACE = "network_interface"


class PropertyKey(str, Enum):
    """Keys used in the settings file.

    These are read by older clients too, so they must never be renamed.
    """

    NICK_NAME = "nick_name"
    OWN_COLOR = "own_color"
    SYS_COLOR = "sys_color"
    LOGGING = "logging"
    SOUND = "sound"
    BROWSER = "browser"
    SMILEYS = "smileys"
    LOOK_AND_FEEL = "look_and_feel"
    BALLOONS = "balloons"
    NETWORK_INTERFACE = "network_interface"


@dataclass
class User:
    """A user on the network. The local user has ``is_me`` set."""

    nick: str
    code: int
    is_me: bool = False
    operating_system: str = ""
    client: str = ""  # "<app> v<version> <ui>", set before logging on
    last_idle: int = field(default_factory=current_time_millis)
    logon_time: int = field(default_factory=current_time_millis)

    def __setattr__(self, name: str, value: object) -> None:
        if name == "code" and "code" in self.__dict__:
            raise AttributeError("The user code can not be changed")
        super().__setattr__(name, value)

    def __hash__(self) -> int:
        return hash(self.code)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return False
        return self.code == other.code

    def __str__(self) -> str:
        return self.nick
