"""Settings management for LanChat.

These settings are persisted to the settings file:

- nick name
- color of own messages and of system messages
- sound, logging, smileys and balloon notifications
- browser used to open links
- look and feel
- network interface

The startup overrides (no private chat, always log, log location) come
from the command line and are never saved.
"""

import getpass
import itertools
import logging
import platform
import random
import re
from collections.abc import Callable
from pathlib import Path

from .. import APP_NAME, APP_VERSION
from . import storage
from .models import PropertyKey, Setting, User
from .properties import PropertyCodec, PropertyFileCodec
from .reporting import ErrorReporter, LoggingErrorReporter
from .text_utils import (
    MAX_NICK_LENGTH,
    append_slash,
    capitalize_first_letter,
    is_empty,
    is_valid_nick,
    shorten,
)

logger = logging.getLogger(__name__)

SETTINGS_HEADER = f"{APP_NAME} Settings"

DEFAULT_OWN_COLOR = -15987646  # Dark blue, packed ARGB
DEFAULT_SYS_COLOR = -16759040  # Dark green, packed ARGB

# Colors are stored as signed 32-bit ints
MIN_COLOR = -(2**31)
MAX_COLOR = 2**31 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

SettingsListener = Callable[[Setting], None]


def get_os_user_name() -> str | None:
    """Get the name of the user logged in to the operating system, if known."""
    try:
        return getpass.getuser()
    except (OSError, KeyError) as e:
        logger.debug(f"Could not get the user name: {e}")
        return None


def create_nick_name(code: int, user_name: str | None) -> str:
    """Create a default nick name from the operating system user name.

    The first word of the name is shortened to 10 characters and the first
    letter is capitalized. If that is not a valid nick name, the user code
    is used instead.
    """
    if user_name is None:
        return str(code)

    first_name = user_name.split(" ")[0].strip()
    nick = capitalize_first_letter(shorten(first_name, MAX_NICK_LENGTH))

    if is_valid_nick(nick):
        return nick

    return str(code)


def _parse_int(value: str) -> int:
    """Parse a signed 32-bit decimal int, rejecting anything else."""
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"Not a decimal integer: {value!r}")
    number = int(value)
    if not MIN_COLOR <= number <= MAX_COLOR:
        raise ValueError(f"Out of range: {value!r}")
    return number


def _parse_bool(value: str | None) -> bool:
    return value is not None and value.lower() == "true"


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


class SettingsStore:
    """Application settings, loaded from file on construction.

    Construct one instance at startup and pass it to whoever needs it.
    Changes are only written to file when ``save_settings()`` is called.
    """

    def __init__(
        self,
        path: Path | None = None,
        codec: PropertyCodec | None = None,
        ensure_folder: Callable[[Path], None] | None = None,
        error_reporter: ErrorReporter | None = None,
    ) -> None:
        self._path = path if path is not None else storage.get_settings_file()
        self._codec: PropertyCodec = codec or PropertyFileCodec()
        self._ensure_folder = ensure_folder or storage.ensure_folder
        self._error_reporter: ErrorReporter = error_reporter or LoggingErrorReporter()

        code = 10000000 + random.randrange(9999999)
        self._me = User(nick=create_nick_name(code, get_os_user_name()), code=code, is_me=True)
        self._me.operating_system = platform.system()

        self._listeners: dict[int, SettingsListener] = {}
        self._handles = itertools.count()

        # Persisted settings
        self._own_color = DEFAULT_OWN_COLOR
        self._sys_color = DEFAULT_SYS_COLOR
        self._sound = True
        self._logging = False
        self._smileys = True
        self._balloons = False
        self._browser: str | None = ""
        self._look_and_feel: str | None = ""
        self._network_interface: str | None = None  # None = choose automatically

        # Startup overrides
        self._no_private_chat = False
        self._always_log = False
        self._log_location: str | None = None

        self.load_settings()

    @property
    def path(self) -> Path:
        """The settings file."""
        return self._path

    @property
    def me(self) -> User:
        """The user of this application."""
        return self._me

    def set_client(self, client: str) -> None:
        """Set the client name reported to other users, like "Swing" or "Console".

        Must be done before logging on to the network.
        """
        self._me.client = f"{APP_NAME} v{APP_VERSION} {client}"

    # --- Persistence ---

    def load_settings(self) -> None:
        """Load the settings from file.

        Missing or malformed values keep their defaults. Errors are logged,
        never raised.
        """
        try:
            properties = self._codec.load(self._path)
        except FileNotFoundError:
            logger.warning(f"Could not find {self._path}, using default settings.")
            return
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load settings from {self._path}: {e}", exc_info=True)
            return

        nick = properties.get(PropertyKey.NICK_NAME.value)
        if nick is not None and is_valid_nick(nick):
            self._me.nick = nick.strip()

        self._own_color = self._load_int(properties, PropertyKey.OWN_COLOR, self._own_color)
        self._sys_color = self._load_int(properties, PropertyKey.SYS_COLOR, self._sys_color)

        self._logging = _parse_bool(properties.get(PropertyKey.LOGGING.value))
        self._balloons = _parse_bool(properties.get(PropertyKey.BALLOONS.value))
        self._browser = properties.get(PropertyKey.BROWSER.value)
        self._look_and_feel = properties.get(PropertyKey.LOOK_AND_FEEL.value)
        self._network_interface = properties.get(PropertyKey.NETWORK_INTERFACE.value)

        # Default to true, so only change them if present
        if PropertyKey.SOUND.value in properties:
            self._sound = _parse_bool(properties[PropertyKey.SOUND.value])
        if PropertyKey.SMILEYS.value in properties:
            self._smileys = _parse_bool(properties[PropertyKey.SMILEYS.value])

        logger.debug(f"Loaded settings from {self._path}")

    @staticmethod
    def _load_int(properties: dict[str, str], key: PropertyKey, current: int) -> int:
        try:
            return _parse_int(properties[key.value])
        except (KeyError, ValueError):
            logger.warning(f"Could not read setting for {key.value}, using {current}")
            return current

    def to_properties(self) -> dict[str, str | None]:
        """The persisted settings, as stored in the settings file."""
        return {
            PropertyKey.NICK_NAME.value: self._me.nick,
            PropertyKey.OWN_COLOR.value: str(self._own_color),
            PropertyKey.SYS_COLOR.value: str(self._sys_color),
            PropertyKey.LOGGING.value: _format_bool(self._logging),
            PropertyKey.SOUND.value: _format_bool(self._sound),
            PropertyKey.BROWSER.value: self.browser,
            PropertyKey.SMILEYS.value: _format_bool(self._smileys),
            PropertyKey.LOOK_AND_FEEL.value: self.look_and_feel,
            PropertyKey.BALLOONS.value: _format_bool(self._balloons),
            PropertyKey.NETWORK_INTERFACE.value: self._network_interface,
        }

    def save_settings(self) -> bool:
        """Save the settings to file, creating the folder if missing.

        Failures are logged and reported to the user.

        Returns:
            True if the settings were saved.
        """
        try:
            self._ensure_folder(self._path.parent)
            self._codec.save(self._path, self.to_properties(), SETTINGS_HEADER)
        except OSError as e:
            logger.error(f"Failed to save settings to {self._path}", exc_info=True)
            self._error_reporter.report(f"Settings could not be saved:\n {e}")
            return False

        logger.debug(f"Saved settings to {self._path}")
        return True

    # --- Listeners ---

    def add_listener(self, listener: SettingsListener) -> Callable[[], None]:
        """Register a listener for changes to the settings.

        The same listener may be added more than once, and is then called
        once per registration.

        Returns:
            A function that removes this registration again.
        """
        handle = next(self._handles)
        self._listeners[handle] = listener

        def dispose() -> None:
            self._listeners.pop(handle, None)

        return dispose

    def remove_listener(self, listener: SettingsListener) -> None:
        """Remove the oldest registration of a listener, if any."""
        for handle, registered in self._listeners.items():
            if registered == listener:
                del self._listeners[handle]
                return

    def fire_changed(self, setting: Setting) -> None:
        """Notify all listeners, in registration order, that a setting changed."""
        for listener in list(self._listeners.values()):
            listener(setting)

    # --- Persisted settings ---

    @property
    def own_color(self) -> int:
        """Color of the user's own messages."""
        return self._own_color

    @own_color.setter
    def own_color(self, value: int) -> None:
        self._own_color = self._check_color(value)

    @property
    def sys_color(self) -> int:
        """Color of system messages."""
        return self._sys_color

    @sys_color.setter
    def sys_color(self, value: int) -> None:
        self._sys_color = self._check_color(value)

    @staticmethod
    def _check_color(value: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Color must be an int, got {type(value).__name__}")
        if not MIN_COLOR <= value <= MAX_COLOR:
            raise ValueError(f"Color must fit in 32 bits, got {value}")
        return value

    @staticmethod
    def _check_bool(value: bool) -> bool:
        if not isinstance(value, bool):
            raise TypeError(f"Expected a bool, got {type(value).__name__}")
        return value

    @property
    def sound(self) -> bool:
        return self._sound

    @sound.setter
    def sound(self, value: bool) -> None:
        self._sound = self._check_bool(value)

    @property
    def logging_enabled(self) -> bool:
        """If logging of the main chat is enabled. Always true with ``always_log``."""
        return self._always_log or self._logging

    @logging_enabled.setter
    def logging_enabled(self, value: bool) -> None:
        value = self._check_bool(value)
        if self._logging != value:
            self._logging = value
            self.fire_changed(Setting.LOGGING)

    @property
    def smileys(self) -> bool:
        return self._smileys

    @smileys.setter
    def smileys(self, value: bool) -> None:
        self._smileys = self._check_bool(value)

    @property
    def balloons(self) -> bool:
        """If balloon notifications are enabled."""
        return self._balloons

    @balloons.setter
    def balloons(self, value: bool) -> None:
        self._balloons = self._check_bool(value)

    @property
    def browser(self) -> str:
        """Command for the browser used to open links. Empty for the system default."""
        return self._browser or ""

    @browser.setter
    def browser(self, value: str | None) -> None:
        self._browser = value

    @property
    def look_and_feel(self) -> str:
        return self._look_and_feel or ""

    @look_and_feel.setter
    def look_and_feel(self, value: str | None) -> None:
        self._look_and_feel = value

    @property
    def network_interface(self) -> str | None:
        """Name of the network interface to use, or None to choose automatically."""
        return self._network_interface

    @network_interface.setter
    def network_interface(self, value: str | None) -> None:
        self._network_interface = value

    # --- Startup overrides ---

    @property
    def no_private_chat(self) -> bool:
        return self._no_private_chat

    @no_private_chat.setter
    def no_private_chat(self, value: bool) -> None:
        self._no_private_chat = self._check_bool(value)

    @property
    def always_log(self) -> bool:
        return self._always_log

    @always_log.setter
    def always_log(self, value: bool) -> None:
        self._always_log = self._check_bool(value)

    @property
    def log_location(self) -> str:
        """Folder to store logs in, always ending with a path separator.

        The location from the command line if given, else the default log folder.
        """
        if not is_empty(self._log_location):
            return append_slash(self._log_location)
        return append_slash(str(storage.get_log_dir()))

    @log_location.setter
    def log_location(self, value: str | None) -> None:
        self._log_location = value
