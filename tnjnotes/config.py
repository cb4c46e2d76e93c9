"""User configuration: key bindings, themes and where the database lives."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import platformdirs
import tomli_w

CURRENT_CONFIG_VERSION = 1
CONFIG_FILE_NAME = "config.toml"
DATABASE_FILE_NAME = "app.db"

_T = TypeVar("_T")


class Profile(Enum):
    """Which set of configuration and data directories to use."""

    PROD = "prod"
    DEV = "dev"

    @property
    def app_name(self) -> str:
        """Directory name used for this profile's files."""
        return "tnj-dev" if self is Profile.DEV else "tnj"


class ConfigError(Exception):
    """Raised when the configuration cannot be read, parsed or written."""


class ThemeNotFoundError(ConfigError):
    """Raised when a theme name is neither a preset nor user-defined."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Theme not found: {name}")
        self.name = name


class ThemeNameExistsError(ConfigError):
    """Raised when saving a theme under the name of a preset."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Theme name already exists: {name}")
        self.name = name


@dataclass
class Theme:
    """Colour names for the interface."""

    fg: str = "white"
    bg: str = "black"
    highlight_bg: str = "blue"
    highlight_fg: str = "white"
    tab_bg: str = "gray"


@dataclass
class KeyBindings:
    """Key names bound to each action."""

    quit: str = "q"
    toggle_sidebar: str = "b"
    new: str = "n"
    edit: str = "e"
    save: str = "Ctrl+s"
    delete: str = "d"
    search: str = "/"
    select: str = "Enter"
    list_up: str = "k"
    list_down: str = "j"
    tab_left: str = "Left"
    tab_right: str = "Right"
    tab_1: str = "1"
    tab_2: str = "2"
    tab_3: str = "3"
    tab_4: str = "4"
    help: str = "F1"
    undo: str = "Ctrl+z"
    word_left: str = "Ctrl+Left"
    word_right: str = "Ctrl+Right"
    settings: str = "F2"
    toggle_task_status: str = "Space"
    toggle_list_view: str = "t"
    filter: str = "f"
    notebook_modal: str = "Ctrl+n"


def preset_themes() -> dict[str, Theme]:
    """Themes that are always available."""
    return {
        "default": Theme("white", "black", "blue", "white", "gray"),
        "dark": Theme("white", "black", "cyan", "black", "gray"),
        "light": Theme("black", "white", "blue", "white", "gray"),
        "green": Theme("green", "black", "yellow", "black", "gray"),
        "monochrome": Theme("white", "black", "white", "black", "gray"),
    }


def config_path(profile: Profile = Profile.PROD) -> Path:
    """Location of the configuration file for ``profile``."""
    return Path(platformdirs.user_config_dir(profile.app_name)) / CONFIG_FILE_NAME


def default_database_path(profile: Profile = Profile.PROD) -> str:
    """Default database file location for ``profile``."""
    return str(Path(platformdirs.user_data_dir(profile.app_name)) / DATABASE_FILE_NAME)


def _example_themes() -> dict[str, Theme]:
    return {"lightblue": Theme("cyan", "black", "blue", "white", "gray")}


def _prod_database_path() -> str:
    return default_database_path(Profile.PROD)


@dataclass
class Config:
    """The application's settings."""

    sidebar_width_percent: int = 30
    database_path: str = field(default_factory=_prod_database_path)
    key_bindings: KeyBindings = field(default_factory=KeyBindings)
    current_theme: str = "default"
    themes: dict[str, Theme] = field(default_factory=_example_themes)
    list_view_mode: str = "Simple"
    config_version: int | None = CURRENT_CONFIG_VERSION
    color_overrides: Theme | None = None
    current_notebook_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """A TOML-ready mapping; unset optional values are left out."""
        return {key: value for key, value in asdict(self).items() if value is not None}

    def database_file(self) -> Path:
        """The database path with ``~`` expanded."""
        return Path(self.database_path).expanduser()

    def active_theme(self) -> Theme:
        """Overrides if set, else the current user theme, preset, or the default preset."""
        if self.color_overrides is not None:
            return Theme(**asdict(self.color_overrides))
        presets = preset_themes()
        theme = self.themes.get(self.current_theme) or presets.get(self.current_theme)
        if theme is None:
            theme = presets["default"]
        return Theme(**asdict(theme))

    def set_theme(self, name: str) -> None:
        """Make ``name`` the current theme."""
        if name not in self.themes and name not in preset_themes():
            raise ThemeNotFoundError(name)
        self.current_theme = name

    def available_themes(self) -> list[str]:
        """Sorted names of preset and user-defined themes."""
        return sorted(set(preset_themes()) | set(self.themes))

    def clear_color_overrides(self) -> None:
        """Drop colour overrides, returning to the base theme."""
        self.color_overrides = None

    def set_color_overrides(self, theme: Theme) -> None:
        """Use ``theme`` in place of the current theme's colours."""
        self.color_overrides = theme

    def save_theme_from_overrides(self, name: str) -> None:
        """Store the active theme as user theme ``name``, replacing any with that name."""
        if name in preset_themes():
            raise ThemeNameExistsError(name)
        self.themes[name] = self.active_theme()


def _from_table(cls: type[_T], data: Any, name: str) -> _T:
    if not isinstance(data, dict):
        raise ConfigError(f"Failed to parse TOML: {name} must be a table")
    known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
    return cls(**{key: value for key, value in data.items() if key in known})


def config_from_dict(data: dict[str, Any]) -> Config:
    """Build a Config from parsed TOML, using defaults for anything missing."""
    scalars = {
        key: data[key]
        for key in (
            "sidebar_width_percent",
            "database_path",
            "current_theme",
            "list_view_mode",
            "config_version",
            "current_notebook_id",
        )
        if key in data
    }
    themes_table = data.get("themes", {})
    if not isinstance(themes_table, dict):
        raise ConfigError("Failed to parse TOML: themes must be a table")
    themes = {
        name: _from_table(Theme, table, f"themes.{name}")
        for name, table in themes_table.items()
    }
    overrides = data.get("color_overrides")
    return Config(
        **scalars,
        key_bindings=_from_table(KeyBindings, data.get("key_bindings", {}), "key_bindings"),
        themes=themes,
        color_overrides=(
            None if overrides is None else _from_table(Theme, overrides, "color_overrides")
        ),
    )


def save_config(
    config: Config, profile: Profile = Profile.PROD, path: str | Path | None = None
) -> None:
    """Write ``config`` to its file, stamping the current config version."""
    config.config_version = CURRENT_CONFIG_VERSION
    target = Path(path) if path is not None else config_path(profile)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(tomli_w.dumps(config.to_dict()), encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to write config file: {exc}") from exc


def load_config(profile: Profile = Profile.PROD, path: str | Path | None = None) -> Config:
    """Read the configuration, creating and saving the default one if it is missing.

    The database path always follows the profile, whatever the file says.
    """
    target = Path(path) if path is not None else config_path(profile)
    if target.exists():
        try:
            contents = target.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to read config file: {exc}") from exc
        try:
            data = tomllib.loads(contents)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Failed to parse TOML: {exc}") from exc
        config = config_from_dict(data)
        config.database_path = default_database_path(profile)
        return config
    config = Config(database_path=default_database_path(profile))
    save_config(config, profile, target)
    return config