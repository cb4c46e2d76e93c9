from pathlib import Path

import pytest

from tnjnotes.config import (
    CURRENT_CONFIG_VERSION,
    Config,
    ConfigError,
    KeyBindings,
    Profile,
    Theme,
    ThemeNameExistsError,
    ThemeNotFoundError,
    config_from_dict,
    config_path,
    default_database_path,
    load_config,
    preset_themes,
    save_config,
)


def test_default_config_values():
    config = Config()
    assert config.sidebar_width_percent == 30
    assert config.current_theme == "default"
    assert config.list_view_mode == "Simple"
    assert config.key_bindings.save == "Ctrl+s"
    assert config.key_bindings.notebook_modal == "Ctrl+n"
    assert config.themes["lightblue"].fg == "cyan"
    assert config.config_version == CURRENT_CONFIG_VERSION


def test_preset_theme_names():
    assert set(preset_themes()) == {"default", "dark", "light", "green", "monochrome"}
    assert preset_themes()["dark"].highlight_bg == "cyan"


def test_dict_round_trip():
    config = Config(current_notebook_id=4)
    config.set_color_overrides(Theme(fg="red"))
    assert config_from_dict(config.to_dict()) == config


def test_to_dict_omits_unset_optionals():
    data = Config().to_dict()
    assert "color_overrides" not in data
    assert "current_notebook_id" not in data


def test_missing_sections_use_defaults():
    config = config_from_dict({"key_bindings": {"quit": "x"}})
    assert config.key_bindings.quit == "x"
    assert config.key_bindings.new == KeyBindings().new
    assert config.themes == {}
    assert config.config_version == CURRENT_CONFIG_VERSION


def test_bad_section_type_raises():
    with pytest.raises(ConfigError):
        config_from_dict({"key_bindings": "q"})


def test_load_creates_missing_file(tmp_path):
    path = tmp_path / "sub" / "config.toml"
    config = load_config(Profile.DEV, path)
    assert path.exists()
    assert config.database_path == default_database_path(Profile.DEV)


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "config.toml"
    config = Config(sidebar_width_percent=40, current_theme="dark", config_version=None)
    save_config(config, Profile.PROD, path)
    assert config.config_version == CURRENT_CONFIG_VERSION
    loaded = load_config(Profile.PROD, path)
    assert loaded.sidebar_width_percent == 40
    assert loaded.current_theme == "dark"
    assert loaded.themes == config.themes


def test_load_replaces_database_path(tmp_path):
    path = tmp_path / "config.toml"
    save_config(Config(database_path="/elsewhere/x.db"), Profile.DEV, path)
    assert load_config(Profile.DEV, path).database_path == default_database_path(Profile.DEV)


def test_invalid_toml_raises(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("this is = = not toml", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(Profile.PROD, path)


def test_paths_depend_on_profile():
    assert config_path(Profile.PROD).name == "config.toml"
    assert config_path(Profile.DEV) != config_path(Profile.PROD)
    assert Path(default_database_path(Profile.PROD)).name == "app.db"
    assert default_database_path(Profile.DEV) != default_database_path(Profile.PROD)


def test_database_file_expands_home():
    config = Config(database_path="~/notes/app.db")
    assert config.database_file() == Path.home() / "notes" / "app.db"


def test_set_theme():
    config = Config()
    config.set_theme("light")
    assert config.current_theme == "light"
    config.set_theme("lightblue")
    assert config.current_theme == "lightblue"
    with pytest.raises(ThemeNotFoundError):
        config.set_theme("nope")
    assert config.current_theme == "lightblue"


def test_available_themes_sorted_union():
    config = Config()
    names = config.available_themes()
    assert names == sorted(names)
    assert set(names) == set(preset_themes()) | {"lightblue"}


def test_active_theme_precedence():
    config = Config(current_theme="lightblue")
    assert config.active_theme() == config.themes["lightblue"]
    config.themes["dark"] = Theme(fg="green")
    config.current_theme = "dark"
    assert config.active_theme() == Theme(fg="green")
    override = Theme(fg="magenta")
    config.set_color_overrides(override)
    assert config.active_theme() == override
    config.clear_color_overrides()
    assert config.color_overrides is None
    assert config.active_theme() == Theme(fg="green")


def test_active_theme_falls_back_to_default_preset():
    config = Config(current_theme="missing")
    assert config.active_theme() == preset_themes()["default"]


def test_save_theme_from_overrides():
    config = Config()
    override = Theme(fg="yellow", bg="blue")
    config.set_color_overrides(override)
    config.save_theme_from_overrides("mine")
    assert config.themes["mine"] == override
    with pytest.raises(ThemeNameExistsError):
        config.save_theme_from_overrides("default")