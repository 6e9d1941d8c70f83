from graph_lab.settings import InputMode, Settings, Theme


def test_theme_accepts_value_name_and_legacy_labels():
    assert Theme.parse("dark") is Theme.DARK
    assert Theme.parse("BLACKBOARD") is Theme.BLACKBOARD
    assert Theme.parse("黒板") is Theme.BLACKBOARD
    assert Theme.parse(" ライト ") is Theme.LIGHT


def test_unknown_values_fall_back_to_defaults():
    assert Theme.parse("neon") is Theme.LIGHT
    assert Theme.parse(None) is Theme.LIGHT
    assert InputMode.parse(3) is InputMode.DECIMAL
    assert InputMode.parse("分数") is InputMode.FRACTION


def test_from_mapping_validates_every_field():
    settings = Settings.from_mapping(
        {
            "theme": "ダーク",
            "input_mode": "fraction",
            "grid_snap_enabled": "off",
            "haptics_enabled": "maybe",
            "default_params": {"a": 0, "p": 99, "q": "nan", "extra": 1},
        }
    )
    assert settings.theme is Theme.DARK
    assert settings.input_mode is InputMode.FRACTION
    assert settings.grid_snap_enabled is False
    assert settings.haptics_enabled is True
    assert settings.default_params == {"a": 0.01, "p": 5, "q": 0, "m": 1, "n": 2}


def test_from_mapping_handles_missing_data():
    assert Settings.from_mapping(None) == Settings()
    assert Settings.from_mapping({"default_params": "bad"}).default_params == Settings().default_params


def test_mapping_round_trip():
    settings = Settings(theme=Theme.BLACKBOARD, input_mode=InputMode.FRACTION, grid_snap_enabled=False)
    data = settings.to_mapping()
    assert data["theme"] == "blackboard"
    assert Settings.from_mapping(data) == settings
