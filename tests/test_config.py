from pathlib import Path

from book_highlights.config import HighlightsConfig, load_config, save_config


def test_defaults() -> None:
    config = HighlightsConfig()

    assert config.max_highlights == 50
    assert config.random_highlights_count == 5
    assert config.refresh_interval == 300
    assert config.filter_property == "subtopic"
    assert config.filter_value == "Book Highlights"
    assert config.filename_format == "{{title}} by {{author}}"
    assert config.highlights_folder == ""
    assert config.filter_enabled


def test_from_mapping_coerces_values() -> None:
    config = HighlightsConfig.from_mapping(
        {
            "auto_refresh": "false",
            "show_comments": 0,
            "max_highlights": "-3",
            "random_highlights_count": "abc",
            "refresh_interval": "not a number",
            "filename_format": "",
            "highlights_folder": "/Books/Highlights/",
            "filter_value": "",
            "vault_root": "/ignored",
        }
    )

    assert config.auto_refresh is False
    assert config.show_comments is False
    assert config.max_highlights == 0
    assert config.random_highlights_count == 1
    assert config.refresh_interval == 300
    assert config.filename_format == "{{title}} by {{author}}"
    assert config.highlights_folder == "Books/Highlights"
    assert not config.filter_enabled


def test_negative_refresh_interval_disables_timer() -> None:
    assert HighlightsConfig(refresh_interval=-10).refresh_interval == 0


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "settings" / "config.json"
    config = HighlightsConfig(random_highlights_count=3, highlights_folder="Books")

    save_config(path, config, vault_root="/vault")
    data = load_config(path)

    assert data["vault_root"] == "/vault"
    assert HighlightsConfig.from_mapping(data) == config


def test_load_config_without_path() -> None:
    assert load_config(None) == {}
