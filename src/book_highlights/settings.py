"""Apply edits from the settings form to the running configuration."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, NamedTuple

from .config import HighlightsConfig, save_config


class SettingField(NamedTuple):
    key: str
    label: str
    kind: str  # "bool", "int" or "str"
    description: str = ""


SETTING_FIELDS: tuple[SettingField, ...] = (
    SettingField("auto_refresh", "Auto-refresh", "bool", "Refresh on a timer and when notes change"),
    SettingField("show_book_title", "Show book title", "bool"),
    SettingField("show_author", "Show author", "bool"),
    SettingField("show_comments", "Show comments", "bool"),
    SettingField("show_metadata", "Show metadata", "bool", "Page number, location and date"),
    SettingField("max_highlights", "Maximum highlights to load", "int", "0 for no limit"),
    SettingField("random_highlights_count", "Number of random highlights", "int"),
    SettingField("refresh_interval", "Refresh interval (seconds)", "int", "0 to disable"),
    SettingField("filter_property", "Filter property", "str", 'Front matter property, e.g. "type"'),
    SettingField("filter_value", "Filter value", "str", 'Value identifying a book note, e.g. "book"'),
    SettingField("filename_format", "Filename format", "str", "Use {{title}} and {{author}}"),
    SettingField("highlights_folder", "Highlights folder", "str", "Leave empty to search the entire vault"),
)


@dataclass(frozen=True)
class SettingsUpdate:
    """Result of applying the settings form."""

    config: HighlightsConfig
    vault_root: Path
    vault_changed: bool
    timers_changed: bool


def form_values(config: HighlightsConfig) -> Dict[str, Any]:
    """Initial values for the settings form."""

    current = config.to_mapping()
    return {field.key: current[field.key] for field in SETTING_FIELDS}


def apply_settings(
    config: HighlightsConfig, vault_root: Path, values: Mapping[str, Any], new_vault: Path | None = None
) -> SettingsUpdate:
    """Build the new configuration from form ``values``.

    Values arrive as the widgets hold them (strings for entries); invalid
    numbers fall back the same way a loaded config file does.
    """

    data = config.to_mapping()
    data.update({key: value for key, value in values.items() if key in data})
    updated = HighlightsConfig.from_mapping(data)

    target_vault = (new_vault or vault_root).expanduser()
    timers_changed = (updated.auto_refresh, updated.refresh_interval) != (
        config.auto_refresh,
        config.refresh_interval,
    )
    return SettingsUpdate(
        config=updated,
        vault_root=target_vault,
        vault_changed=target_vault != vault_root,
        timers_changed=timers_changed,
    )


def persist_settings(path: Path, update: SettingsUpdate) -> None:
    save_config(path, update.config, vault_root=str(update.vault_root))
