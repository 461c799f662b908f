"""Tests for configuration building, themes and the JSON file helpers."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from whenny.configuration import (
    DEFAULT_CONFIG,
    available_themes,
    configure,
    define_config,
    get_config,
    get_theme,
    load_config,
    reset_config,
    resolve_locale,
    save_config,
)
from whenny.configuration.settings import SmartPredicate, bootstrap_config
from whenny.errors import InvalidConfigError, MissingLocaleEntryError


class TestDefineConfig:
    def test_defaults(self):
        config = define_config()
        assert config == DEFAULT_CONFIG
        assert config.locale == "en"
        assert config.default_timezone == "UTC"
        assert config.server.require_timezone is True
        assert config.calendar.week_start == 0

    def test_nested_dicts_merge(self):
        config = define_config({"formats": {"hour12": False}})
        assert config.formats.hour12 is False
        assert config.formats.presets["iso"] == DEFAULT_CONFIG.formats.presets["iso"]

    def test_lists_replace(self):
        config = define_config({"smart": {"past": [{"predicate": "else", "strategy": "relative"}]}})
        assert [rule.predicate for rule in config.smart.past] == [SmartPredicate.ELSE]
        assert config.smart.future == DEFAULT_CONFIG.smart.future

    def test_base_is_respected(self):
        base = define_config({"locale": "de"})
        assert define_config({"formats": {"hour12": False}}, base=base).locale == "de"

    def test_invalid_timezone(self):
        with pytest.raises(InvalidConfigError):
            define_config({"default_timezone": "Mars/Olympus_Mons"})

    def test_unordered_thresholds(self):
        thresholds = [
            {"bucket_name": "a", "cutoff_seconds": 60},
            {"bucket_name": "b", "cutoff_seconds": 10},
            {"bucket_name": "c", "cutoff_seconds": None},
        ]
        with pytest.raises(InvalidConfigError) as excinfo:
            define_config({"relative": {"thresholds": thresholds}})
        assert excinfo.value.details["errors"]

    def test_week_start_range(self):
        with pytest.raises(InvalidConfigError):
            define_config({"calendar": {"week_start": 7}})

    def test_snapshots_are_frozen(self):
        with pytest.raises(ValidationError):
            define_config().locale = "fr"


class TestThemes:
    def test_available(self):
        assert available_themes() == ["casual", "formal", "minimal", "technical"]

    def test_theme_then_overrides(self):
        config = define_config({"formats": {"hour12": True}}, theme="technical")
        assert config.formats.hour12 is True
        assert config.relative.past["hours"] == "-{n}h"

    def test_every_theme_validates(self):
        for name in available_themes():
            define_config(theme=name)

    def test_unknown_theme(self):
        with pytest.raises(InvalidConfigError) as excinfo:
            define_config(theme="loud")
        assert "casual" in excinfo.value.hints[0]

    def test_get_theme_returns_copy(self):
        get_theme("formal")["formats"]["presets"]["short"] = "changed"
        assert get_theme("formal")["formats"]["presets"]["short"] != "changed"


class TestGlobalConfig:
    def test_configure_replaces_snapshot(self):
        before = get_config()
        after = configure(locale="fr")
        assert get_config() is after
        assert before.locale == "en"
        assert after.locale == "fr"

    def test_configure_merges_over_current(self):
        configure(locale="fr")
        configure({"default_timezone": "Asia/Tokyo"})
        config = get_config()
        assert (config.locale, config.default_timezone) == ("fr", "Asia/Tokyo")

    def test_failed_configure_keeps_previous(self):
        configure(locale="de")
        with pytest.raises(InvalidConfigError):
            configure(default_timezone="Nowhere/Special")
        assert get_config().locale == "de"

    def test_configure_with_theme(self):
        configure(theme="minimal")
        assert get_config().relative.past["minutes"] == "{n}m ago"

    def test_reset(self):
        configure(locale="es")
        assert reset_config() is DEFAULT_CONFIG
        assert get_config().locale == "en"


class TestResolveLocale:
    def test_plain_locale(self):
        assert resolve_locale(define_config({"locale": "de"})).code == "de"

    def test_relative_overrides_are_layered(self):
        table = resolve_locale(define_config(theme="formal"))
        assert table.past_phrase("justNow", 0) == "a moment ago"
        assert table.past_phrase("minutes", 5) == "5 minutes ago"

    def test_technical_yesterday(self):
        table = resolve_locale(define_config(theme="technical"))
        assert table.yesterday == "-1d"
        assert table.future_phrase("days", 3) == "+3d"

    def test_unknown_locale(self):
        with pytest.raises(MissingLocaleEntryError):
            resolve_locale(define_config({"locale": "tlh"}))


class TestConfigFiles:
    """JSON persistence used by the CLI."""

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "config.json"
        config = define_config({"locale": "es", "calendar": {"week_start": 1}})
        save_config(config, path)
        assert load_config(path) == config

    def test_saved_file_is_json(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        save_config(DEFAULT_CONFIG, path)
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload["default_timezone"] == "UTC"
        assert payload["smart"]["past"][-1]["predicate"] == "else"

    def test_theme_key_in_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"theme": "technical", "locale": "fr"}), encoding="utf-8")
        config = load_config(path)
        assert config.locale == "fr"
        assert config.formats.hour12 is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidConfigError):
            load_config(path)

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        save_config(DEFAULT_CONFIG, path)
        monkeypatch.setenv("WHENNY_LOCALE", "de")
        monkeypatch.setenv("WHENNY_DEFAULT_TIMEZONE", "Europe/Berlin")
        monkeypatch.setenv("WHENNY_HOUR12", "false")
        monkeypatch.setenv("WHENNY_WEEK_START", "1")
        config = load_config(path)
        assert config.locale == "de"
        assert config.default_timezone == "Europe/Berlin"
        assert config.formats.hour12 is False
        assert config.calendar.week_start == 1

    def test_malformed_integer_env_override(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        save_config(DEFAULT_CONFIG, path)
        monkeypatch.setenv("WHENNY_WEEK_START", "monday")
        with pytest.raises(InvalidConfigError) as excinfo:
            load_config(path)
        assert "WHENNY_WEEK_START" in str(excinfo.value)

    def test_bootstrap_creates_file(self, tmp_path):
        path = tmp_path / "config.json"
        config = bootstrap_config(path=path, theme="technical")
        assert path.exists()
        assert config.formats.hour12 is False

    def test_bootstrap_keeps_existing_file(self, tmp_path):
        path = tmp_path / "config.json"
        save_config(define_config({"locale": "fr"}), path)
        assert bootstrap_config(path=path).locale == "fr"
        assert bootstrap_config(path=path, force=True).locale == "en"

    def test_bootstrap_applies_overrides(self, tmp_path):
        path = tmp_path / "config.json"
        config = bootstrap_config(path=path, overrides={"default_timezone": "Asia/Tokyo"})
        assert config.default_timezone == "Asia/Tokyo"
        assert load_config(path).default_timezone == "Asia/Tokyo"
