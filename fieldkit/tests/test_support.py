import os
import random
from pathlib import Path

import pytest

from fieldkit.config import Settings, load_dotenv
from fieldkit.network import NetworkQuality, is_offline, quality_from_downlink
from fieldkit.offline_db import FALLBACK_TIPS_BY_WEATHER
from fieldkit.sandbox_fs import SandboxPathError, append_session, read_sessions, resolve_in_sandbox
from fieldkit.schema import SessionRecord
from fieldkit.weather import parse_temp, weather_based_tip, weather_category


@pytest.mark.parametrize(
    "downlink,online,expected",
    [
        (10.0, True, NetworkQuality.MAXIMUM),
        (5.0, True, NetworkQuality.STRONG),
        (0.5, True, NetworkQuality.STRONG),
        (0.2, True, NetworkQuality.MEDIUM),
        (0.05, True, NetworkQuality.WEAK),
        (None, True, NetworkQuality.STRONG),
        (10.0, False, NetworkQuality.LOST),
    ],
)
def test_quality_from_downlink(downlink, online, expected):
    assert quality_from_downlink(downlink, online) is expected


def test_only_lost_is_offline():
    assert is_offline(NetworkQuality.LOST)
    assert not is_offline(NetworkQuality.WEAK)


@pytest.mark.parametrize(
    "temp,expected",
    [("31°C", 31), (" -5", -5), ("abc", 20), ("", 20), (None, 20), ("0", 20)],
)
def test_parse_temp(temp, expected):
    assert parse_temp(temp) == expected


@pytest.mark.parametrize(
    "temp,condition,expected",
    [
        ("35", "Lluvia ligera", "RAIN"),
        ("20", "Tormenta", "RAIN"),
        ("31", "Nublado", "HEAT"),
        ("15", "Soleado", "HEAT"),
        ("5", "Despejado", "COLD"),
        ("15", "Helada", "COLD"),
        ("20", "Nublado", "GENERAL"),
    ],
)
def test_weather_category(temp, condition, expected):
    assert weather_category(temp, condition) == expected


def test_weather_tip_is_reproducible_with_seed():
    a = weather_based_tip("5", "", random.Random(7))
    b = weather_based_tip("5", "", random.Random(7))
    assert a == b
    assert a in FALLBACK_TIPS_BY_WEATHER["COLD"]


def test_settings_from_env():
    s = Settings.from_env({"FIELDKIT_LOG_LEVEL": "debug", "FIELDKIT_STRICT": "yes", "FIELDKIT_ROOT": "/tmp/fk"})
    assert s.log_level == "DEBUG"
    assert s.strict is True
    assert s.root == Path("/tmp/fk")
    assert Settings.from_env({}) == Settings()


def test_load_dotenv_keeps_existing(tmp_path: Path, monkeypatch):
    env = tmp_path / ".env.local"
    env.write_text("# comment\nFIELDKIT_STRICT=1\nFIELDKIT_LOG_LEVEL=INFO\n", encoding="utf-8")
    monkeypatch.setenv("FIELDKIT_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("FIELDKIT_STRICT", "")
    monkeypatch.delenv("FIELDKIT_STRICT")
    load_dotenv(env)
    assert os.environ["FIELDKIT_STRICT"] == "1"
    assert os.environ["FIELDKIT_LOG_LEVEL"] == "ERROR"


def test_sandbox_rejects_escape(tmp_path: Path):
    with pytest.raises(SandboxPathError):
        resolve_in_sandbox(tmp_path, "../outside.json")


def _record(final: str, path) -> SessionRecord:
    return SessionRecord(
        path=list(path), final_node_id=final, title="T", severity="INFO", action_item="A", timestamp="2026-01-01T00:00:00+00:00"
    )


def test_sessions_roundtrip(tmp_path: Path):
    first = _record("RECOVERY_POS", ["ROOT", "AIRWAY_CHECK", "RECOVERY_POS"])
    second = _record("GENERAL_TOXIN", ["ROOT", "TOXIN_CHECK", "GENERAL_TOXIN"])
    log_path = append_session(tmp_path, first)
    append_session(tmp_path, second)
    assert log_path == (tmp_path / "logs" / "sessions.jsonl").resolve()
    assert list(read_sessions(tmp_path)) == [first, second]


def test_sessions_reject_escape(tmp_path: Path):
    with pytest.raises(SandboxPathError):
        append_session(tmp_path, _record("X", ["ROOT"]), rel="../../sessions.jsonl")


def test_corrupt_session_line_names_line(tmp_path: Path):
    append_session(tmp_path, _record("RECOVERY_POS", ["ROOT", "RECOVERY_POS"]))
    with (tmp_path / "logs" / "sessions.jsonl").open("a", encoding="utf-8") as f:
        f.write("{not json\n")
    with pytest.raises(ValueError, match="sessions.jsonl:2"):
        list(read_sessions(tmp_path))
