import json
import os

from rpcdispatch.config import access
from rpcdispatch.config.schema import Config


def _counting_loader(monkeypatch):
    calls = []

    def _load(path=None):
        calls.append(path)
        return Config()

    monkeypatch.setattr(access, "load_config", _load)
    return calls


def test_unchanged_source_is_served_from_cache(monkeypatch):
    calls = _counting_loader(monkeypatch)
    first = access.get_config()
    second = access.get_config()
    assert first is second
    assert len(calls) == 1


def test_force_reload_bypasses_cache(monkeypatch):
    calls = _counting_loader(monkeypatch)
    first = access.get_config()
    reloaded = access.get_config(force_reload=True)
    assert reloaded is not first
    assert len(calls) == 2


def test_env_override_change_triggers_reload(monkeypatch):
    assert access.get_config().server.path == "/rpc"
    monkeypatch.setenv("RPCDISPATCH_SERVER__PATH", "/from-env")
    assert access.get_config().server.path == "/from-env"
    monkeypatch.delenv("RPCDISPATCH_SERVER__PATH")
    assert access.get_config().server.path == "/rpc"


def test_unrelated_env_change_keeps_cache(monkeypatch):
    calls = _counting_loader(monkeypatch)
    access.get_config()
    monkeypatch.setenv("SOME_OTHER_SETTING", "1")
    access.get_config()
    assert len(calls) == 1


def test_edited_file_triggers_reload(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"server": {"defaultErrorStatus": 422}}))
    assert access.get_config(config_path=path).server.default_error_status == 422

    path.write_text(json.dumps({"server": {"defaultErrorStatus": 409}}))
    stamp = path.stat().st_mtime_ns + 1_000_000_000
    os.utime(path, ns=(stamp, stamp))
    assert access.get_config(config_path=path).server.default_error_status == 409


def test_created_file_is_picked_up(tmp_path):
    path = tmp_path / "late.json"
    assert access.get_config(config_path=path).handlers == {}
    path.write_text(json.dumps({"handlers": {"wrap": "textwrap:TextWrapper"}}))
    assert access.get_config(config_path=path).handlers == {"wrap": "textwrap:TextWrapper"}


def test_clear_single_entry(monkeypatch, tmp_path):
    calls = _counting_loader(monkeypatch)
    target = tmp_path / "a.json"
    other = tmp_path / "b.json"
    access.get_config(config_path=target)
    access.get_config(config_path=other)
    access.clear_config_cache(config_path=target)
    access.get_config(config_path=target)
    access.get_config(config_path=other)
    assert calls.count(target.resolve()) == 2
    assert calls.count(other.resolve()) == 1
