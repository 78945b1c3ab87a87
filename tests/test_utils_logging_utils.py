from rpcdispatch.utils import logging_utils


class _FakeLogger:
    def __init__(self):
        self.added = []
        self.removed = []

    def add(self, *args, **kwargs):
        self.added.append((args, kwargs))
        return len(self.added)

    def remove(self, sink_id=None):
        self.removed.append(sink_id)


def test_ensure_rotating_log_file_adds_sink_once(monkeypatch, tmp_path):
    fake = _FakeLogger()
    monkeypatch.setattr(logging_utils, "logger", fake)
    monkeypatch.setattr(logging_utils, "_SINK_IDS", {})

    first = logging_utils.ensure_rotating_log_file("rpc", log_dir=tmp_path)
    second = logging_utils.ensure_rotating_log_file("rpc", level="debug", log_dir=tmp_path)

    assert first == second == tmp_path / "rpc.log"
    assert len(fake.added) == 1
    assert fake.added[0][1]["level"] == "INFO"
    assert fake.added[0][1]["rotation"] == "10 MB"


def test_remove_log_file_detaches_sink(monkeypatch):
    fake = _FakeLogger()
    monkeypatch.setattr(logging_utils, "logger", fake)
    monkeypatch.setattr(logging_utils, "_SINK_IDS", {"rpc": 7})
    logging_utils.remove_log_file("rpc")
    logging_utils.remove_log_file("rpc")
    assert fake.removed == [7]


def test_configure_logging_resets_sinks(monkeypatch):
    fake = _FakeLogger()
    monkeypatch.setattr(logging_utils, "logger", fake)
    monkeypatch.setattr(logging_utils, "_SINK_IDS", {"old": 3})
    logging_utils.configure_logging("debug")
    assert fake.removed == [None]
    assert fake.added[0][1]["level"] == "DEBUG"
    assert logging_utils._SINK_IDS == {}
