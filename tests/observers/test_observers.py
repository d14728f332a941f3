import json
import logging

from mayaserver.logging.log import init_logging
from mayaserver.observers.dispatcher import EventBus
from mayaserver.observers.events import VsmAddFailed, VsmAddStarted, new_ctx
from mayaserver.observers.jsonfile import JsonFileObserver
from mayaserver.observers.logger import LoggerObserver


class Broken:
    def notify(self, event):
        raise RuntimeError("observer down")


class Capture:
    def __init__(self): self.events = []
    def notify(self, event): self.events.append(event)


def test_broken_observer_does_not_stop_others():
    cap = Capture()
    bus = EventBus(observers=[Broken(), cap])

    bus.emit(VsmAddStarted(**new_ctx("dev", None), vsm="demo", namespace="default", replicas=2))

    assert len(cap.events) == 1
    assert cap.events[0].vsm == "demo"


def test_new_ctx_fields():
    ctx = new_ctx("prod", "lab")
    assert ctx["env"] == "prod"
    assert ctx["context"] == "lab"
    assert ctx["ts"].endswith("Z")
    assert ctx["run_id"]


def test_jsonfile_observer_appends_lines(tmp_path):
    path = tmp_path / "events" / "run.jsonl"
    bus = EventBus(observers=[JsonFileObserver(path)])

    ctx = new_ctx("dev", None)
    bus.emit(VsmAddStarted(**ctx, vsm="demo", namespace="default", replicas=2))
    bus.emit(VsmAddFailed(**ctx, vsm="demo", error="boom"))

    lines = [json.loads(l) for l in path.read_text().splitlines()]
    assert [l["type"] for l in lines] == ["VsmAddStarted", "VsmAddFailed"]
    assert lines[1]["error"] == "boom"
    assert lines[0]["run_id"] == lines[1]["run_id"]


def test_logger_observer_levels(caplog):
    logger = logging.getLogger("mayaserver.test")
    obs = LoggerObserver(logger)

    with caplog.at_level(logging.INFO, logger="mayaserver.test"):
        obs.notify(VsmAddStarted(**new_ctx("dev", None), vsm="demo", namespace="default", replicas=2))
        obs.notify(VsmAddFailed(**new_ctx("dev", None), vsm="demo", error="boom"))

    assert caplog.records[0].levelno == logging.INFO
    assert "[EVENT] VsmAddStarted" in caplog.records[0].getMessage()
    assert caplog.records[1].levelno == logging.ERROR


def test_init_logging_writes_run_file(tmp_path):
    logger, run_id, log_path = init_logging(base_dir=tmp_path, name="mayaserver")
    logger.info("hello")
    for h in logger.handlers:
        h.flush()

    assert log_path.parent == tmp_path
    assert run_id in log_path.name
    assert "hello" in log_path.read_text()
