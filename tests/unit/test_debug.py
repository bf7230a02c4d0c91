import logging

from c4engine.debug import DebugManager, DebugLevel, LOGGER_NAME, debug


def test_messages_below_level_are_dropped(caplog, propagate):
    manager = DebugManager()
    manager.configure(level=DebugLevel.WARNING)

    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        manager.info("hidden", "engine")
        manager.warning("shown", "engine")

    messages = [r.getMessage() for r in caplog.records]
    assert "[engine] shown" in messages
    assert not any("hidden" in m for m in messages)


def test_component_filter(caplog, propagate):
    manager = DebugManager()
    manager.configure(level=DebugLevel.DEBUG, components=["board"])

    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        manager.debug("kept", "board")
        manager.debug("filtered", "engine")

    messages = [r.getMessage() for r in caplog.records]
    assert messages == ["[board] kept"]


def test_trace_is_logged_as_debug(caplog, propagate):
    manager = DebugManager()
    manager.configure(level=DebugLevel.TRACE)

    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        manager.trace("fine detail")

    assert [r.getMessage() for r in caplog.records] == ["TRACE: fine detail"]
    assert caplog.records[0].levelno == logging.DEBUG


def test_none_level_silences_errors(caplog, propagate):
    manager = DebugManager()
    manager.configure(level=DebugLevel.NONE)

    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        manager.error("nothing")

    assert caplog.records == []


def test_set_from_string():
    manager = DebugManager()

    assert manager.set_from_string("trace")
    assert manager.level == DebugLevel.TRACE
    assert not manager.set_from_string("loud")
    assert manager.level == DebugLevel.TRACE


def test_timer_reports_elapsed_time():
    manager = DebugManager()
    manager.start_timer("step")

    elapsed = manager.end_timer("step")

    assert elapsed is not None and elapsed >= 0
    assert manager.end_timer("step") is None


def test_log_file_handler(tmp_path):
    manager = DebugManager()
    log_file = tmp_path / "engine.log"
    manager.configure(level=DebugLevel.INFO, log_file=str(log_file))

    manager.info("written", "cli")
    manager.configure(log_file="")

    assert "[cli] written" in log_file.read_text()


def test_new_manager_leaves_shared_logger_alone(propagate):
    debug.configure(level=DebugLevel.DEBUG)
    logger = logging.getLogger(LOGGER_NAME)

    DebugManager()

    assert logger.level == logging.DEBUG
    assert logger.propagate is True
    assert debug.level == DebugLevel.DEBUG
    assert len([h for h in logger.handlers if getattr(h, "_c4engine_console", False)]) == 1
