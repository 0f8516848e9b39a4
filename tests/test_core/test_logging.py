import uuid

from jstor_import.logging import add_log_file, error_sink_id, get_logger, log_dir, set_log_level


def _error_log_text() -> str:
    return "".join(path.read_text(encoding="utf-8") for path in log_dir.glob("errors_*.log"))


def test_error_file_survives_level_change():
    marker = f"parse failure {uuid.uuid4()}"

    set_log_level("warning")
    get_logger("test").error(marker)
    set_log_level("DEBUG")

    assert marker in _error_log_text()


def test_error_file_skips_lower_levels():
    marker = f"just a warning {uuid.uuid4()}"

    get_logger("test").warning(marker)

    assert marker not in _error_log_text()


def test_add_log_file(temp_dir):
    from loguru import logger

    log_file = temp_dir / "run.log"
    sink_id = add_log_file(str(log_file), level="INFO")
    try:
        get_logger("test").info("written to run log")
    finally:
        logger.remove(sink_id)

    assert sink_id != error_sink_id
    assert "written to run log" in log_file.read_text(encoding="utf-8")
