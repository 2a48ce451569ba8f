import logging
import os
import time

import pytest

from order_console.core.config import LoggerConfig
from order_console.core.logging_config import MaskingFilter, prune_old_logs, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def _flush():
    for handler in logging.getLogger().handlers:
        handler.flush()


def test_masking_filter_replaces_matches_with_stars():
    masking = MaskingFilter([r"password=\S+", r"\d{10}"])

    assert masking.mask("login password=hunter2 ok") == "login **************** ok"
    assert masking.mask("msisdn 9000111110") == "msisdn **********"
    assert masking.mask("nothing here") == "nothing here"


def test_masking_filter_masks_formatted_args():
    masking = MaskingFilter([r"secret\w+"])
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "token %s", ("secretABC",), None)

    assert masking.filter(record) is True
    assert record.getMessage() == "token *********"


def test_setup_logging_writes_masked_file(tmp_path, restore_root_logger):
    config = LoggerConfig(
        log_dir=str(tmp_path),
        log_file_name="console",
        to_console=False,
        masking_regex_patterns=[r"pw=\w+"],
    )

    log_path = setup_logging(config)
    logging.getLogger("order_console.test").info("connecting with pw=abc123")
    _flush()

    assert log_path == tmp_path.resolve() / "console.log"
    content = log_path.read_text()
    assert "connecting with *********" in content
    assert "abc123" not in content
    assert "[INFO] order_console.test:" in content


def test_setup_logging_replaces_its_own_handlers(tmp_path, restore_root_logger):
    config = LoggerConfig(log_dir=str(tmp_path), log_file_name="console", to_console=True)

    setup_logging(config)
    setup_logging(config)

    ours = [h for h in logging.getLogger().handlers if getattr(h, "_order_console_handler", False)]
    assert len(ours) == 2


def test_setup_logging_level(tmp_path, restore_root_logger):
    setup_logging(LoggerConfig(log_dir=str(tmp_path), level="warning", to_console=False))

    assert logging.getLogger().level == logging.WARNING


def test_prune_old_logs(tmp_path):
    old = tmp_path / "console.log.1"
    fresh = tmp_path / "console.log"
    other = tmp_path / "unrelated.log"
    for path in (old, fresh, other):
        path.write_text("x")
    ten_days_ago = time.time() - 10 * 24 * 60 * 60
    os.utime(old, (ten_days_ago, ten_days_ago))
    os.utime(other, (ten_days_ago, ten_days_ago))

    removed = prune_old_logs(tmp_path, "console", max_age_days=7)

    assert removed == [old]
    assert not old.exists()
    assert fresh.exists()
    assert other.exists()


def test_prune_disabled_with_zero_age(tmp_path):
    old = tmp_path / "console.log.1"
    old.write_text("x")
    os.utime(old, (0, 0))

    assert prune_old_logs(tmp_path, "console", max_age_days=0) == []
    assert old.exists()


def test_compressed_rotation(tmp_path, restore_root_logger):
    config = LoggerConfig(log_dir=str(tmp_path), log_file_name="console", to_console=False, compress=True)
    setup_logging(config)

    handler = next(h for h in logging.getLogger().handlers if getattr(h, "_order_console_handler", False))
    logging.getLogger("order_console.test").info("before rollover")
    handler.doRollover()

    assert (tmp_path / "console.log.1.gz").exists()
