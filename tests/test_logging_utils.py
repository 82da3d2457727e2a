import logging

from jittered_retry import setup_logging


def test_setup_logging_creates_log_file(tmp_path):
    log_file = tmp_path / "logs" / "retry.log"
    setup_logging(logging.DEBUG, log_file=log_file)
    assert log_file.exists()
