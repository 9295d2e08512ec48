from pathlib import Path

from log_config.logger import configure_logging, get_logger


def test_file_handlers_created(tmp_path: Path) -> None:
    configure_logging("WARNING", log_dir=tmp_path / "logs")
    try:
        get_logger("tests.logging").error("written to both files")

        assert list((tmp_path / "logs").glob("pitchscout_*.log"))
        assert list((tmp_path / "logs").glob("errors_*.log"))
    finally:
        configure_logging()


def test_console_only(tmp_path: Path) -> None:
    configure_logging("DEBUG", log_dir=None)
    try:
        get_logger().info("console only")
    finally:
        configure_logging()
