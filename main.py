"""Entry point: convert the PNG icon sources into .ico and .icns outputs.

Usage: python main.py [PROJECT_DIR]
"""
import logging
import sys
from pathlib import Path

from painicons.config import IconConfig
from painicons.convert import run_conversion
from painicons.embed import embed_icon_status
from painicons.errors import IconError

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger("painicons")


def _setup_logging(config):
    logger.setLevel(config.get_log_level())
    log_file = config.get_log_file()
    if log_file is None:
        return
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)
    except OSError as e:
        print(f"Warning: Could not set up file logging: {e}")


def main(argv=None, tool_lookup=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) > 1:
        print("Usage: python main.py [PROJECT_DIR]")
        return 2
    project_dir = Path(argv[0]) if argv else Path.cwd()

    # before the config loads, so its errors use LOG_FORMAT too
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    config = IconConfig(project_dir)
    _setup_logging(config)

    kwargs = {} if tool_lookup is None else {"tool_lookup": tool_lookup}
    try:
        report = run_conversion(config, **kwargs)
    except IconError as e:
        logger.error("%s", e)
        return 1

    for result in report.incomplete:
        logger.warning("Incomplete: %s", result.describe())
    for identity in config.get_identities():
        embed_icon_status(project_dir, identity.name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
