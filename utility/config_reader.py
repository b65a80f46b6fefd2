"""Utility to load engine configuration."""

import configparser
import logging
from pathlib import Path


def load_config(path: str | None = None) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    if path:
        cfg_path = Path(path)
    else:
        # Look for config.cfg in the data directory relative to the project root
        project_root = Path(__file__).parent.parent
        cfg_path = project_root / "data" / "config.cfg"

    parser.read(cfg_path)
    return parser


def configure_logging(config: configparser.ConfigParser | None = None) -> None:
    """Apply the ``[Logging]`` level to the root logger.

    Library modules only create module loggers; entry points call this once.
    """
    cfg = config if config is not None else CONFIG
    level_name = cfg.get("Logging", "level", fallback="INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Load default configuration at import time
CONFIG = load_config()
