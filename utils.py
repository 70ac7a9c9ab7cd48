# utils.py
"""
Helpers for the portrait entry point: logging, config.json and paths.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any, List

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> str:
#   - Inputs: the whole config; only its optional "logging" section
#     ("level", "format", "log_file") is read.
#   - Outputs: the path of the log file in use.
#   - Side Effects: replaces the root logger's handlers with a console
#     handler and a size-rotated file handler.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Raises FileNotFoundError, json.JSONDecodeError, or ValueError when
#     the top level is not a JSON object. Each is logged before re-raising.
#
# setting(section: Dict[str, Any], key: str, default) -> Any:
#   - A missing key and a JSON null both yield `default`.
#
# resolve_path(config_path: str, path: str) -> str:
#   - Relative paths are taken relative to the config file's directory.

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/portrait.log'
LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 5


def setting(section: Dict[str, Any], key: str, default):
    value = section.get(key)
    return default if value is None else value


def _portrait_handlers(log_file_path: str) -> List[logging.Handler]:
    folder = os.path.dirname(log_file_path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    return [
        logging.StreamHandler(),
        logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
        ),
    ]


def setup_logging(config: Dict[str, Any]) -> str:
    """
    Routes the root logger to the console and a rotating portrait log.
    """
    section = config.get('logging') or {}
    level = str(setting(section, 'level', 'INFO')).upper()
    log_file_path = setting(section, 'log_file', DEFAULT_LOG_FILE)
    formatter = logging.Formatter(setting(section, 'format', DEFAULT_LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    for handler in _portrait_handlers(log_file_path):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.info(f"Portrait logging at {level}, file {log_file_path}.")
    return log_file_path


def load_config(path: str) -> Dict[str, Any]:
    """Reads the portrait's config.json."""
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"No portrait configuration at {path}.")
        raise
    except json.JSONDecodeError as e:
        logging.error(f"Portrait configuration {path} is not valid JSON: {e}")
        raise

    if not isinstance(config, dict):
        msg = f"Portrait configuration {path} must hold a JSON object."
        logging.error(msg)
        raise ValueError(msg)

    logging.info(f"Portrait configuration read from {path} (sections: {', '.join(config)}).")
    return config


def resolve_path(config_path: str, path: str) -> str:
    """Resolves `path` against the directory holding the config file."""
    if os.path.isabs(path):
        return path
    return os.path.join(os.path.dirname(os.path.abspath(config_path)), path)
