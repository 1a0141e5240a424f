import logging
import sys
import time
from pathlib import Path
from typing import Iterable, Optional
from datetime import datetime

# Default log directory
DEFAULT_LOG_DIR = Path("var/log")

# Loggers of the engine that `configure_engine_logging` touches.
ENGINE_LOGGERS = (
    "rna_topology.pairing",
    "rna_topology.topology",
    "rna_topology.params",
)

_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_log_file_path(
        module_name: str,
        log_dir: Optional[Path] = None,
        include_timestamp: bool = True
) -> Path:
    """
    Build the log file path for a logger and make sure its directory exists.

    Parameters
    ----------
    module_name : str
        The logger name (e.g., "rna_topology.topology"). Dots become underscores.
    log_dir : Optional[Path], optional
        Target directory. Defaults to `DEFAULT_LOG_DIR`.
    include_timestamp : bool, optional
        Append a `%Y%m%d_%H%M%S` stamp to the filename, by default True.

    Returns
    -------
    Path
        The full path of the log file.
    """
    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR

    log_dir.mkdir(parents=True, exist_ok=True)

    safe_name = module_name.replace(".", "_")

    if include_timestamp:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{safe_name}_{timestamp}.log"
    else:
        filename = f"{safe_name}.log"

    return log_dir / filename


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = False,
    console_level: Optional[int] = None,
    file_level: Optional[int] = None,
) -> logging.Logger:
    """
    Configure and return a logger with a stdout handler and an optional file handler.

    Existing handlers on the logger are cleared first so repeated calls do not
    duplicate output.

    Parameters
    ----------
    name : str
        The logger name, typically a package such as ``"rna_topology.topology"``.
    level : int, optional
        Base level of the logger and its handlers, by default `logging.INFO`.
    log_file : Optional[str], optional
        Explicit log file path. Overrides `log_dir`/`enable_file_logging`.
    log_dir : Optional[Path], optional
        Directory for the timestamped log file when `enable_file_logging` is set.
    enable_file_logging : bool, optional
        Create a timestamped log file under `log_dir` when no `log_file` is
        given, by default False (the engine is a library and should not write
        files unless asked to).
    console_level, file_level : Optional[int], optional
        Per-handler overrides of `level`.

    Returns
    -------
    logging.Logger
        The configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(console_level if console_level is not None else level)
    logger.addHandler(console_handler)

    file_handler = None
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='a')
    elif enable_file_logging:
        log_path = get_log_file_path(name, log_dir=log_dir, include_timestamp=True)
        file_handler = logging.FileHandler(log_path, mode='a')
        logger.info(f"Logging to file: {log_path}")

    if file_handler:
        file_handler.setFormatter(formatter)
        file_handler.setLevel(file_level if file_level is not None else level)
        logger.addHandler(file_handler)

    return logger


def configure_engine_logging(
    level: int = logging.WARNING,
    log_file: Optional[str] = None,
    names: Iterable[str] = ENGINE_LOGGERS,
) -> None:
    """
    Apply one logging setup to every engine sub-package.

    Parameters
    ----------
    level : int, optional
        Level applied to all engine loggers, by default `logging.WARNING`.
    log_file : Optional[str], optional
        Shared log file for all engine loggers.
    names : Iterable[str], optional
        Logger names to configure, by default `ENGINE_LOGGERS`.
    """
    for name in names:
        setup_logger(name, level=level, log_file=log_file)


def set_log_level(logger: logging.Logger, level: int) -> None:
    """Update a logger and all of its handlers to `level`."""
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def cleanup_old_logs(log_dir: Optional[Path] = None, days_to_keep: int = 7) -> int:
    """
    Delete `*.log` files in `log_dir` whose modification time is older than
    `days_to_keep` days.

    Returns
    -------
    int
        Number of files removed.
    """
    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR

    if not log_dir.exists():
        return 0

    cutoff_time = time.time() - (days_to_keep * 86400)
    removed = 0
    for log_file in log_dir.glob("*.log"):
        if log_file.stat().st_mtime < cutoff_time:
            log_file.unlink()
            removed += 1
            logging.getLogger(__name__).debug(f"Removed old log: {log_file}")
    return removed
