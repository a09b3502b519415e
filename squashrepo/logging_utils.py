from __future__ import annotations

import logging
from pathlib import Path

DEFAULT_LOG_PATH = "/var/log/squashrepo.log"
FALLBACK_LOG_NAME = "squashrepo.log"

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def _open_log_file(log_path: str) -> logging.FileHandler:
    """Open the requested log, or squashrepo.log in the working directory.

    The default lives under /var/log, which a dry run as a normal user
    usually cannot write to.
    """

    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path)
    except OSError:
        return logging.FileHandler(str(Path.cwd() / FALLBACK_LOG_NAME))


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    console_level: int = logging.INFO,
) -> str:
    """Send everything to the log file and stage progress to the console.

    The file gets DEBUG records, so stdout/stderr of every pacman, mount and
    wget call ends up there. The console shows ``console_level`` and above;
    stage failures are logged at ERROR so they are always visible.

    Safe to call more than once. Returns the log file actually in use.
    """

    root = logging.getLogger()
    if getattr(root, "_squashrepo_log_path", None):
        return root._squashrepo_log_path  # type: ignore[attr-defined]

    root.setLevel(logging.DEBUG)

    file_handler = _open_log_file(log_path)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    root.addHandler(file_handler)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    root.addHandler(console)

    chosen_path = file_handler.baseFilename
    setattr(root, "_squashrepo_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
