"""Root logger configuration: console plus optional combined / error log files."""

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | int = logging.INFO, log_dir: str | Path | None = "logs") -> None:
    """Configure the root logger.

    - Console handler on stderr at ``level``
    - ``combined.log`` with every record at ``level``
    - ``errors.log`` with ERROR and above

    File handlers are skipped when ``log_dir`` is empty. Safe to call more
    than once; previously installed handlers are replaced.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        combined = logging.FileHandler(str(log_path / "combined.log"), encoding="utf-8")
        combined.setLevel(level)
        combined.setFormatter(fmt)
        root.addHandler(combined)

        errors = logging.FileHandler(str(log_path / "errors.log"), encoding="utf-8")
        errors.setLevel(logging.ERROR)
        errors.setFormatter(fmt)
        root.addHandler(errors)

    logging.captureWarnings(True)
