import logging
import sys


def setup_logging(level: str | int = logging.INFO) -> None:
    """Configure the root logger with a single console handler.

    Safe to call more than once; existing handlers are replaced.
    """
    root = logging.getLogger()
    root.setLevel(level if isinstance(level, int) else level.upper())

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(handler)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
