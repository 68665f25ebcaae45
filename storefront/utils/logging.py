# storefront/utils/logging.py
import logging
import sys

from storefront.utils.settings import LOG_LEVEL

ROOT_LOGGER = "storefront"
_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(LOG_LEVEL)
        root.propagate = False
    return root


def get_logger(name: str | None = None) -> logging.Logger:
    """Child of the "storefront" logger; names outside the package get prefixed."""
    _configure_root()
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
