"""
Logging Configuration for the ISEA Grid System.

Every module obtains its logger through ``get_logger(__name__)`` so that all
output shares one format. Grid configurations are identified in log lines by
a short deterministic hash, which makes it possible to tell which grid a
logged address belongs to when several grids are in use at once.
"""

import hashlib
import json
import logging
import sys
from typing import Any, Dict


# Configure root logger for the package
def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger configured for the grid system.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int
        Logging level.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def config_hash(config: Dict[str, Any]) -> str:
    """Compute a deterministic hash of a configuration mapping.

    Parameters
    ----------
    config : dict
        The configuration dictionary. Values that are not JSON types are
        hashed through ``str``.

    Returns
    -------
    str
        First 16 hex digits of the SHA-256 of the canonical JSON form.
    """
    config_str = json.dumps(config, sort_keys=True, default=str)
    return hashlib.sha256(config_str.encode()).hexdigest()[:16]
