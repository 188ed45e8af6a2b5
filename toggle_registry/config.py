import os
from typing import Dict, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from toggle_registry.logger import get_logger


logger = get_logger()

DEFAULT_PREFIX = "TOGGLE_"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def parse_bool(v) -> bool:
    return str(v).strip().lower() in _TRUE_VALUES


def load_env_toggles(
    prefix: str = DEFAULT_PREFIX, environ: Optional[Mapping[str, str]] = None
) -> Dict[str, bool]:
    """
    Collect fixed toggles from environment variables.

    TOGGLE_NEW_CHECKOUT=on becomes {"new_checkout": True}. When no mapping is
    passed the process environment is used, after merging the .env file found
    from the current working directory upwards.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    toggles = {}
    for name, raw in environ.items():
        if not name.startswith(prefix):
            continue
        key = name[len(prefix):].lower()
        if not key:
            continue
        toggles[key] = parse_bool(raw)
    if toggles:
        logger.debug(f"Loaded {len(toggles)} toggle(s) from environment prefix {prefix}")
    return toggles
