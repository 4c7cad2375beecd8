"""Saga configuration management."""

import logging
from functools import lru_cache

from .constants import CONFIG_PATH
from .schemas import SagaConfig
from .utils import load_json

logger = logging.getLogger('saga.config')


@lru_cache(maxsize=1)
def get_config() -> SagaConfig:
    """
    Load settings from data/saga_config.json, cached after first load.

    The data directory is not part of an installed wheel, so a missing file
    yields the ``SagaConfig`` defaults (read-only, no store URL).

    Raises:
        ValueError: If the config file has invalid structure
    """
    if not CONFIG_PATH.exists():
        logger.info(f'No config at {CONFIG_PATH}, using defaults')
        return SagaConfig()
    return load_json(CONFIG_PATH, schema=SagaConfig)


def clear_config_cache() -> None:
    """Drop the cached config so the next ``get_config()`` rereads the file."""
    get_config.cache_clear()
