"""Client for the remote league store (a JSON web app endpoint).

Reads return the raw snapshot. Nothing here retries: a failed fetch is
reported to the caller, which decides whether to keep showing the last
snapshot.
"""

import logging
import time
from pathlib import Path
from typing import Any, Optional

import requests

from .utils import load_json

logger = logging.getLogger('saga.store')


class StoreError(Exception):
    """The league store could not be read or written."""


class ReadOnlyStoreError(StoreError):
    """A write was attempted through a read-only (viewer) store."""


def unwrap_payload(payload: Any) -> Any:
    """Strip the ``{"success": true, "data": ...}`` envelope if present."""
    if isinstance(payload, dict) and payload.get('success') and payload.get('data'):
        return payload['data']
    return payload


class LeagueStore:
    """
    Reads (and, when allowed, writes) league snapshots.

    Write access is an explicit capability: viewers construct the store with
    ``read_only=True`` and every backup attempt is refused.
    """

    def __init__(
        self,
        url: str,
        read_only: bool = True,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.read_only = read_only
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> 'LeagueStore':
        """Build a store from data/saga_config.json."""
        from .config import get_config

        config = get_config()
        if not config.store_url:
            raise StoreError('No store_url configured')
        return cls(config.store_url, read_only=config.read_only, timeout=config.request_timeout)

    def restore(self) -> Optional[Any]:
        """
        Fetch the current snapshot.

        Returns:
            Snapshot dict, or None if the store returned an empty body

        Raises:
            StoreError: On HTTP errors, network failures or invalid JSON
        """
        params = {'action': 'restore', 'ts': int(time.time() * 1000)}
        try:
            response = self.session.get(
                self.url,
                params=params,
                headers={'Accept': 'application/json'},
                timeout=self.timeout,
                allow_redirects=True,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f'Restore failed: {e}')
            raise StoreError(f'Restore failed: {e}') from e

        text = response.text
        if not text or not text.strip():
            logger.warning('Store returned an empty body')
            return None

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning(f'Store returned invalid JSON: {text[:50]!r}')
            raise StoreError('Invalid JSON received') from e

        return unwrap_payload(payload)

    def backup(self, payload: Any) -> None:
        """
        Push a snapshot to the store.

        Raises:
            ReadOnlyStoreError: If this store is read-only
            StoreError: On HTTP or network failures
        """
        if self.read_only:
            logger.error('Write blocked: store is read-only')
            raise ReadOnlyStoreError('Store is read-only')

        logger.info('Backing up snapshot...')
        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f'Backup failed: {e}')
            raise StoreError(f'Backup failed: {e}') from e
        logger.info('Backup successful')


def load_snapshot(path: Path | str) -> Any:
    """Read a snapshot saved to disk, unwrapping the store envelope."""
    return unwrap_payload(load_json(path))
