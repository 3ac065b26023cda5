#!/usr/bin/env python3
"""qBittorrent client wrapper."""

import logging
import time
from typing import List, Optional, Sequence

import qbittorrentapi
import urllib3

from .config import ConnectionConfig
from .constants import MAX_RETRY_ATTEMPTS, RETRY_DELAY
from .errors import AuthError, RemovalError, SnapshotError
from .models import TorrentItem

# Suppress SSL warnings when SSL verification is disabled
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

logger = logging.getLogger(__name__)


class QBittorrentClient:
    """Thin wrapper around the qBittorrent Web API."""

    def __init__(self, config: ConnectionConfig, retry_delay: float = RETRY_DELAY):
        """
        Initialize client wrapper.

        Args:
            config: Connection configuration
            retry_delay: Seconds to wait between connection attempts
        """
        self.config = config
        self.retry_delay = retry_delay
        self._client: Optional[qbittorrentapi.Client] = None

    @property
    def client(self) -> qbittorrentapi.Client:
        """Get the underlying client."""
        if self._client is None:
            raise RuntimeError("Client not connected")
        return self._client

    def _build_client(self) -> qbittorrentapi.Client:
        return qbittorrentapi.Client(
            host=self.config.endpoint,
            username=self.config.username,
            password=self.config.password,
            VERIFY_WEBUI_CERTIFICATE=self.config.verify_ssl,
            REQUESTS_ARGS={'timeout': self.config.timeout},
        )

    def connect(self) -> None:
        """
        Log in to qBittorrent, always forcing a fresh session.

        Unreachable hosts are retried a few times; rejected credentials
        are not.

        Raises:
            AuthError: If login fails or the service stays unreachable
        """
        for attempt in range(MAX_RETRY_ATTEMPTS):
            try:
                self._client = self._build_client()

                # Suppress SSL logging for connection
                original_level = logging.getLogger("urllib3.connectionpool").level
                logging.getLogger("urllib3.connectionpool").setLevel(logging.ERROR)
                try:
                    self._client.auth_log_in()
                finally:
                    logging.getLogger("urllib3.connectionpool").setLevel(original_level)

                version = self._client.app_version()
                api_version = self._client.app_web_api_version()
                ssl_status = "enabled" if self.config.verify_ssl else "disabled"
                logger.info(
                    f"Connected to qBittorrent {version} at {self.config.endpoint} "
                    f"(API: {api_version}, SSL: {ssl_status})"
                )
                return

            except qbittorrentapi.LoginFailed as e:
                self._client = None
                raise AuthError(f"login rejected for user '{self.config.username}': {e}") from e
            except qbittorrentapi.Forbidden403Error as e:
                self._client = None
                raise AuthError(f"access forbidden, too many failed logins? {e}") from e
            except qbittorrentapi.APIConnectionError as e:
                self._client = None
                if attempt == MAX_RETRY_ATTEMPTS - 1:
                    raise AuthError(
                        f"cannot reach {self.config.endpoint} after {MAX_RETRY_ATTEMPTS} attempts: {e}"
                    ) from e
                logger.warning(f"Connection attempt {attempt + 1} failed, retrying: {e}")
                time.sleep(self.retry_delay)
            except qbittorrentapi.APIError as e:
                self._client = None
                raise AuthError(f"unexpected API error during login: {e}") from e

    def disconnect(self) -> None:
        """Log out from qBittorrent."""
        if self._client:
            try:
                self._client.auth_log_out()
                logger.debug("Disconnected from qBittorrent")
            except qbittorrentapi.APIError as e:
                logger.debug(f"Logout error (ignored): {e}")
            finally:
                self._client = None

    def get_items(self) -> List[TorrentItem]:
        """
        Get a snapshot of all torrents.

        Returns:
            Torrents in the order reported by qBittorrent

        Raises:
            SnapshotError: If the list cannot be fetched
        """
        try:
            torrents = self.client.torrents_info()
        except qbittorrentapi.Forbidden403Error as e:
            raise SnapshotError(f"authentication error fetching torrents: {e}") from e
        except qbittorrentapi.APIConnectionError as e:
            raise SnapshotError(f"API connection error fetching torrents: {e}") from e
        except qbittorrentapi.APIError as e:
            raise SnapshotError(f"unexpected API error fetching torrents: {e}") from e
        return [TorrentItem.from_torrent(t) for t in torrents]

    def delete_torrents(self, torrent_hashes: Sequence[str], delete_files: bool = True) -> None:
        """
        Delete torrents in a single request.

        Args:
            torrent_hashes: Hashes of the torrents to delete
            delete_files: Whether to delete downloaded data as well

        Raises:
            RemovalError: If qBittorrent rejects the request
        """
        if not torrent_hashes:
            return

        hashes = list(torrent_hashes)
        try:
            self.client.torrents_delete(delete_files=delete_files, torrent_hashes=hashes)
        except qbittorrentapi.Forbidden403Error as e:
            raise RemovalError(f"permission denied: {e}", hashes) from e
        except qbittorrentapi.Conflict409Error as e:
            raise RemovalError(f"conflict: {e}", hashes) from e
        except qbittorrentapi.APIConnectionError as e:
            raise RemovalError(f"API connection error: {e}", hashes) from e
        except qbittorrentapi.APIError as e:
            raise RemovalError(f"unexpected API error: {e}", hashes) from e
