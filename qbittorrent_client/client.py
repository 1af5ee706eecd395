"""qBittorrent Web API client with async httpx."""

from typing import Dict, Iterable, List, Optional, Union

import httpx

from .exceptions import LoginFailedError
from .internal.encoding import ApiRequest
from .internal.request_provider import BaseRequestProvider, create_request_provider
from .models import (
    AddTorrentFilesRequest,
    AddTorrentsRequest,
    AddTorrentUrlsRequest,
    ApiLevel,
    Category,
    RssAutoDownloadingRule,
    TorrentContent,
    TorrentInfo,
    TorrentListQuery,
    TorrentProperties,
    TorrentTracker,
)
from .utils.config import settings
from .utils.logger import logger


Hashes = Union[str, Iterable[str]]
AnyAddTorrentRequest = Union[AddTorrentsRequest, AddTorrentFilesRequest, AddTorrentUrlsRequest]


def _check_required(value, name: str):
    if value is None:
        raise ValueError(f"{name} must not be None")
    if isinstance(value, str) and not value.strip():
        raise ValueError(f"{name} cannot be empty")
    return value


def _check_hashes(hashes: Hashes, name: str = "hashes") -> List[str]:
    """Normalize a single hash or an iterable of hashes into a non-empty list."""
    if hashes is None:
        raise ValueError(f"{name} must not be None")
    if isinstance(hashes, str):
        hashes = [hashes]
    hashes = list(hashes)
    if not hashes:
        raise ValueError(f"The {name} list cannot be empty")
    for hash in hashes:
        _check_required(hash, name)
    return hashes


def _check_list(values: Iterable[str], name: str) -> List[str]:
    if values is None:
        raise ValueError(f"{name} must not be None")
    if isinstance(values, str):
        values = [values]
    values = list(values)
    if not values:
        raise ValueError(f"The {name} list cannot be empty")
    return values


def _client_options(timeout: Optional[float]) -> dict:
    return {
        "timeout": httpx.Timeout(timeout if timeout is not None else settings.request_timeout),
        "limits": httpx.Limits(max_connections=settings.max_connections),
        "verify": settings.verify_ssl,
    }


async def detect_api_level(
    url: Optional[str] = None,
    *,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ApiLevel:
    """
    Detect which Web API generation a qBittorrent instance serves.

    The V2 version endpoint answers even without a session (403 when
    authentication is required); servers without it answer 404.

    Args:
        url: Web UI address (uses settings if not provided)
        timeout: Request timeout in seconds
        transport: Custom httpx transport

    Returns:
        ApiLevel of the server

    Raises:
        httpx.HTTPStatusError: On a server error
    """
    url = (url or settings.qbittorrent_url).rstrip("/")
    async with httpx.AsyncClient(transport=transport, **_client_options(timeout)) as client:
        response = await client.get(f"{url}/api/v2/app/webapiVersion")

    if response.status_code >= 500:
        response.raise_for_status()

    api_level = ApiLevel.LEGACY if response.status_code == 404 else ApiLevel.V2

    logger.info(f"Detected {api_level.value} Web API at {url}")
    return api_level


class QBittorrentClient:
    """Async client for the qBittorrent Web API (legacy and v2)."""

    def __init__(
        self,
        url: Optional[str] = None,
        api_level: Optional[ApiLevel] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize qBittorrent client.

        Args:
            url: Web UI address (uses settings if not provided)
            api_level: API generation to speak (uses settings if not provided)
            timeout: Request timeout in seconds (uses settings if not provided)
            transport: Custom httpx transport
        """
        self.url = (url or settings.qbittorrent_url).rstrip("/")
        self.api_level = ApiLevel(api_level or settings.api_level)
        self.requests: BaseRequestProvider = create_request_provider(self.api_level, self.url)
        self.client = httpx.AsyncClient(transport=transport, **_client_options(timeout))
        self._closed = False

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self):
        """Close the HTTP client. Calling it again does nothing."""
        if self._closed:
            return
        self._closed = True
        await self.client.aclose()

    async def _send(self, request: ApiRequest) -> httpx.Response:
        """
        Send a built request.

        No retries: transport errors and non-success statuses are raised.

        Raises:
            RuntimeError: If the client has been closed
            httpx.HTTPStatusError: On a non-success status
            httpx.TransportError: On connection failures and timeouts
        """
        if self._closed:
            raise RuntimeError("qBittorrent client is closed")

        logger.debug(f"{request.method} {request.url}")
        response = await self.client.send(request.build(self.client))
        logger.debug(f"Response: {response.status_code}")

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"qBittorrent API request failed: {e}",
                extra={"extra": {"status_code": response.status_code, "url": request.url}},
            )
            raise

        return response

    async def _get_json(self, request: ApiRequest):
        response = await self._send(request)
        return response.json()

    # Authentication

    async def login(self, username: Optional[str] = None, password: Optional[str] = None):
        """
        Log in. The session cookie is kept by the HTTP client.

        Args:
            username: Web UI user (uses settings if not provided)
            password: Web UI password (uses settings if not provided)

        Raises:
            LoginFailedError: If the credentials are rejected
        """
        username = username if username is not None else settings.qbittorrent_username
        password = password if password is not None else settings.qbittorrent_password
        _check_required(username, "username")

        response = await self._send(self.requests.login(username, password))
        if response.text.strip().lower() != "ok.":
            logger.error(f"qBittorrent login failed for user {username}")
            raise LoginFailedError(f"Login failed for user {username}")

        logger.info(f"Logged in to qBittorrent as {username}")

    async def logout(self):
        """Log out of the current session."""
        await self._send(self.requests.logout())
        logger.info("Logged out of qBittorrent")

    # Application

    async def get_api_version(self) -> str:
        """Get the Web API version string reported by the server."""
        response = await self._send(self.requests.api_version())
        return response.text.strip()

    async def get_qbittorrent_version(self) -> str:
        """Get the qBittorrent version string."""
        response = await self._send(self.requests.qbittorrent_version())
        return response.text.strip()

    # Torrent queries

    async def get_torrent_list(self, query: Optional[TorrentListQuery] = None) -> List[TorrentInfo]:
        """
        Get the torrent list.

        Args:
            query: Filter, sorting and paging (everything unset by default)

        Returns:
            List of TorrentInfo
        """
        query = query or TorrentListQuery()
        if query.hashes is not None:
            _check_hashes(query.hashes)
        result = await self._get_json(self.requests.torrent_list(query))
        return [TorrentInfo(**torrent) for torrent in result]

    async def get_torrent_properties(self, hash: str) -> TorrentProperties:
        """Get the general properties of a torrent."""
        _check_required(hash, "hash")
        result = await self._get_json(self.requests.torrent_properties(hash))
        return TorrentProperties(**result)

    async def get_torrent_contents(self, hash: str) -> List[TorrentContent]:
        """Get the files of a torrent."""
        _check_required(hash, "hash")
        result = await self._get_json(self.requests.torrent_contents(hash))
        return [TorrentContent(**content) for content in result]

    async def get_torrent_trackers(self, hash: str) -> List[TorrentTracker]:
        """Get the trackers of a torrent."""
        _check_required(hash, "hash")
        result = await self._get_json(self.requests.torrent_trackers(hash))
        return [TorrentTracker(**tracker) for tracker in result]

    # Adding torrents

    async def add_torrents(self, request: AnyAddTorrentRequest):
        """
        Add torrents from .torrent file contents and/or URLs.

        Args:
            request: AddTorrentFilesRequest, AddTorrentUrlsRequest or
                AddTorrentsRequest with at least one file or URL

        The body is multipart/form-data only when torrent files are attached;
        a URL-only request is sent form-urlencoded.
        """
        _check_required(request, "request")
        files = getattr(request, "torrent_files", None) or []
        urls = getattr(request, "torrent_urls", None) or []
        if not files and not urls:
            raise ValueError("At least one torrent file or URL is required")

        if isinstance(request, AddTorrentsRequest):
            api_request = self.requests.add_torrents(request)
        elif isinstance(request, AddTorrentFilesRequest):
            api_request = self.requests.add_torrent_files(request)
        else:
            api_request = self.requests.add_torrent_urls(request)

        logger.info(f"Adding {len(files)} torrent file(s) and {len(urls)} URL(s)")
        await self._send(api_request)

    # Torrent commands

    async def pause(self, hashes: Hashes):
        """Pause one torrent or a list of torrents."""
        hashes = _check_hashes(hashes)
        logger.info(f"Pausing {len(hashes)} torrent(s)")
        await self._send(self.requests.pause(hashes))

    async def pause_all(self):
        """Pause all torrents."""
        logger.info("Pausing all torrents")
        await self._send(self.requests.pause_all())

    async def resume(self, hashes: Hashes):
        """Resume one torrent or a list of torrents."""
        hashes = _check_hashes(hashes)
        logger.info(f"Resuming {len(hashes)} torrent(s)")
        await self._send(self.requests.resume(hashes))

    async def resume_all(self):
        """Resume all torrents."""
        logger.info("Resuming all torrents")
        await self._send(self.requests.resume_all())

    async def delete(self, hashes: Hashes, delete_downloaded_data: bool = False):
        """
        Delete torrents.

        Args:
            hashes: Torrent hash or hashes
            delete_downloaded_data: Also delete the downloaded files
        """
        hashes = _check_hashes(hashes)
        logger.info(
            f"Deleting {len(hashes)} torrent(s)"
            + (" with downloaded data" if delete_downloaded_data else "")
        )
        await self._send(self.requests.delete_torrents(hashes, delete_downloaded_data))

    async def recheck(self, hashes: Hashes):
        """Recheck torrent data."""
        hashes = _check_hashes(hashes)
        await self._send(self.requests.recheck(hashes))

    async def reannounce(self, hashes: Hashes):
        """Reannounce torrents to their trackers."""
        hashes = _check_hashes(hashes)
        await self._send(self.requests.reannounce(hashes))

    async def set_location(self, hashes: Hashes, new_location: str):
        """Move torrents to a new download folder."""
        hashes = _check_hashes(hashes)
        _check_required(new_location, "new_location")
        await self._send(self.requests.set_location(hashes, new_location))

    async def rename(self, hash: str, new_name: str):
        """
        Rename a torrent.

        The server answers 400 for names it refuses; that surfaces as a
        plain httpx.HTTPStatusError.
        """
        _check_required(hash, "hash")
        _check_required(new_name, "new_name")
        await self._send(self.requests.rename(hash, new_name))

    # Trackers

    async def add_trackers(self, hash: str, tracker_urls: Iterable[str]):
        """Add trackers to a torrent."""
        _check_required(hash, "hash")
        tracker_urls = _check_list(tracker_urls, "tracker_urls")
        await self._send(self.requests.add_trackers(hash, tracker_urls))

    async def edit_tracker(self, hash: str, tracker_url: str, new_tracker_url: str):
        """Replace a tracker URL of a torrent."""
        _check_required(hash, "hash")
        _check_required(tracker_url, "tracker_url")
        _check_required(new_tracker_url, "new_tracker_url")
        await self._send(self.requests.edit_tracker(hash, tracker_url, new_tracker_url))

    async def delete_trackers(self, hash: str, tracker_urls: Iterable[str]):
        """Remove trackers from a torrent."""
        _check_required(hash, "hash")
        tracker_urls = _check_list(tracker_urls, "tracker_urls")
        await self._send(self.requests.delete_trackers(hash, tracker_urls))

    # Categories

    async def get_categories(self) -> Dict[str, Category]:
        """Get all categories keyed by name."""
        result = await self._get_json(self.requests.categories())
        return {name: Category(**category) for name, category in result.items()}

    async def add_category(self, name: str, save_path: Optional[str] = None):
        """Create a category."""
        _check_required(name, "name")
        await self._send(self.requests.add_category(name, save_path))

    async def edit_category(self, name: str, save_path: Optional[str]):
        """Change the save path of a category."""
        _check_required(name, "name")
        await self._send(self.requests.edit_category(name, save_path))

    async def delete_categories(self, names: Iterable[str]):
        """Delete categories."""
        names = _check_list(names, "names")
        await self._send(self.requests.delete_categories(names))

    async def set_torrent_category(self, hashes: Hashes, category: str):
        """Assign a category to torrents. An empty category clears it."""
        hashes = _check_hashes(hashes)
        if category is None:
            raise ValueError("category must not be None")
        await self._send(self.requests.set_category(hashes, category))

    # RSS

    async def add_rss_folder(self, path: str):
        """Create an RSS folder."""
        _check_required(path, "path")
        await self._send(self.requests.add_rss_folder(path))

    async def add_rss_feed(self, url: str, path: Optional[str] = None):
        """Subscribe to an RSS feed, optionally inside a folder path."""
        _check_required(url, "url")
        await self._send(self.requests.add_rss_feed(url, path))

    async def delete_rss_item(self, path: str):
        """Delete an RSS feed or folder."""
        _check_required(path, "path")
        await self._send(self.requests.delete_rss_item(path))

    async def move_rss_item(self, path: str, destination_path: str):
        """Move or rename an RSS feed or folder."""
        _check_required(path, "path")
        _check_required(destination_path, "destination_path")
        await self._send(self.requests.move_rss_item(path, destination_path))

    async def get_rss_items(self, with_data: Optional[bool] = None) -> dict:
        """
        Get the RSS folder and feed tree.

        The tree shape is defined by the server (folders are nested dicts,
        feeds are dicts with url and uid, plus articles when with_data is set),
        so it is returned as decoded JSON.
        """
        return await self._get_json(self.requests.rss_items(with_data))

    async def set_rss_auto_downloading_rule(self, name: str, rule: RssAutoDownloadingRule):
        """Create or replace an RSS auto-downloading rule."""
        _check_required(name, "name")
        _check_required(rule, "rule")
        await self._send(self.requests.set_rss_auto_downloading_rule(name, rule.to_definition()))

    async def rename_rss_auto_downloading_rule(self, name: str, new_name: str):
        """Rename an RSS auto-downloading rule."""
        _check_required(name, "name")
        _check_required(new_name, "new_name")
        await self._send(self.requests.rename_rss_auto_downloading_rule(name, new_name))

    async def delete_rss_auto_downloading_rule(self, name: str):
        """Delete an RSS auto-downloading rule."""
        _check_required(name, "name")
        await self._send(self.requests.delete_rss_auto_downloading_rule(name))

    async def get_rss_auto_downloading_rules(self) -> Dict[str, RssAutoDownloadingRule]:
        """Get all RSS auto-downloading rules keyed by name."""
        result = await self._get_json(self.requests.rss_auto_downloading_rules())
        return {name: RssAutoDownloadingRule(**rule) for name, rule in result.items()}
