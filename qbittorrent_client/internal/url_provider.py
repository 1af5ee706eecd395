"""Endpoint URLs for each qBittorrent Web API generation."""

from abc import ABC, abstractmethod
from urllib.parse import quote

from ..exceptions import ApiNotSupportedError
from ..models import ApiLevel


class BaseUrlProvider(ABC):
    """Maps logical operations to endpoint URLs.

    The base URL keeps its own path, so a Web UI served behind a reverse
    proxy prefix works the same way as one served from the root.
    """

    api_level: ApiLevel

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _not_supported(self, operation: str):
        raise ApiNotSupportedError(operation, self.api_level)

    # Authentication

    @abstractmethod
    def login(self) -> str: ...

    @abstractmethod
    def logout(self) -> str: ...

    # Application

    @abstractmethod
    def api_version(self) -> str: ...

    @abstractmethod
    def qbittorrent_version(self) -> str: ...

    # Torrent queries

    @abstractmethod
    def torrent_list(self) -> str: ...

    @abstractmethod
    def torrent_properties(self, hash: str) -> str: ...

    @abstractmethod
    def torrent_contents(self, hash: str) -> str: ...

    @abstractmethod
    def torrent_trackers(self, hash: str) -> str: ...

    # Torrent commands

    @abstractmethod
    def add_torrent_files(self) -> str: ...

    @abstractmethod
    def add_torrent_urls(self) -> str: ...

    @abstractmethod
    def pause(self) -> str: ...

    @abstractmethod
    def pause_all(self) -> str: ...

    @abstractmethod
    def resume(self) -> str: ...

    @abstractmethod
    def resume_all(self) -> str: ...

    @abstractmethod
    def delete_torrents(self, with_files: bool) -> str: ...

    @abstractmethod
    def recheck(self) -> str: ...

    def reannounce(self) -> str:
        self._not_supported("reannounce")

    @abstractmethod
    def add_trackers(self) -> str: ...

    def edit_tracker(self) -> str:
        self._not_supported("edit_tracker")

    @abstractmethod
    def set_location(self) -> str: ...

    @abstractmethod
    def rename(self) -> str: ...

    # Categories

    def categories(self) -> str:
        self._not_supported("categories")

    @abstractmethod
    def add_category(self) -> str: ...

    def edit_category(self) -> str:
        self._not_supported("edit_category")

    @abstractmethod
    def delete_categories(self) -> str: ...

    @abstractmethod
    def set_category(self) -> str: ...

    # RSS

    def add_rss_folder(self) -> str:
        self._not_supported("add_rss_folder")

    def add_rss_feed(self) -> str:
        self._not_supported("add_rss_feed")

    def delete_rss_item(self) -> str:
        self._not_supported("delete_rss_item")

    def move_rss_item(self) -> str:
        self._not_supported("move_rss_item")

    def rss_items(self) -> str:
        self._not_supported("rss_items")

    def set_rss_auto_downloading_rule(self) -> str:
        self._not_supported("set_rss_auto_downloading_rule")

    def rename_rss_auto_downloading_rule(self) -> str:
        self._not_supported("rename_rss_auto_downloading_rule")

    def delete_rss_auto_downloading_rule(self) -> str:
        self._not_supported("delete_rss_auto_downloading_rule")

    def rss_auto_downloading_rules(self) -> str:
        self._not_supported("rss_auto_downloading_rules")


class LegacyUrlProvider(BaseUrlProvider):
    """`/command/...` and `/query/...` endpoints of qBittorrent before 4.1."""

    api_level = ApiLevel.LEGACY

    def login(self) -> str:
        return self._url("/login")

    def logout(self) -> str:
        return self._url("/logout")

    def api_version(self) -> str:
        return self._url("/version/api")

    def qbittorrent_version(self) -> str:
        return self._url("/version/qbittorrent")

    def torrent_list(self) -> str:
        return self._url("/query/torrents")

    def torrent_properties(self, hash: str) -> str:
        return self._url(f"/query/propertiesGeneral/{quote(hash, safe='')}")

    def torrent_contents(self, hash: str) -> str:
        return self._url(f"/query/propertiesFiles/{quote(hash, safe='')}")

    def torrent_trackers(self, hash: str) -> str:
        return self._url(f"/query/propertiesTrackers/{quote(hash, safe='')}")

    def add_torrent_files(self) -> str:
        return self._url("/command/upload")

    def add_torrent_urls(self) -> str:
        return self._url("/command/download")

    def pause(self) -> str:
        return self._url("/command/pause")

    def pause_all(self) -> str:
        return self._url("/command/pauseAll")

    def resume(self) -> str:
        return self._url("/command/resume")

    def resume_all(self) -> str:
        return self._url("/command/resumeAll")

    def delete_torrents(self, with_files: bool) -> str:
        if with_files:
            return self._url("/command/deletePerm")
        return self._url("/command/delete")

    def recheck(self) -> str:
        return self._url("/command/recheck")

    def add_trackers(self) -> str:
        return self._url("/command/addTrackers")

    def set_location(self) -> str:
        return self._url("/command/setLocation")

    def rename(self) -> str:
        return self._url("/command/rename")

    def add_category(self) -> str:
        return self._url("/command/addCategory")

    def delete_categories(self) -> str:
        return self._url("/command/removeCategories")

    def set_category(self) -> str:
        return self._url("/command/setCategory")


class Api2UrlProvider(BaseUrlProvider):
    """`/api/v2/<group>/<action>` endpoints of qBittorrent 4.1 and later."""

    api_level = ApiLevel.V2

    def _api(self, group: str, action: str) -> str:
        return self._url(f"/api/v2/{group}/{action}")

    def login(self) -> str:
        return self._api("auth", "login")

    def logout(self) -> str:
        return self._api("auth", "logout")

    def api_version(self) -> str:
        return self._api("app", "webapiVersion")

    def qbittorrent_version(self) -> str:
        return self._api("app", "version")

    def torrent_list(self) -> str:
        return self._api("torrents", "info")

    # V2 passes the hash as a query parameter instead of a path segment
    def torrent_properties(self, hash: str) -> str:
        return self._api("torrents", "properties")

    def torrent_contents(self, hash: str) -> str:
        return self._api("torrents", "files")

    def torrent_trackers(self, hash: str) -> str:
        return self._api("torrents", "trackers")

    def add_torrent_files(self) -> str:
        return self._api("torrents", "add")

    def add_torrent_urls(self) -> str:
        return self._api("torrents", "add")

    def pause(self) -> str:
        return self._api("torrents", "pause")

    def pause_all(self) -> str:
        return self._api("torrents", "pause")

    def resume(self) -> str:
        return self._api("torrents", "resume")

    def resume_all(self) -> str:
        return self._api("torrents", "resume")

    def delete_torrents(self, with_files: bool) -> str:
        return self._api("torrents", "delete")

    def recheck(self) -> str:
        return self._api("torrents", "recheck")

    def reannounce(self) -> str:
        return self._api("torrents", "reannounce")

    def add_trackers(self) -> str:
        return self._api("torrents", "addTrackers")

    def edit_tracker(self) -> str:
        return self._api("torrents", "editTracker")

    def set_location(self) -> str:
        return self._api("torrents", "setLocation")

    def rename(self) -> str:
        return self._api("torrents", "rename")

    def categories(self) -> str:
        return self._api("torrents", "categories")

    def add_category(self) -> str:
        return self._api("torrents", "createCategory")

    def edit_category(self) -> str:
        return self._api("torrents", "editCategory")

    def delete_categories(self) -> str:
        return self._api("torrents", "removeCategories")

    def set_category(self) -> str:
        return self._api("torrents", "setCategory")

    def add_rss_folder(self) -> str:
        return self._api("rss", "addFolder")

    def add_rss_feed(self) -> str:
        return self._api("rss", "addFeed")

    def delete_rss_item(self) -> str:
        return self._api("rss", "removeItem")

    def move_rss_item(self) -> str:
        return self._api("rss", "moveItem")

    def rss_items(self) -> str:
        return self._api("rss", "items")

    def set_rss_auto_downloading_rule(self) -> str:
        return self._api("rss", "setRule")

    def rename_rss_auto_downloading_rule(self) -> str:
        return self._api("rss", "renameRule")

    def delete_rss_auto_downloading_rule(self) -> str:
        return self._api("rss", "removeRule")

    def rss_auto_downloading_rules(self) -> str:
        return self._api("rss", "rules")
