"""Request builders for each qBittorrent Web API generation."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from ..exceptions import ApiNotSupportedError
from ..models import (
    AddTorrentFilesRequest,
    AddTorrentRequest,
    AddTorrentsRequest,
    AddTorrentUrlsRequest,
    ApiLevel,
    TorrentListQuery,
)
from .encoding import (
    ApiRequest,
    build_form,
    build_query,
    encode_fields,
    join_hashes,
    optional_newline_join,
    torrent_file_parts,
)
from .url_provider import Api2UrlProvider, BaseUrlProvider, LegacyUrlProvider


class BaseRequestProvider(ABC):
    """Builds requests for every logical operation.

    Request shapes shared by both generations live here. Operations that
    only one generation offers raise ApiNotSupportedError unless the
    generation's provider overrides them.
    """

    api_level: ApiLevel

    def __init__(self, url: BaseUrlProvider):
        self.url = url

    def _not_supported(self, operation: str):
        raise ApiNotSupportedError(operation, self.api_level)

    # Authentication

    def login(self, username: str, password: str) -> ApiRequest:
        return build_form(self.url.login(), ("username", username), ("password", password))

    def logout(self) -> ApiRequest:
        return build_form(self.url.logout())

    # Application

    def api_version(self) -> ApiRequest:
        return build_query(self.url.api_version())

    def qbittorrent_version(self) -> ApiRequest:
        return build_query(self.url.qbittorrent_version())

    # Torrent queries

    @abstractmethod
    def torrent_list(self, query: TorrentListQuery) -> ApiRequest: ...

    @abstractmethod
    def torrent_properties(self, hash: str) -> ApiRequest: ...

    @abstractmethod
    def torrent_contents(self, hash: str) -> ApiRequest: ...

    @abstractmethod
    def torrent_trackers(self, hash: str) -> ApiRequest: ...

    # Adding torrents

    def add_torrent_files(self, request: AddTorrentFilesRequest) -> ApiRequest:
        return self._add_torrents_core(
            self.url.add_torrent_files(), request, files=request.torrent_files
        )

    def add_torrent_urls(self, request: AddTorrentUrlsRequest) -> ApiRequest:
        return self._add_torrents_core(
            self.url.add_torrent_urls(), request, urls=request.torrent_urls
        )

    @abstractmethod
    def add_torrents(self, request: AddTorrentsRequest) -> ApiRequest: ...

    def _add_torrents_core(
        self,
        url: str,
        request: AddTorrentRequest,
        files: Optional[Iterable[bytes]] = None,
        urls: Optional[Iterable[str]] = None,
    ) -> ApiRequest:
        data = encode_fields(
            ("urls", optional_newline_join(urls)),
            ("savepath", request.download_folder),
            ("cookie", request.cookie),
            ("category", request.category),
            ("skip_checking", request.skip_hash_checking),
            ("paused", request.paused),
            ("root_folder", request.create_root_folder),
            ("rename", request.rename),
            ("upLimit", request.upload_limit),
            ("dlLimit", request.download_limit),
            ("sequentialDownload", request.sequential_download),
            ("firstLastPiecePrio", request.first_last_piece_prioritized),
        )
        return ApiRequest("POST", url, data=data, files=torrent_file_parts(files or []))

    # Torrent commands

    @abstractmethod
    def pause(self, hashes: Iterable[str]) -> ApiRequest: ...

    @abstractmethod
    def pause_all(self) -> ApiRequest: ...

    @abstractmethod
    def resume(self, hashes: Iterable[str]) -> ApiRequest: ...

    @abstractmethod
    def resume_all(self) -> ApiRequest: ...

    @abstractmethod
    def delete_torrents(self, hashes: Iterable[str], with_files: bool) -> ApiRequest: ...

    @abstractmethod
    def recheck(self, hashes: Iterable[str]) -> ApiRequest: ...

    def reannounce(self, hashes: Iterable[str]) -> ApiRequest:
        self._not_supported("reannounce")

    def set_location(self, hashes: Iterable[str], location: str) -> ApiRequest:
        return build_form(
            self.url.set_location(),
            ("hashes", join_hashes(hashes)),
            ("location", location),
        )

    def rename(self, hash: str, name: str) -> ApiRequest:
        return build_form(self.url.rename(), ("hash", hash), ("name", name))

    # Trackers

    def add_trackers(self, hash: str, tracker_urls: Iterable[str]) -> ApiRequest:
        return build_form(
            self.url.add_trackers(),
            ("hash", hash),
            ("urls", "\n".join(tracker_urls)),
        )

    def edit_tracker(self, hash: str, tracker_url: str, new_tracker_url: str) -> ApiRequest:
        self._not_supported("edit_tracker")

    def delete_trackers(self, hash: str, tracker_urls: Iterable[str]) -> ApiRequest:
        self._not_supported("delete_trackers")

    # Categories

    def categories(self) -> ApiRequest:
        self._not_supported("categories")

    @abstractmethod
    def add_category(self, name: str, save_path: Optional[str] = None) -> ApiRequest: ...

    def edit_category(self, name: str, save_path: Optional[str]) -> ApiRequest:
        self._not_supported("edit_category")

    def delete_categories(self, names: Iterable[str]) -> ApiRequest:
        return build_form(self.url.delete_categories(), ("categories", "\n".join(names)))

    def set_category(self, hashes: Iterable[str], category: str) -> ApiRequest:
        return build_form(
            self.url.set_category(),
            ("hashes", join_hashes(hashes)),
            ("category", category),
        )

    # RSS

    def add_rss_folder(self, path: str) -> ApiRequest:
        self._not_supported("add_rss_folder")

    def add_rss_feed(self, url: str, path: Optional[str] = None) -> ApiRequest:
        self._not_supported("add_rss_feed")

    def delete_rss_item(self, path: str) -> ApiRequest:
        self._not_supported("delete_rss_item")

    def move_rss_item(self, path: str, destination_path: str) -> ApiRequest:
        self._not_supported("move_rss_item")

    def rss_items(self, with_data: Optional[bool] = None) -> ApiRequest:
        self._not_supported("rss_items")

    def set_rss_auto_downloading_rule(self, name: str, rule_definition: str) -> ApiRequest:
        self._not_supported("set_rss_auto_downloading_rule")

    def rename_rss_auto_downloading_rule(self, name: str, new_name: str) -> ApiRequest:
        self._not_supported("rename_rss_auto_downloading_rule")

    def delete_rss_auto_downloading_rule(self, name: str) -> ApiRequest:
        self._not_supported("delete_rss_auto_downloading_rule")

    def rss_auto_downloading_rules(self) -> ApiRequest:
        self._not_supported("rss_auto_downloading_rules")


class LegacyRequestProvider(BaseRequestProvider):
    """Requests for the legacy `/command` and `/query` API."""

    api_level = ApiLevel.LEGACY

    def __init__(self, base_url: str):
        super().__init__(LegacyUrlProvider(base_url))

    def torrent_list(self, query: TorrentListQuery) -> ApiRequest:
        if query.hashes is not None:
            self._not_supported("torrent_list(hashes)")
        return build_query(
            self.url.torrent_list(),
            ("filter", query.filter),
            ("category", query.category),
            ("sort", query.sort_by),
            ("reverse", query.reverse_sort),
            ("limit", query.limit),
            ("offset", query.offset),
        )

    def torrent_properties(self, hash: str) -> ApiRequest:
        return build_query(self.url.torrent_properties(hash))

    def torrent_contents(self, hash: str) -> ApiRequest:
        return build_query(self.url.torrent_contents(hash))

    def torrent_trackers(self, hash: str) -> ApiRequest:
        return build_query(self.url.torrent_trackers(hash))

    def add_torrents(self, request: AddTorrentsRequest) -> ApiRequest:
        # Files and URLs go to different endpoints here
        if request.torrent_files and request.torrent_urls:
            self._not_supported("add_torrents(files and urls)")
        if request.torrent_files:
            return self.add_torrent_files(request)
        return self.add_torrent_urls(request)

    def pause(self, hashes: Iterable[str]) -> ApiRequest:
        return build_form(self.url.pause(), ("hash", join_hashes(hashes)))

    def pause_all(self) -> ApiRequest:
        return build_form(self.url.pause_all())

    def resume(self, hashes: Iterable[str]) -> ApiRequest:
        return build_form(self.url.resume(), ("hash", join_hashes(hashes)))

    def resume_all(self) -> ApiRequest:
        return build_form(self.url.resume_all())

    def delete_torrents(self, hashes: Iterable[str], with_files: bool) -> ApiRequest:
        return build_form(
            self.url.delete_torrents(with_files),
            ("hashes", join_hashes(hashes)),
        )

    def recheck(self, hashes: Iterable[str]) -> ApiRequest:
        return build_form(self.url.recheck(), ("hash", join_hashes(hashes)))

    def add_category(self, name: str, save_path: Optional[str] = None) -> ApiRequest:
        if save_path is not None:
            self._not_supported("add_category(save_path)")
        return build_form(self.url.add_category(), ("category", name))


class Api2RequestProvider(BaseRequestProvider):
    """Requests for the `/api/v2` API."""

    api_level = ApiLevel.V2

    def __init__(self, base_url: str):
        super().__init__(Api2UrlProvider(base_url))

    def torrent_list(self, query: TorrentListQuery) -> ApiRequest:
        hashes = join_hashes(query.hashes) if query.hashes is not None else None
        return build_query(
            self.url.torrent_list(),
            ("filter", query.filter),
            ("category", query.category),
            ("sort", query.sort_by),
            ("reverse", query.reverse_sort),
            ("limit", query.limit),
            ("offset", query.offset),
            ("hashes", hashes),
        )

    def torrent_properties(self, hash: str) -> ApiRequest:
        return build_query(self.url.torrent_properties(hash), ("hash", hash))

    def torrent_contents(self, hash: str) -> ApiRequest:
        return build_query(self.url.torrent_contents(hash), ("hash", hash))

    def torrent_trackers(self, hash: str) -> ApiRequest:
        return build_query(self.url.torrent_trackers(hash), ("hash", hash))

    def add_torrents(self, request: AddTorrentsRequest) -> ApiRequest:
        return self._add_torrents_core(
            self.url.add_torrent_files(),
            request,
            files=request.torrent_files,
            urls=request.torrent_urls,
        )

    def pause(self, hashes: Iterable[str]) -> ApiRequest:
        return build_form(self.url.pause(), ("hashes", join_hashes(hashes)))

    def pause_all(self) -> ApiRequest:
        return build_form(self.url.pause_all(), ("hashes", "all"))

    def resume(self, hashes: Iterable[str]) -> ApiRequest:
        return build_form(self.url.resume(), ("hashes", join_hashes(hashes)))

    def resume_all(self) -> ApiRequest:
        return build_form(self.url.resume_all(), ("hashes", "all"))

    def delete_torrents(self, hashes: Iterable[str], with_files: bool) -> ApiRequest:
        return build_form(
            self.url.delete_torrents(with_files),
            ("hashes", join_hashes(hashes)),
            ("deleteFiles", with_files),
        )

    def recheck(self, hashes: Iterable[str]) -> ApiRequest:
        return build_form(self.url.recheck(), ("hashes", join_hashes(hashes)))

    def reannounce(self, hashes: Iterable[str]) -> ApiRequest:
        return build_form(self.url.reannounce(), ("hashes", join_hashes(hashes)))

    def edit_tracker(self, hash: str, tracker_url: str, new_tracker_url: str) -> ApiRequest:
        return build_form(
            self.url.edit_tracker(),
            ("hash", hash),
            ("origUrl", tracker_url),
            ("newUrl", new_tracker_url),
        )

    # Shares the edit-tracker endpoint; only the fields differ
    def delete_trackers(self, hash: str, tracker_urls: Iterable[str]) -> ApiRequest:
        return build_form(
            self.url.edit_tracker(),
            ("hash", hash),
            ("urls", "|".join(tracker_urls)),
        )

    def categories(self) -> ApiRequest:
        return build_query(self.url.categories())

    def add_category(self, name: str, save_path: Optional[str] = None) -> ApiRequest:
        return build_form(self.url.add_category(), ("category", name), ("savePath", save_path))

    def edit_category(self, name: str, save_path: Optional[str]) -> ApiRequest:
        return build_form(self.url.edit_category(), ("category", name), ("savePath", save_path))

    def add_rss_folder(self, path: str) -> ApiRequest:
        return build_form(self.url.add_rss_folder(), ("path", path))

    def add_rss_feed(self, url: str, path: Optional[str] = None) -> ApiRequest:
        return build_form(self.url.add_rss_feed(), ("url", url), ("path", path))

    def delete_rss_item(self, path: str) -> ApiRequest:
        return build_form(self.url.delete_rss_item(), ("path", path))

    def move_rss_item(self, path: str, destination_path: str) -> ApiRequest:
        return build_form(
            self.url.move_rss_item(),
            ("itemPath", path),
            ("destPath", destination_path),
        )

    def rss_items(self, with_data: Optional[bool] = None) -> ApiRequest:
        return build_query(self.url.rss_items(), ("withData", with_data))

    def set_rss_auto_downloading_rule(self, name: str, rule_definition: str) -> ApiRequest:
        return build_form(
            self.url.set_rss_auto_downloading_rule(),
            ("ruleName", name),
            ("ruleDef", rule_definition),
        )

    def rename_rss_auto_downloading_rule(self, name: str, new_name: str) -> ApiRequest:
        return build_form(
            self.url.rename_rss_auto_downloading_rule(),
            ("ruleName", name),
            ("newRuleName", new_name),
        )

    def delete_rss_auto_downloading_rule(self, name: str) -> ApiRequest:
        return build_form(self.url.delete_rss_auto_downloading_rule(), ("ruleName", name))

    def rss_auto_downloading_rules(self) -> ApiRequest:
        return build_query(self.url.rss_auto_downloading_rules())


PROVIDERS = {
    ApiLevel.LEGACY: LegacyRequestProvider,
    ApiLevel.V2: Api2RequestProvider,
}


def create_request_provider(api_level: ApiLevel, base_url: str) -> BaseRequestProvider:
    """Create the request provider serving the given API generation."""
    return PROVIDERS[ApiLevel(api_level)](base_url)
