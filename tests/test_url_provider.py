"""Tests for the endpoint tables."""

import pytest

from qbittorrent_client.exceptions import ApiNotSupportedError
from qbittorrent_client.internal.url_provider import Api2UrlProvider, LegacyUrlProvider
from qbittorrent_client.models import ApiLevel


BASE_URL = "http://localhost:8080"


@pytest.mark.parametrize(
    "operation, args, path",
    [
        ("login", (), "/login"),
        ("logout", (), "/logout"),
        ("api_version", (), "/version/api"),
        ("qbittorrent_version", (), "/version/qbittorrent"),
        ("torrent_list", (), "/query/torrents"),
        ("torrent_properties", ("abc",), "/query/propertiesGeneral/abc"),
        ("torrent_contents", ("abc",), "/query/propertiesFiles/abc"),
        ("torrent_trackers", ("abc",), "/query/propertiesTrackers/abc"),
        ("add_torrent_files", (), "/command/upload"),
        ("add_torrent_urls", (), "/command/download"),
        ("pause", (), "/command/pause"),
        ("pause_all", (), "/command/pauseAll"),
        ("resume", (), "/command/resume"),
        ("resume_all", (), "/command/resumeAll"),
        ("delete_torrents", (False,), "/command/delete"),
        ("delete_torrents", (True,), "/command/deletePerm"),
        ("recheck", (), "/command/recheck"),
        ("add_trackers", (), "/command/addTrackers"),
        ("set_location", (), "/command/setLocation"),
        ("rename", (), "/command/rename"),
        ("add_category", (), "/command/addCategory"),
        ("delete_categories", (), "/command/removeCategories"),
        ("set_category", (), "/command/setCategory"),
    ],
)
def test_legacy_paths(operation, args, path):
    """Legacy operations map to /command and /query paths."""
    provider = LegacyUrlProvider(BASE_URL)
    assert getattr(provider, operation)(*args) == BASE_URL + path


@pytest.mark.parametrize(
    "operation, args, path",
    [
        ("login", (), "/api/v2/auth/login"),
        ("logout", (), "/api/v2/auth/logout"),
        ("api_version", (), "/api/v2/app/webapiVersion"),
        ("qbittorrent_version", (), "/api/v2/app/version"),
        ("torrent_list", (), "/api/v2/torrents/info"),
        ("torrent_properties", ("abc",), "/api/v2/torrents/properties"),
        ("torrent_contents", ("abc",), "/api/v2/torrents/files"),
        ("torrent_trackers", ("abc",), "/api/v2/torrents/trackers"),
        ("add_torrent_files", (), "/api/v2/torrents/add"),
        ("add_torrent_urls", (), "/api/v2/torrents/add"),
        ("pause", (), "/api/v2/torrents/pause"),
        ("pause_all", (), "/api/v2/torrents/pause"),
        ("resume", (), "/api/v2/torrents/resume"),
        ("resume_all", (), "/api/v2/torrents/resume"),
        ("delete_torrents", (False,), "/api/v2/torrents/delete"),
        ("delete_torrents", (True,), "/api/v2/torrents/delete"),
        ("recheck", (), "/api/v2/torrents/recheck"),
        ("reannounce", (), "/api/v2/torrents/reannounce"),
        ("add_trackers", (), "/api/v2/torrents/addTrackers"),
        ("edit_tracker", (), "/api/v2/torrents/editTracker"),
        ("set_location", (), "/api/v2/torrents/setLocation"),
        ("rename", (), "/api/v2/torrents/rename"),
        ("categories", (), "/api/v2/torrents/categories"),
        ("add_category", (), "/api/v2/torrents/createCategory"),
        ("edit_category", (), "/api/v2/torrents/editCategory"),
        ("delete_categories", (), "/api/v2/torrents/removeCategories"),
        ("set_category", (), "/api/v2/torrents/setCategory"),
        ("add_rss_folder", (), "/api/v2/rss/addFolder"),
        ("add_rss_feed", (), "/api/v2/rss/addFeed"),
        ("delete_rss_item", (), "/api/v2/rss/removeItem"),
        ("move_rss_item", (), "/api/v2/rss/moveItem"),
        ("rss_items", (), "/api/v2/rss/items"),
        ("set_rss_auto_downloading_rule", (), "/api/v2/rss/setRule"),
        ("rename_rss_auto_downloading_rule", (), "/api/v2/rss/renameRule"),
        ("delete_rss_auto_downloading_rule", (), "/api/v2/rss/removeRule"),
        ("rss_auto_downloading_rules", (), "/api/v2/rss/rules"),
    ],
)
def test_v2_paths(operation, args, path):
    """V2 operations map to /api/v2/<group>/<action> paths."""
    provider = Api2UrlProvider(BASE_URL)
    assert getattr(provider, operation)(*args) == BASE_URL + path


@pytest.mark.parametrize(
    "operation",
    ["reannounce", "edit_tracker", "categories", "edit_category", "add_rss_feed", "rss_auto_downloading_rules"],
)
def test_legacy_missing_operations(operation):
    """Operations the legacy API lacks raise ApiNotSupportedError."""
    provider = LegacyUrlProvider(BASE_URL)

    with pytest.raises(ApiNotSupportedError) as exc_info:
        getattr(provider, operation)()

    assert exc_info.value.api_level == ApiLevel.LEGACY
    assert exc_info.value.operation == operation


def test_base_url_prefix_is_kept():
    """A Web UI behind a reverse proxy prefix keeps the prefix."""
    assert Api2UrlProvider("https://example.org/qbt/").login() == "https://example.org/qbt/api/v2/auth/login"
    assert LegacyUrlProvider("https://example.org/qbt").login() == "https://example.org/qbt/login"


def test_legacy_hash_is_escaped_in_path():
    """Hashes placed in a path segment are escaped."""
    provider = LegacyUrlProvider(BASE_URL)
    assert provider.torrent_properties("a/b") == BASE_URL + "/query/propertiesGeneral/a%2Fb"
