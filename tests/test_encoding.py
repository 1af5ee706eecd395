"""Tests for the shared request encoders."""

import pytest

from qbittorrent_client.internal.encoding import (
    TORRENT_CONTENT_TYPE,
    ApiRequest,
    build_form,
    build_query,
    encode_fields,
    encode_value,
    join_hashes,
    optional_newline_join,
    to_lower_string,
    torrent_file_parts,
)
from qbittorrent_client.models import TorrentListFilter


def test_to_lower_string():
    """Booleans are always lowercase words."""
    assert to_lower_string(True) == "true"
    assert to_lower_string(False) == "false"


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, "true"),
        (False, "false"),
        (0, "0"),
        (1024, "1024"),
        ("", ""),
        ("/downloads", "/downloads"),
        (TorrentListFilter.STALLED_UPLOADING, "stalled_uploading"),
    ],
)
def test_encode_value(value, expected):
    """Every field value goes through the same conversion."""
    assert encode_value(value) == expected


def test_encode_fields_drops_only_none():
    """Unset values are omitted, empty strings and zero are kept."""
    fields = encode_fields(
        ("savepath", None),
        ("rename", ""),
        ("upLimit", 0),
        ("paused", False),
    )

    assert fields == {"rename": "", "upLimit": "0", "paused": "false"}


def test_join_hashes_keeps_order():
    """Hashes are pipe-joined in input order."""
    assert join_hashes(["c3", "a1", "b2"]) == "c3|a1|b2"
    assert join_hashes(iter(["a1"])) == "a1"


def test_join_hashes_rejects_none():
    """A missing hash list is an argument error."""
    with pytest.raises(ValueError):
        join_hashes(None)


def test_torrent_file_parts():
    """Each file buffer becomes its own torrents part."""
    parts = torrent_file_parts([b"first", b"second"])

    assert len(parts) == 2
    assert [name for name, _ in parts] == ["torrents", "torrents"]
    assert [part[2] for _, part in parts] == [TORRENT_CONTENT_TYPE] * 2
    assert [part[1] for _, part in parts] == [b"first", b"second"]


def test_optional_newline_join():
    """URLs are newline-joined, nothing to join gives None."""
    assert optional_newline_join(["a", "b"]) == "a\nb"
    assert optional_newline_join([]) is None
    assert optional_newline_join(None) is None


def test_build_form_and_query():
    """Forms are POST bodies, queries are GET parameters."""
    form = build_form("http://host/command/pause", ("hash", "a1"), ("extra", None))
    query = build_query("http://host/query/torrents", ("reverse", True))

    assert form == ApiRequest("POST", "http://host/command/pause", data={"hash": "a1"})
    assert query == ApiRequest("GET", "http://host/query/torrents", params={"reverse": "true"})
