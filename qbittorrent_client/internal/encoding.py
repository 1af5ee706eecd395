"""Request value type and the encoders shared by every request provider."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

import httpx


TORRENT_CONTENT_TYPE = "application/x-bittorrent"

FieldValue = Union[str, bool, int, float, Enum, None]
FilePart = Tuple[str, Tuple[str, bytes, str]]


@dataclass(frozen=True)
class ApiRequest:
    """A request ready to be handed to the HTTP transport."""

    method: str
    url: str
    params: Dict[str, str] = field(default_factory=dict)
    data: Dict[str, str] = field(default_factory=dict)
    files: List[FilePart] = field(default_factory=list)

    def build(self, client: httpx.AsyncClient) -> httpx.Request:
        """Build the httpx request. Multipart is used only when files are attached."""
        return client.build_request(
            self.method,
            self.url,
            params=self.params or None,
            data=self.data or None,
            files=self.files or None,
        )


def to_lower_string(value: bool) -> str:
    """Encode a boolean the way qBittorrent expects it."""
    return "true" if value else "false"


def encode_value(value: FieldValue) -> str:
    """Encode a single form field or query parameter value."""
    if isinstance(value, bool):
        return to_lower_string(value)
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def join_hashes(hashes: Iterable[str]) -> str:
    """Join torrent hashes into the pipe-separated list used by the API."""
    if hashes is None:
        raise ValueError("hashes must not be None")
    return "|".join(hashes)


def encode_fields(*fields: Tuple[str, FieldValue]) -> Dict[str, str]:
    """Encode (name, value) pairs, dropping the ones without a value."""
    return {name: encode_value(value) for name, value in fields if value is not None}


def torrent_file_parts(torrent_files: Iterable[bytes]) -> List[FilePart]:
    """One `torrents` multipart field per .torrent file buffer."""
    return [
        ("torrents", (f"{index}.torrent", content, TORRENT_CONTENT_TYPE))
        for index, content in enumerate(torrent_files)
    ]


def build_form(url: str, *fields: Tuple[str, FieldValue]) -> ApiRequest:
    """POST request with a form body."""
    return ApiRequest("POST", url, data=encode_fields(*fields))


def build_query(url: str, *params: Tuple[str, FieldValue]) -> ApiRequest:
    """GET request with query string parameters."""
    return ApiRequest("GET", url, params=encode_fields(*params))


def optional_newline_join(values: Optional[Iterable[str]]) -> Optional[str]:
    """Join values with newlines, or None when there are none."""
    values = list(values or [])
    return "\n".join(values) if values else None
