"""qBittorrent Web API models."""

from enum import Enum, IntEnum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ApiLevel(str, Enum):
    """Web API generation served by qBittorrent."""

    LEGACY = "legacy"
    V2 = "v2"


class TorrentState(str, Enum):
    """Torrent state as reported by the server."""

    ERROR = "error"
    MISSING_FILES = "missingFiles"
    UPLOADING = "uploading"
    PAUSED_UPLOAD = "pausedUP"
    QUEUED_UPLOAD = "queuedUP"
    STALLED_UPLOAD = "stalledUP"
    CHECKING_UPLOAD = "checkingUP"
    FORCED_UPLOAD = "forcedUP"
    ALLOCATING = "allocating"
    DOWNLOADING = "downloading"
    FETCHING_METADATA = "metaDL"
    PAUSED_DOWNLOAD = "pausedDL"
    QUEUED_DOWNLOAD = "queuedDL"
    STALLED_DOWNLOAD = "stalledDL"
    CHECKING_DOWNLOAD = "checkingDL"
    FORCED_DOWNLOAD = "forcedDL"
    QUEUED_FOR_CHECKING = "queuedForChecking"
    CHECKING_RESUME_DATA = "checkingResumeData"
    MOVING = "moving"
    UNKNOWN = "unknown"


class TorrentListFilter(str, Enum):
    """Status filter for the torrent list."""

    ALL = "all"
    DOWNLOADING = "downloading"
    SEEDING = "seeding"
    COMPLETED = "completed"
    PAUSED = "paused"
    RESUMED = "resumed"
    ACTIVE = "active"
    INACTIVE = "inactive"
    STALLED = "stalled"
    STALLED_UPLOADING = "stalled_uploading"
    STALLED_DOWNLOADING = "stalled_downloading"
    ERRORED = "errored"


class TorrentContentPriority(IntEnum):
    """Download priority of a file inside a torrent."""

    SKIP = 0
    NORMAL = 1
    HIGH = 6
    MAXIMAL = 7


# Responses


class TorrentInfo(BaseModel):
    """Torrent entry from the torrent list."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    hash: str
    name: str
    size: int
    progress: float
    state: TorrentState
    dlspeed: int = 0
    upspeed: int = 0
    priority: int = 0
    num_seeds: int = 0
    num_complete: int = 0
    num_leechs: int = 0
    num_incomplete: int = 0
    ratio: float = 0.0
    eta: int = 0
    seq_dl: bool = False
    f_l_piece_prio: bool = False
    category: Optional[str] = None
    super_seeding: bool = False
    force_start: bool = False
    save_path: Optional[str] = None
    added_on: Optional[int] = None
    completion_on: Optional[int] = None
    magnet_uri: Optional[str] = None
    tracker: Optional[str] = None
    dl_limit: Optional[int] = None
    up_limit: Optional[int] = None
    downloaded: Optional[int] = None
    uploaded: Optional[int] = None
    amount_left: Optional[int] = None
    completed: Optional[int] = None
    last_activity: Optional[int] = None

    @field_validator("state", mode="before")
    @classmethod
    def parse_state(cls, value):
        try:
            return TorrentState(value)
        except ValueError:
            return TorrentState.UNKNOWN


class TorrentProperties(BaseModel):
    """General properties of a single torrent."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    save_path: str
    creation_date: Optional[int] = None
    piece_size: Optional[int] = None
    comment: Optional[str] = None
    total_wasted: Optional[int] = None
    total_uploaded: Optional[int] = None
    total_uploaded_session: Optional[int] = None
    total_downloaded: Optional[int] = None
    total_downloaded_session: Optional[int] = None
    up_limit: Optional[int] = None
    dl_limit: Optional[int] = None
    time_elapsed: Optional[int] = None
    seeding_time: Optional[int] = None
    nb_connections: Optional[int] = None
    nb_connections_limit: Optional[int] = None
    share_ratio: Optional[float] = None
    addition_date: Optional[int] = None
    completion_date: Optional[int] = None
    created_by: Optional[str] = None
    dl_speed_avg: Optional[int] = None
    dl_speed: Optional[int] = None
    up_speed_avg: Optional[int] = None
    up_speed: Optional[int] = None
    eta: Optional[int] = None
    last_seen: Optional[int] = None
    peers: Optional[int] = None
    peers_total: Optional[int] = None
    pieces_have: Optional[int] = None
    pieces_num: Optional[int] = None
    reannounce: Optional[int] = None
    seeds: Optional[int] = None
    seeds_total: Optional[int] = None
    total_size: Optional[int] = None


class TorrentContent(BaseModel):
    """File inside a torrent."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    size: int
    progress: float
    # Intermediate libtorrent levels (2-5) come back as plain ints
    priority: Union[TorrentContentPriority, int] = Field(
        default=TorrentContentPriority.NORMAL, union_mode="left_to_right"
    )
    is_seed: Optional[bool] = None
    piece_range: List[int] = Field(default_factory=list)
    availability: Optional[float] = None


class TorrentTracker(BaseModel):
    """Tracker attached to a torrent."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str
    # Legacy reports text statuses, V2 reports integers
    status: Union[int, str]
    tier: Optional[Union[int, str]] = None
    num_peers: Optional[int] = None
    num_seeds: Optional[int] = None
    num_leeches: Optional[int] = None
    num_downloaded: Optional[int] = None
    msg: Optional[str] = None


class Category(BaseModel):
    """Torrent category."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str
    save_path: Optional[str] = Field(default=None, alias="savePath")


class RssAutoDownloadingRule(BaseModel):
    """RSS auto-downloading rule definition."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    enabled: bool = True
    must_contain: Optional[str] = Field(default=None, alias="mustContain")
    must_not_contain: Optional[str] = Field(default=None, alias="mustNotContain")
    use_regex: Optional[bool] = Field(default=None, alias="useRegex")
    episode_filter: Optional[str] = Field(default=None, alias="episodeFilter")
    smart_filter: Optional[bool] = Field(default=None, alias="smartFilter")
    previously_matched_episodes: List[str] = Field(
        default_factory=list, alias="previouslyMatchedEpisodes"
    )
    affected_feeds: List[str] = Field(default_factory=list, alias="affectedFeeds")
    ignore_days: Optional[int] = Field(default=None, alias="ignoreDays")
    last_match: Optional[str] = Field(default=None, alias="lastMatch")
    add_paused: Optional[bool] = Field(default=None, alias="addPaused")
    assigned_category: Optional[str] = Field(default=None, alias="assignedCategory")
    save_path: Optional[str] = Field(default=None, alias="savePath")

    def to_definition(self) -> str:
        """Serialize to the JSON expected by the setRule endpoint."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


# Requests


class TorrentListQuery(BaseModel):
    """Filter and paging options for the torrent list."""

    filter: Optional[TorrentListFilter] = None
    category: Optional[str] = None
    sort_by: Optional[str] = None
    reverse_sort: Optional[bool] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    hashes: Optional[List[str]] = None


class AddTorrentRequest(BaseModel):
    """Options shared by every way of adding torrents.

    Options left as None are not sent, so the server applies its defaults.
    """

    download_folder: Optional[str] = None
    cookie: Optional[str] = None
    category: Optional[str] = None
    skip_hash_checking: Optional[bool] = None
    paused: Optional[bool] = None
    create_root_folder: Optional[bool] = None
    rename: Optional[str] = None
    upload_limit: Optional[int] = None
    download_limit: Optional[int] = None
    sequential_download: Optional[bool] = None
    first_last_piece_prioritized: Optional[bool] = None


class AddTorrentFilesRequest(AddTorrentRequest):
    """Add torrents from .torrent file contents."""

    torrent_files: List[bytes] = Field(default_factory=list)


class AddTorrentUrlsRequest(AddTorrentRequest):
    """Add torrents from magnet links or HTTP URLs."""

    torrent_urls: List[str] = Field(default_factory=list)


class AddTorrentsRequest(AddTorrentFilesRequest, AddTorrentUrlsRequest):
    """Add torrents from files and URLs in one request."""
