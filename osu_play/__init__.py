from osu_play.common import (
    VERSION,
    OsuPlayError,
    OsuPlayExpectedError,
    initialize_logging,
)
from osu_play.config import Config, ConfigDecodeError, InvalidConfigValueError
from osu_play.database import (
    DatabaseNotFoundError,
    DatabaseReadError,
    UnsupportedDatabaseError,
    connect,
    resolve_database_path,
    schema_version,
)
from osu_play.library import (
    Beatmap,
    BeatmapMetadata,
    BeatmapSet,
    Library,
    hashed_file_path,
    resolve_hash,
)
from osu_play.player import play_tracks, playback_order
from osu_play.playlists import PlaylistWriteError, dump_playlist, export_playlist
from osu_play.selector import select_track
from osu_play.tracks import UniqueTrack, enumerate_unique_tracks

__all__ = [
    # Plumbing
    "initialize_logging",
    "VERSION",
    # Errors
    "OsuPlayError",
    "OsuPlayExpectedError",
    "ConfigDecodeError",
    "InvalidConfigValueError",
    "DatabaseNotFoundError",
    "DatabaseReadError",
    "UnsupportedDatabaseError",
    "PlaylistWriteError",
    # Configuration
    "Config",
    # Database
    "connect",
    "resolve_database_path",
    "schema_version",
    # Library
    "Beatmap",
    "BeatmapMetadata",
    "BeatmapSet",
    "Library",
    "hashed_file_path",
    "resolve_hash",
    # Tracks
    "UniqueTrack",
    "enumerate_unique_tracks",
    # Playlists
    "dump_playlist",
    "export_playlist",
    # Playback
    "select_track",
    "playback_order",
    "play_tracks",
]
