"""
The playlists module exports the unique tracks as a plain text playlist: one path per line, which
most players (mpv, vlc) accept as-is.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from osu_play.common import OsuPlayExpectedError
from osu_play.tracks import UniqueTrack

logger = logging.getLogger(__name__)


class PlaylistWriteError(OsuPlayExpectedError):
    pass


def dump_playlist(tracks: Iterable[UniqueTrack]) -> str:
    # Tracks without a path have nothing to play, so they do not get a line.
    return "\n".join(str(t.path) for t in tracks if t.path is not None)


def export_playlist(tracks: Iterable[UniqueTrack], dest: Path) -> None:
    """Write the playlist to dest, overwriting any existing file."""
    playlist = dump_playlist(tracks)
    try:
        with dest.open("w", encoding="utf-8") as fp:
            fp.write(playlist)
    except OSError as e:
        raise PlaylistWriteError(f"Failed to write playlist to {dest}: {e}") from e
    logger.info(f"Exported playlist to {dest}")
