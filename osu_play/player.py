"""
The player module plays tracks one after another through an external program.

The external program is expected to block until the track finishes playing, so waiting on it is
what keeps us to one track at a time. Failures are per-track: a missing file or a player that fails
to launch is logged and skipped, and the playlist carries on.
"""

from __future__ import annotations

import logging
import subprocess
import time
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

from osu_play.tracks import UniqueTrack

logger = logging.getLogger(__name__)


def playback_order(count: int, start: int, *, loop: bool) -> Iterator[int]:
    """
    Yield the indices of tracks in the order they are played: from start to the end of the
    playlist, then, if looping, from the top forever.
    """
    if count <= 0 or not 0 <= start < count:
        return
    i = start
    while True:
        yield i
        if i < count - 1:
            i += 1
        elif loop:
            logger.info("Looping playlist")
            i = 0
        else:
            logger.info("Done. Use --loop to loop the playlist")
            return


def play_file(player: str, path: Path) -> bool:
    """Run the player on the path and wait for it to exit. Returns whether it succeeded."""
    try:
        proc = subprocess.run([player, str(path)])
    except OSError as e:
        logger.error(f"Failed to launch player {player}: {e}")
        return False
    if proc.returncode != 0:
        logger.warning(f"Player {player} exited with code {proc.returncode} for {path}")
        return False
    return True


def play_tracks(
    tracks: Sequence[UniqueTrack],
    start: int,
    *,
    player: str,
    loop: bool = False,
    delay_ms: int = 1000,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    prev: int | None = None
    # Tracks in a row that could not be played.
    failures = 0
    for i in playback_order(len(tracks), start, loop=loop):
        # The delay separates consecutive tracks; a new pass starts straight away.
        if prev is not None and i == prev + 1:
            sleep(delay_ms / 1000)
        prev = i

        track = tracks[i]
        logger.info(f"Map: {track.title}")
        if track.path is None or not track.path.exists():
            logger.info(f"File does not exist: {track.path}")
            played = False
        else:
            logger.info(f"Playing {track.title}")
            played = play_file(player, track.path)

        failures = 0 if played else failures + 1
        if loop and failures >= len(tracks):
            logger.warning("No track in the playlist could be played, stopping")
            return
