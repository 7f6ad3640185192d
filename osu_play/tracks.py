"""
The tracks module turns the beatmap sets of a library into the list of unique songs we can play.

Many beatmaps share one song: every difficulty of a set, and often several sets mapped to the same
audio. We deduplicate by the audio file's content hash, so the first beatmap to reference a song
decides how it is displayed, and the order of first appearance is the playback order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from osu_play.library import BeatmapMetadata, BeatmapSet

logger = logging.getLogger(__name__)


class BeatmapSource(Protocol):
    def list_beatmap_sets(self) -> Iterable[BeatmapSet]: ...

    def resolve_hash(self, file_name: str | None, beatmap_set: BeatmapSet) -> str | None: ...

    def path_for(self, hash: str) -> Path: ...


@dataclass
class UniqueTrack:
    title: str
    path: Path | None


def format_title(meta: BeatmapMetadata) -> str:
    return f"{meta.title} : {meta.artist} - {meta.title_unicode} : {meta.artist_unicode}"


def iter_unique_tracks(source: BeatmapSource) -> Iterator[UniqueTrack]:
    seen_hashes: set[str] = set()
    num_sets = 0
    for beatmap_set in source.list_beatmap_sets():
        num_sets += 1
        for beatmap in beatmap_set.beatmaps:
            hash = source.resolve_hash(beatmap.metadata.audio_file, beatmap_set)
            if not hash or hash in seen_hashes:
                continue
            seen_hashes.add(hash)
            yield UniqueTrack(title=format_title(beatmap.metadata), path=source.path_for(hash))
    logger.info(f"Scanned {num_sets} beatmap sets")


def enumerate_unique_tracks(source: BeatmapSource) -> list[UniqueTrack]:
    tracks = list(iter_unique_tracks(source))
    logger.info(f"Found {len(tracks)} unique tracks")
    return tracks
