"""
The library module reads beatmap sets out of osu!lazer's database and resolves their files to paths
in the hash-sharded file store.

osu!lazer stores every file once under `files/`, keyed by the SHA-256 of its contents. A beatmap set
does not own files on disk; it owns a mapping of logical file names (e.g. `audio.mp3`) to those
hashes. Two sets that ship the same song thus point at the same hash, which is what lets us
deduplicate tracks without reading any audio.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class BeatmapMetadata:
    title: str
    artist: str
    title_unicode: str
    artist_unicode: str
    audio_file: str | None


@dataclass
class Beatmap:
    id: int
    difficulty_name: str
    metadata: BeatmapMetadata


@dataclass
class BeatmapSet:
    id: int
    online_id: int | None
    # A map of logical file name -> content hash.
    files: dict[str, str] = field(default_factory=dict)
    beatmaps: list[Beatmap] = field(default_factory=list)


def hashed_file_path(osu_data_dir: Path, hash: str) -> Path:
    """Map a content hash to its location in the file store. Does not check that the file exists."""
    return osu_data_dir / "files" / hash[0] / hash[:2] / hash


def resolve_hash(file_name: str | None, beatmap_set: BeatmapSet) -> str | None:
    """
    Look up the hash of a file by its name within a beatmap set. Like osu!lazer, we match file names
    case-insensitively, preferring an exact match when one exists.
    """
    if not file_name:
        return None
    with_exact_case = beatmap_set.files.get(file_name)
    if with_exact_case is not None:
        return with_exact_case
    folded = file_name.casefold()
    for name, hash in beatmap_set.files.items():
        if name.casefold() == folded:
            return hash
    return None


class Library:
    """A read-only view over the beatmap sets in an open osu!lazer database."""

    def __init__(self, conn: sqlite3.Connection, osu_data_dir: Path) -> None:
        self.conn = conn
        self.osu_data_dir = osu_data_dir

    def list_beatmap_sets(self) -> Iterator[BeatmapSet]:
        sets: dict[int, BeatmapSet] = {}
        set_metadata: dict[int, BeatmapMetadata] = {}

        cursor = self.conn.execute(
            """
            SELECT
                s.ID AS id
              , s.OnlineBeatmapSetID AS online_id
              , m.Title AS title
              , m.Artist AS artist
              , m.TitleUnicode AS title_unicode
              , m.ArtistUnicode AS artist_unicode
              , m.AudioFile AS audio_file
              , m.ID IS NOT NULL AS has_metadata
            FROM BeatmapSetInfo s
            LEFT JOIN BeatmapMetadata m ON m.ID = s.MetadataID
            ORDER BY s.ID
            """
        )
        for row in cursor:
            sets[row["id"]] = BeatmapSet(id=row["id"], online_id=row["online_id"])
            if row["has_metadata"]:
                set_metadata[row["id"]] = _metadata_from_row(row)

        cursor = self.conn.execute(
            """
            SELECT
                f.BeatmapSetInfoID AS set_id
              , f.Filename AS filename
              , fi.Hash AS hash
            FROM BeatmapSetFileInfo f
            JOIN FileInfo fi ON fi.ID = f.FileInfoID
            ORDER BY f.ID
            """
        )
        for row in cursor:
            beatmap_set = sets.get(row["set_id"])
            if beatmap_set is None:
                continue
            beatmap_set.files[row["filename"]] = row["hash"]

        cursor = self.conn.execute(
            """
            SELECT
                b.ID AS id
              , b.BeatmapSetInfoID AS set_id
              , b.Version AS version
              , m.Title AS title
              , m.Artist AS artist
              , m.TitleUnicode AS title_unicode
              , m.ArtistUnicode AS artist_unicode
              , m.AudioFile AS audio_file
              , m.ID IS NOT NULL AS has_metadata
            FROM BeatmapInfo b
            LEFT JOIN BeatmapMetadata m ON m.ID = b.MetadataID
            ORDER BY b.BeatmapSetInfoID, b.ID
            """
        )
        for row in cursor:
            beatmap_set = sets.get(row["set_id"])
            if beatmap_set is None:
                logger.debug(f"Beatmap {row['id']} belongs to unknown set {row['set_id']}, skipping")
                continue
            # Difficulties that don't carry their own metadata inherit the set's.
            if row["has_metadata"]:
                metadata = _metadata_from_row(row)
            elif beatmap_set.id in set_metadata:
                metadata = set_metadata[beatmap_set.id]
            else:
                logger.debug(f"Beatmap {row['id']} has no metadata, skipping")
                continue
            beatmap_set.beatmaps.append(
                Beatmap(id=row["id"], difficulty_name=row["version"] or "", metadata=metadata)
            )

        yield from sets.values()

    def resolve_hash(self, file_name: str | None, beatmap_set: BeatmapSet) -> str | None:
        return resolve_hash(file_name, beatmap_set)

    def path_for(self, hash: str) -> Path:
        return hashed_file_path(self.osu_data_dir, hash)


def _metadata_from_row(row: sqlite3.Row) -> BeatmapMetadata:
    return BeatmapMetadata(
        title=row["title"] or "",
        artist=row["artist"] or "",
        title_unicode=row["title_unicode"] or "",
        artist_unicode=row["artist_unicode"] or "",
        audio_file=row["audio_file"],
    )
