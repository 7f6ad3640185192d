from pathlib import Path

import pytest

from conftest import H1, H2, H3, H_BG
from osu_play.config import Config
from osu_play.database import connect, resolve_database_path
from osu_play.library import BeatmapSet, Library, hashed_file_path, resolve_hash


def test_hashed_file_path() -> None:
    h = "4a3d1f" + "0" * 58
    assert hashed_file_path(Path("/data/osu"), h) == Path("/data/osu/files/4/4a") / h


def test_resolve_hash() -> None:
    bs = BeatmapSet(id=1, online_id=None, files={"audio.mp3": "h1", "Audio.MP3": "h2", "bg.jpg": "h3"})
    assert resolve_hash("audio.mp3", bs) == "h1"
    # Exact case wins over a case-insensitive match.
    assert resolve_hash("Audio.MP3", bs) == "h2"
    assert resolve_hash("BG.JPG", bs) == "h3"
    assert resolve_hash("missing.ogg", bs) is None
    assert resolve_hash("", bs) is None
    assert resolve_hash(None, bs) is None


@pytest.mark.usefixtures("seeded_database")
def test_list_beatmap_sets(config: Config) -> None:
    resolve_database_path(config)
    with connect(config) as conn:
        sets = list(Library(conn, config.osu_data_dir).list_beatmap_sets())

    assert [s.id for s in sets] == [1, 2, 3, 4]
    assert [s.online_id for s in sets] == [1001, 1002, None, 1004]
    assert sets[0].files == {"song.mp3": H1}
    assert sets[1].files == {"audio.mp3": H1, "b.mp3": H2, "bg.jpg": H_BG}
    assert sets[2].files == {}

    assert [b.id for b in sets[1].beatmaps] == [2, 3]
    assert [b.difficulty_name for b in sets[1].beatmaps] == ["Hard", "Insane"]
    assert sets[1].beatmaps[1].metadata.title == "Song B"
    assert sets[1].beatmaps[1].metadata.audio_file == "B.mp3"

    # Beatmaps without metadata of their own inherit the set's.
    assert sets[2].beatmaps[0].metadata.title == "No Audio"
    assert sets[2].beatmaps[0].metadata.audio_file is None
    assert sets[3].beatmaps[0].metadata.title == "Song C"
    assert sets[3].beatmaps[0].metadata.audio_file == "c.ogg"


@pytest.mark.usefixtures("seeded_database")
def test_library_resolves_paths(config: Config) -> None:
    resolve_database_path(config)
    with connect(config) as conn:
        library = Library(conn, config.osu_data_dir)
        sets = list(library.list_beatmap_sets())
        h = library.resolve_hash("c.ogg", sets[3])
        assert h == H3
        assert library.path_for(h) == config.osu_data_dir / "files" / "e" / "ef" / H3
        assert library.path_for(h).is_file()
