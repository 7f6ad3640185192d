import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from osu_play.config import Config
from osu_play.library import hashed_file_path

logger = logging.getLogger(__name__)

TESTDATA = Path(__file__).resolve().parent / "testdata"
LAZER_SCHEMA_PATH = TESTDATA / "lazer_client.sql"

# Content hashes of the audio files in the seeded database. H2 is indexed by the database but has no
# file on disk.
H1 = "ab" + "1" * 62
H2 = "cd" + "2" * 62
H3 = "ef" + "3" * 62
H_BG = "0f" + "4" * 62

TITLE_1 = "Song A : Artist A - ソングA : アーティストA"
TITLE_2 = "Song B : Artist B - ソングB : アーティストB"
TITLE_3 = "Song C : Artist C - Song C : Artist C"


@pytest.fixture(autouse=True)
def debug_logging() -> None:
    logging.getLogger().setLevel(logging.DEBUG)


@pytest.fixture()
def isolated_dir() -> Iterator[Path]:
    with CliRunner().isolated_filesystem():
        yield Path.cwd()


@pytest.fixture()
def config(isolated_dir: Path) -> Config:
    osu_data_dir = isolated_dir / "osu"
    osu_data_dir.mkdir()
    config_dir = isolated_dir / "osu-play"
    config_dir.mkdir()
    return Config(
        osu_data_dir=osu_data_dir,
        config_dir=config_dir,
        player="exo-open",
        track_delay_ms=0,
    )


def create_lazer_database(path: Path) -> None:
    with sqlite3.connect(path) as conn:
        with LAZER_SCHEMA_PATH.open("r") as fp:
            conn.executescript(fp.read())
        conn.executescript(
            f"""\
INSERT INTO __EFMigrationsHistory
       (MigrationId                                  , ProductVersion)
VALUES ('20210824185035_AddCountdownSettings'         , '5.0.9')
     , ('20210912144011_AddSamplesMatchPlaybackRate'  , '5.0.9');

INSERT INTO BeatmapMetadata
       (ID, Title             , TitleUnicode, Artist    , ArtistUnicode  , AudioFile  , AuthorString)
VALUES (1 , 'Song A'          , 'ソングA'    , 'Artist A', 'アーティストA' , 'song.mp3' , 'mapper1')
     , (2 , 'Song A (TV Size)', 'ソングA'    , 'Artist A', 'アーティストA' , 'audio.mp3', 'mapper2')
     , (3 , 'Song B'          , 'ソングB'    , 'Artist B', 'アーティストB' , 'B.mp3'    , 'mapper2')
     , (4 , 'No Audio'        , 'No Audio'  , 'Nobody'  , 'Nobody'       , null       , 'mapper3')
     , (5 , 'Song C'          , 'Song C'    , 'Artist C', 'Artist C'     , 'c.ogg'    , 'mapper4');

INSERT INTO FileInfo
       (ID, Hash    , ReferenceCount)
VALUES (1 , '{H1}'  , 2)
     , (2 , '{H2}'  , 1)
     , (3 , '{H3}'  , 1)
     , (4 , '{H_BG}', 1);

INSERT INTO BeatmapSetInfo
       (ID, OnlineBeatmapSetID, MetadataID)
VALUES (1 , 1001              , 1)
     , (2 , 1002              , 2)
     , (3 , null              , 4)
     , (4 , 1004              , 5);

INSERT INTO BeatmapInfo
       (ID, BeatmapSetInfoID, MetadataID, Version )
VALUES (1 , 1               , 1         , 'Normal')
     , (2 , 2               , 2         , 'Hard'  )
     , (3 , 2               , 3         , 'Insane')
     , (4 , 3               , null      , 'Easy'  )
     , (5 , 4               , null      , 'Expert');

INSERT INTO BeatmapSetFileInfo
       (ID, BeatmapSetInfoID, FileInfoID, Filename )
VALUES (1 , 1               , 1         , 'song.mp3')
     , (2 , 2               , 1         , 'audio.mp3')
     , (3 , 2               , 2         , 'b.mp3'   )
     , (4 , 2               , 4         , 'bg.jpg'  )
     , (5 , 4               , 3         , 'c.ogg'   );
            """
        )
    conn.close()


@pytest.fixture()
def seeded_database(config: Config) -> None:
    """
    Seed a database in the osu! data directory:

    - Set 1 has one beatmap with song.mp3 (H1).
    - Set 2 has a beatmap whose audio.mp3 is also H1, and one whose B.mp3 is H2.
    - Set 3 has a beatmap without an audio file.
    - Set 4 has a beatmap that inherits its metadata, and thus c.ogg (H3), from the set.
    """
    create_lazer_database(config.source_database_path)
    for h in [H1, H3, H_BG]:
        path = hashed_file_path(config.osu_data_dir, h)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
