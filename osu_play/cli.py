"""
The cli module defines osu!play's CLI interface. It does not have any domain logic of its own. It is
dedicated to parsing, resolving arguments, and delegating to the appropriate module.
"""

import logging
from pathlib import Path

import click

from osu_play.common import VERSION
from osu_play.config import Config
from osu_play.database import connect, resolve_database_path, schema_version
from osu_play.library import Library
from osu_play.player import play_tracks
from osu_play.playlists import export_playlist
from osu_play.selector import select_track
from osu_play.tracks import enumerate_unique_tracks

logger = logging.getLogger(__name__)


# fmt: off
@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--reload", "-r", is_flag=True, help="Reload lazer database.")
@click.option("--exportPlaylist", "export_playlist_path", type=click.Path(dir_okay=False, path_type=Path), help="Export playlist to a file.")
@click.option("--osuDataDir", "-d", "osu_data_dir", type=click.Path(file_okay=False, path_type=Path), help="Osu!lazer data directory.")
@click.option("--configDir", "-c", "config_dir", type=click.Path(file_okay=False, path_type=Path), help="Config directory.")
@click.option("--loop", "-l", is_flag=True, help="Loop the playlist on end.")
@click.option("--player", "-p", type=str, help="Program that plays a track (default: exo-open).")
@click.option("--verbose", "-v", is_flag=True, help="Emit verbose logging.")
@click.version_option(VERSION)
# fmt: on
def cli(
    reload: bool,
    export_playlist_path: Path | None,
    osu_data_dir: Path | None,
    config_dir: Path | None,
    loop: bool,
    player: str | None,
    verbose: bool,
) -> None:
    """Play music from your osu!lazer beatmaps from the terminal."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    logger.info("osu!play")

    c = Config.parse(
        osu_data_dir_override=osu_data_dir,
        config_dir_override=config_dir,
        player_override=player,
    )
    if reload:
        logger.info("Reloading lazer database")
    if osu_data_dir is not None:
        logger.info(f"Using osu!lazer data directory: {c.osu_data_dir}")

    resolve_database_path(c, reload=reload)
    with connect(c) as conn:
        logger.info(f"Database schema version: {schema_version(conn)}")
        tracks = enumerate_unique_tracks(Library(conn, c.osu_data_dir))

        if export_playlist_path is not None:
            logger.info(f"Exporting playlist to {export_playlist_path}")
            export_playlist(tracks, export_playlist_path)
            click.echo(
                f"Done. Use something like `mpv --playlist={export_playlist_path}` to play the playlist"
            )
            return

        if not tracks:
            logger.info("No tracks found in the osu!lazer database")
            return

        selected = select_track([t.title for t in tracks])
        if selected is None:
            logger.info("No map selected, exiting")
            return
        logger.info(f"Selected: {selected}")

        play_tracks(
            tracks,
            selected,
            player=c.player,
            loop=loop,
            delay_ms=c.track_delay_ms,
        )
