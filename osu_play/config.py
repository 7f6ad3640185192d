"""
The config module provides the config schema and parsing logic.

Configuration comes from two places: an optional TOML file in the config directory and the
command line flags. Flags win. We provide detailed errors when an invalid value is found, and emit
warnings when unrecognized keys are found.
"""

from __future__ import annotations

import functools
import logging
import tomllib
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import appdirs

from osu_play.common import OsuPlayExpectedError

# osu!lazer keeps its data in the roaming app data directory on Windows, and in the usual XDG data
# directory elsewhere.
XDG_DATA_OSU = Path(appdirs.user_data_dir("osu", appauthor=False, roaming=True))
XDG_CONFIG_OSU_PLAY = Path(appdirs.user_config_dir("osu-play", appauthor=False))

DEFAULT_PLAYER = "exo-open"
DEFAULT_TRACK_DELAY_MS = 1000

logger = logging.getLogger(__name__)


class ConfigDecodeError(OsuPlayExpectedError):
    pass


class InvalidConfigValueError(OsuPlayExpectedError, ValueError):
    pass


@dataclass(frozen=True)
class Config:
    # The osu!lazer data directory. Holds the client database and the hash-sharded `files/` store.
    osu_data_dir: Path
    # Our own directory: config file, and the snapshot copy of the client database.
    config_dir: Path
    # The external program that opens a track. Invoked with the track path as its sole argument.
    player: str
    # Delay between two consecutive tracks.
    track_delay_ms: int

    @classmethod
    def parse(
        cls,
        *,
        osu_data_dir_override: Path | None = None,
        config_dir_override: Path | None = None,
        player_override: str | None = None,
    ) -> Config:
        config_dir = (config_dir_override or XDG_CONFIG_OSU_PLAY).expanduser()
        config_dir.mkdir(parents=True, exist_ok=True)

        # As we parse, delete consumed values from the data dictionary. If any are left over at the
        # end of the config, warn that unknown config keys were found.
        cfgpath = config_dir / "config.toml"
        data: dict[str, Any] = {}
        try:
            with cfgpath.open("r") as fp:
                data = tomllib.loads(fp.read())
        except FileNotFoundError:
            logger.debug(f"No configuration file found at {cfgpath}, using defaults")
        except tomllib.TOMLDecodeError as e:
            raise ConfigDecodeError(
                f"Failed to decode configuration file: invalid TOML: {e}"
            ) from e

        try:
            osu_data_dir = Path(data["osu_data_dir"]).expanduser()
            del data["osu_data_dir"]
        except KeyError:
            osu_data_dir = XDG_DATA_OSU
        except (TypeError, ValueError) as e:
            raise InvalidConfigValueError(
                f"Invalid value for osu_data_dir in configuration file ({cfgpath}): must be a path"
            ) from e
        if osu_data_dir_override is not None:
            osu_data_dir = osu_data_dir_override.expanduser()

        try:
            player = data["player"]
            del data["player"]
            if not isinstance(player, str) or not player:
                raise ValueError(f"Must be a non-empty string: got {player!r}")
        except KeyError:
            player = DEFAULT_PLAYER
        except ValueError as e:
            raise InvalidConfigValueError(
                f"Invalid value for player in configuration file ({cfgpath}): {e}"
            ) from e
        if player_override:
            player = player_override

        try:
            track_delay_ms = data["track_delay_ms"]
            del data["track_delay_ms"]
            # bool is a subclass of int, and `true` is not a delay.
            if not isinstance(track_delay_ms, int) or isinstance(track_delay_ms, bool):
                raise ValueError(f"Must be an integer: got {type(track_delay_ms)}")
            if track_delay_ms < 0:
                raise ValueError(f"Must be a non-negative integer: got {track_delay_ms}")
        except KeyError:
            track_delay_ms = DEFAULT_TRACK_DELAY_MS
        except ValueError as e:
            raise InvalidConfigValueError(
                f"Invalid value for track_delay_ms in configuration file ({cfgpath}): {e}"
            ) from e

        if data:
            unrecognized_accessors: list[str] = []
            # Do a DFS over the data keys to assemble the list of unknown keys. State is a tuple of
            # ("accessor", node).
            dfs_state: deque[tuple[str, Any]] = deque([("", data)])
            while dfs_state:
                accessor, node = dfs_state.pop()
                if isinstance(node, dict):
                    for k, v in node.items():
                        child_accessor = k if not accessor else f"{accessor}.{k}"
                        dfs_state.append((child_accessor, v))
                    continue
                unrecognized_accessors.append(accessor)
            logger.warning(
                f"Unrecognized options found in configuration file: {', '.join(sorted(unrecognized_accessors))}"
            )

        return Config(
            osu_data_dir=osu_data_dir,
            config_dir=config_dir,
            player=player,
            track_delay_ms=track_delay_ms,
        )

    @functools.cached_property
    def source_database_path(self) -> Path:
        return self.osu_data_dir / "client.db"

    @functools.cached_property
    def database_snapshot_path(self) -> Path:
        return self.config_dir / "client.db"
