import sys

import click

from osu_play.cli import cli
from osu_play.common import OsuPlayExpectedError, initialize_logging


def main() -> None:
    initialize_logging()
    try:
        cli()
    except OsuPlayExpectedError as e:
        click.secho(f"{e.__class__.__module__}.{e.__class__.__name__}: ", fg="red", nl=False)
        click.secho(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
