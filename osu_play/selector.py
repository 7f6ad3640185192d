"""
The selector module asks the user which track to start from.

The user types a search query, we list the titles that fuzzy-match it, and they pick one by number.
Matching is forgiving of typos: a query matches a title when it is close to some part of it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import click
from rapidfuzz import fuzz, process, utils

logger = logging.getLogger(__name__)

# Listing thousands of titles helps nobody; ask for a narrower query instead.
MAX_LISTED_MATCHES = 50
# Minimum similarity (0-100) of the query to the best-matching part of a title.
MATCH_CUTOFF = 60


def fuzzy_filter(query: str, titles: Sequence[str]) -> list[int]:
    """
    Return the indices of the titles matching the query, best match first. Ties keep the original
    order. An empty query matches every title.
    """
    if not query.strip():
        return list(range(len(titles)))
    # partial_ratio scores the query against the best-aligned substring of each title, so a short
    # query is not penalized for the rest of a long title.
    results = process.extract(
        query,
        titles,
        scorer=fuzz.partial_ratio,
        processor=utils.default_process,
        score_cutoff=MATCH_CUTOFF,
        limit=None,
    )
    results.sort(key=lambda r: (-r[1], r[2]))
    return [idx for _, _, idx in results]


def select_track(titles: Sequence[str]) -> int | None:
    """
    Prompt the user for a track. Returns the index of the chosen title, or None if the user aborted
    the prompt (Ctrl-C / Ctrl-D).
    """
    if not titles:
        return None
    try:
        while True:
            query = click.prompt(
                "Which map do you want to play (search, empty for all)",
                default="",
                show_default=False,
            )
            matches = fuzzy_filter(query, titles)
            if not matches:
                click.secho(f"No maps match {query!r}", fg="yellow")
                continue
            listed = matches[:MAX_LISTED_MATCHES]
            for num, idx in enumerate(listed, start=1):
                click.echo(f"{num:>3}. {titles[idx]}")
            if len(matches) > len(listed):
                click.secho(
                    f"... and {len(matches) - len(listed)} more, refine your search to see them",
                    dim=True,
                )
            choice = click.prompt(
                "Select a map (0 to search again)",
                type=click.IntRange(0, len(listed)),
                default=1,
            )
            if choice == 0:
                continue
            return listed[choice - 1]
    except click.Abort:
        logger.debug("Selection aborted by user")
        return None
