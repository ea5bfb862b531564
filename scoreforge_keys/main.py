"""
Main entry point for ScoreForge Keys.
"""

import logging
import sys

import click
from music21.exceptions21 import Music21Exception

from scoreforge_keys import __version__
from scoreforge_keys.config import Config, get_config
from scoreforge_keys.core.exceptions import KeySigError

logger = logging.getLogger(__name__)


def setup_logging(config: Config) -> None:
    """Configure logging from the config's log level."""
    level = getattr(logging, config.logging.level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _describe(event) -> str:
    from scoreforge_keys.core.operations import key_name

    if event.invalid:
        return "no key"
    if event.custom:
        return f"custom {event.custom_type}"
    return f"{event.accidental_type} ({key_name(event.accidental_type)})"


def _fail(exc: Exception) -> None:
    logger.error(str(exc))
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="scoreforge-keys")
def main() -> None:
    """ScoreForge Keys - key signature timeline tools."""
    setup_logging(get_config())


@main.command()
@click.argument("file", type=click.Path(dir_okay=False))
@click.argument("tick", type=int)
def at(file: str, tick: int) -> None:
    """
    Print the key in effect at TICK in a key list FILE.

    \b
    Examples:
      scoreforge-keys at keys.xml 1920
    """
    from pathlib import Path

    from scoreforge_keys.core.operations import read_key_list
    from scoreforge_keys.core.timeline import Timeline

    config = get_config()
    try:
        key_list = read_key_list(Path(file), Timeline.from_config(config), config.io.key_list_tag)
    except (OSError, KeySigError) as exc:
        _fail(exc)
    click.echo(_describe(key_list.key(tick)))


@main.command()
@click.argument("key", type=click.IntRange(-7, 7))
@click.argument("interval")
def transpose(key: int, interval: str) -> None:
    """
    Transpose KEY (sharps positive, flats negative) by INTERVAL.

    \b
    Examples:
      scoreforge-keys transpose 0 P5
      scoreforge-keys transpose -- -3 -M2
    """
    from scoreforge_keys.core.operations import key_name
    from scoreforge_keys.core.transpose import transpose_key

    try:
        new_key = transpose_key(key, interval)
    except (ValueError, Music21Exception) as exc:
        _fail(exc)
    click.echo(f"{new_key} ({key_name(new_key)})")


@main.command()
@click.argument("key", type=int)
def accidentals(key: int) -> None:
    """Print the staff lines altered by KEY."""
    from scoreforge_keys.core.accidental_state import AccidentalState
    from scoreforge_keys.core.key_event import KeySigEvent

    state = AccidentalState(KeySigEvent(key))
    click.echo(f"sharps: {' '.join(map(str, state.sharps()))}")
    click.echo(f"flats: {' '.join(map(str, state.flats()))}")


@main.command()
@click.argument("subtype")
def legacy(subtype: str) -> None:
    """Decode a legacy packed key SUBTYPE (decimal or 0x hex)."""
    from scoreforge_keys.core.key_event import KeySigEvent

    try:
        value = int(subtype, 0)
    except ValueError as exc:
        _fail(exc)
    click.echo(repr(KeySigEvent.from_subtype(value)))


if __name__ == "__main__":
    main()
