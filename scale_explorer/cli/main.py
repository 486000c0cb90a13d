"""Main entry point for the Scale Explorer CLI."""

import sys
from typing import List, Optional

import click

from ..core.config import ConfigManager, interval_from_bpm, tempo_mark
from ..core.factory import ComponentFactory
from ..errors import FretRangeError, InvalidNoteError
from ..fretboard import DOUBLE_MARKER_FRET, FRETS, FretCell, build_fretboard, pitch_at
from ..logger import get_logger
from ..logging_config import setup_logging
from ..note_types import Direction, Role
from ..note_utils import note_name
from ..scales import SCALE_ROOTS, major_scale

logger = get_logger(__name__)

CELL_WIDTH = 7

ROLE_FORMATS = {
    Role.ROOT: "[{}]",
    Role.FIFTH: "({})",
    Role.MEMBER: "{}",
    Role.NONMEMBER: "-",
}


def format_cell(cell: FretCell) -> str:
    return ROLE_FORMATS[cell.role].format(cell.label).center(CELL_WIDTH)


def render_fretboard(rows: List[List[FretCell]]) -> str:
    """Draw the neck as text: a fret-number header, one line per string, inlay dots."""
    header = " ".join(str(fret).center(CELL_WIDTH) for fret in range(FRETS + 1)).rstrip()
    lines = [header]
    for row in rows:
        lines.append("|".join(format_cell(cell) for cell in row))
    markers = []
    for cell in rows[-1]:
        dots = "**" if cell.position.fret == DOUBLE_MARKER_FRET else "*"
        markers.append((dots if cell.has_marker else "").center(CELL_WIDTH))
    lines.append(" ".join(markers).rstrip())
    return "\n".join(lines)


def _scale_or_fail(root: str):
    try:
        return major_scale(root)
    except InvalidNoteError as e:
        raise click.BadParameter(str(e), param_hint="ROOT")


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory with playback.json / audio.json overrides",
)
@click.pass_context
def cli(ctx, debug, config_dir):
    """Scale Explorer - major scales on the guitar fretboard"""
    setup_logging("DEBUG" if debug else None)
    ctx.obj = ComponentFactory(ConfigManager(config_dir))


@cli.command()
def roots():
    """List the selectable scale roots"""
    for root in SCALE_ROOTS:
        click.echo(root)


@cli.command()
@click.argument("root")
@click.option("--flats", is_flag=True, help="Spell accidentals as flats")
def scale(root, flats):
    """Print the major scale on ROOT"""
    result = _scale_or_fail(root)
    names = []
    for degree, pitch_class in enumerate(result.pitch_classes):
        name = note_name(pitch_class, use_flats=flats)
        if degree == 0:
            name = f"[{name}]"
        elif pitch_class == result.fifth:
            name = f"({name})"
        names.append(name)
    click.echo(" ".join(names))


@cli.command()
@click.argument("string_index", type=int)
@click.argument("fret", type=int)
def pitch(string_index, fret):
    """Print the pitch at STRING_INDEX (0 = high E) and FRET"""
    try:
        click.echo(str(pitch_at(string_index, fret)))
    except FretRangeError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument("root")
def fretboard(root):
    """Draw the fretboard with ROOT major highlighted"""
    click.echo(render_fretboard(build_fretboard(_scale_or_fail(root))))


@cli.command()
@click.argument("root", required=False)
@click.option("--loop/--no-loop", default=None, help="Repeat the scale until interrupted")
@click.option("--descending", is_flag=True, help="Play the scale downward")
@click.option("--interval", type=float, default=None, help="Seconds between notes")
@click.option("--bpm", type=click.IntRange(40, 208), default=None, help="Derive the interval from a tempo")
@click.option(
    "--backend",
    type=click.Choice(["auto", "sampled", "synth", "none"]),
    default=None,
    help="Instrument to play with",
)
@click.option("--sample-dir", type=click.Path(file_okay=False), default=None, help="Guitar sample directory")
@click.option("--octave", type=int, default=None, help="Octave to play the scale in")
@click.option("--ticks", type=int, default=None, help="Stop after this many notes")
@click.pass_obj
def play(factory, root, loop, descending, interval, bpm, backend, sample_dir, octave, ticks):
    """Play the major scale on ROOT one note per tick"""
    overrides = {}
    if loop is not None:
        overrides["loop"] = loop
    if descending:
        overrides["direction"] = Direction.DESCENDING
    try:
        sequencer = factory.create_sequencer(root, **overrides)
    except InvalidNoteError as e:
        raise click.BadParameter(str(e), param_hint="ROOT")

    player_overrides = {}
    if bpm is not None:
        player_overrides["interval_seconds"] = interval_from_bpm(bpm)
        click.echo(f"Tempo: {bpm} BPM ({tempo_mark(bpm)})")
    if interval is not None:
        player_overrides["interval_seconds"] = interval
    if octave is not None:
        player_overrides["octave"] = octave

    backend_overrides = {"sample_dir": sample_dir} if sample_dir else {}
    try:
        audio = factory.create_audio_backend(backend, **backend_overrides)
    except (FileNotFoundError, RuntimeError, OSError) as e:
        raise click.ClickException(f"Could not open audio backend: {e}")

    player = factory.create_player(sequencer, audio, **player_overrides)
    player.events.on_note_played(lambda note, oct_: click.echo(f"{note}{oct_}"))
    try:
        player.run(max_ticks=ticks)
    except KeyboardInterrupt:
        logger.info("Playback interrupted")
        player.stop()
    finally:
        audio.close()


def main(args: Optional[List[str]] = None) -> int:
    """Run the CLI and return its exit code."""
    try:
        cli.main(args=args, prog_name="scale-explorer", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
