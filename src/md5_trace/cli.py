from typing import Optional

import click
from rich.console import Console

from md5_trace.constants import INITIAL_HASH, ROUND_CONSTANTS, SHIFT_AMOUNTS
from md5_trace.logs import configure_logging, get_logger
from md5_trace.models.trace import Trace
from md5_trace.tracer import build_trace
from md5_trace.ui import COLORS, HASH_NAMES, constants_table, render, rounds_table, words_table
from md5_trace.utils import InputMode, InvalidHexInput, load_message

LOG_LEVELS = ["debug", "info", "warning", "error"]

log = get_logger(__name__)


def message_options(fn):
    """MESSAGE argument plus the --mode and --file options shared by commands."""
    fn = click.option(
        "--file", "-f", "file_path",
        type=click.Path(exists=True, dir_okay=False),
        help="Read the message from a file instead of the argument.",
    )(fn)
    fn = click.option(
        "--mode", "-m",
        type=click.Choice([m.value for m in InputMode]),
        default=InputMode.TEXT.value,
        show_default=True,
        help="Interpret the message as UTF-8 text or as hex digits.",
    )(fn)
    fn = click.argument("message", required=False)(fn)
    return fn


def trace_from_options(message: Optional[str], mode: str, file_path: Optional[str]) -> Trace:
    """Build a trace from the CLI inputs, mapping bad hex into a usage error."""
    if message is not None and file_path is not None:
        raise click.UsageError("Pass either MESSAGE or --file, not both.")

    try:
        if file_path is not None:
            return build_trace(load_message(file_path), mode)
        return build_trace(message or "", mode)
    except InvalidHexInput as e:
        raise click.BadParameter(str(e), param_hint="MESSAGE") from e


@click.group(context_settings={"auto_envvar_prefix": "MD5_TRACE"})
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS),
    default="warning",
    show_default=True,
    help="Minimum level of log lines written to stderr.",
)
def cli(log_level: str):
    configure_logging(log_level)


@cli.command()
@message_options
def digest(message: Optional[str], mode: str, file_path: Optional[str]):
    """Print the MD5 digest of a message."""
    trace = trace_from_options(message, mode, file_path)
    click.echo(trace.digest)


@cli.command()
@message_options
@click.option("--step", "-s", type=int, default=0, show_default=True, help="Step to show (clamped to the trace).")
def show(message: Optional[str], mode: str, file_path: Optional[str], step: int):
    """Render a single step of the MD5 computation."""
    trace = trace_from_options(message, mode, file_path)
    log.info("showing step", step=step, max_step=trace.max_step)
    Console().print(render(trace, step))


@cli.command()
@message_options
@click.option("--chunk", "-c", "chunk_index", type=int, default=0, show_default=True, help="Zero-based chunk index.")
def rounds(message: Optional[str], mode: str, file_path: Optional[str], chunk_index: int):
    """Show all 64 rounds of one chunk as a table."""
    trace = trace_from_options(message, mode, file_path)
    if not 0 <= chunk_index < len(trace.chunks):
        raise click.BadParameter(
            f"chunk must be between 0 and {len(trace.chunks) - 1}", param_hint="--chunk"
        )
    Console().print(rounds_table(trace, chunk_index))


@cli.command()
def constants():
    """Show the initial hash, round constants and shift amounts."""
    console = Console()
    console.print(words_table("Initial hash", INITIAL_HASH, HASH_NAMES, COLORS["hash"]))
    console.print(constants_table(ROUND_CONSTANTS, SHIFT_AMOUNTS))


if __name__ == "__main__":
    cli()
