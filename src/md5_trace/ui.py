from typing import Iterable, Optional

from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from md5_trace.digest import format_word
from md5_trace.models.events import (
    ChunkEndEvent,
    ChunkStartEvent,
    DoneEvent,
    Event,
    PreprocessEvent,
    RoundEvent,
)
from md5_trace.models.trace import Trace

REGISTER_NAMES = ("A", "B", "C", "D")
HASH_NAMES = ("H0", "H1", "H2", "H3")

COLORS = {
    "register": "cyan",
    "hash": "turquoise2",
    "digest": "bold spring_green2",
    "label": "dim",
    "current_word": "bold yellow on black",
}


def event_title(event: Optional[Event]) -> str:
    """One line description of what an event did."""
    match event:
        case None:
            return "No step selected"
        case PreprocessEvent():
            return "Preprocess input and apply MD5 padding"
        case ChunkStartEvent():
            return f"Chunk {event.chunk_index + 1}: load M[0..15] and initialize A, B, C, D"
        case RoundEvent():
            return (
                f"Chunk {event.chunk_index + 1} round {event.step_within_chunk}/64 "
                f"using function {event.function_name}"
            )
        case ChunkEndEvent():
            return f"Chunk {event.chunk_index + 1}: add working registers back into hash state"
        case DoneEvent():
            return "Final digest assembled from A, B, C, D"
    raise ValueError(f"Unknown event type: {type(event).__name__}")


def words_table(title: str, values: Iterable[int], names: Iterable[str], style: str) -> Table:
    t = Table(title=title, show_header=True, show_edge=False, padding=(0, 1))
    values = list(values)
    for name in names:
        t.add_column(name, justify="center", style=style, no_wrap=True)
    t.add_row(*(format_word(v) for v in values))
    return t


def message_words_table(words: Iterable[int], highlight: int = -1) -> Table:
    """Chunk words M[0..15] in two rows of eight, highlighting M[g]."""
    words = list(words)
    t = Table(title="Message words", show_header=False, show_edge=False, padding=(0, 1))
    for _ in range(8):
        t.add_column(no_wrap=True)
    for row in range(0, len(words), 8):
        cells = []
        for i in range(row, row + 8):
            cell = f"M{i:<2} {format_word(words[i])}"
            if i == highlight:
                cell = f"[{COLORS['current_word']}]{cell}[/{COLORS['current_word']}]"
            cells.append(cell)
        t.add_row(*cells)
    return t


def format_bytes(data: bytes, max_bytes: int = 64) -> str:
    """Space separated hex bytes, truncated after max_bytes."""
    if not data:
        return "(empty)"
    suffix = " ..." if len(data) > max_bytes else ""
    return data[:max_bytes].hex(" ") + suffix


def details_table(rows: Iterable[tuple]) -> Table:
    t = Table.grid(padding=(0, 2))
    t.add_column(style=COLORS["label"], justify="right", no_wrap=True)
    t.add_column(overflow="fold")
    for label, value in rows:
        t.add_row(escape(label), escape(str(value)))
    return t


def render_event(trace: Trace, event: Event):
    """Build the renderable body for a single event."""
    match event:
        case PreprocessEvent():
            return Group(
                details_table([
                    ("Input mode", event.input_mode),
                    ("Input length", f"{event.input_length_bytes} bytes / {event.input_length_bits} bits"),
                    ("Padded length", f"{event.padded_length_bytes} bytes / {event.padded_length_bits} bits"),
                    ("Bytes added", event.added_bytes),
                    ("Chunks", event.chunk_count),
                    ("Input bytes", format_bytes(trace.input_bytes, 80)),
                    ("Padded bytes", format_bytes(trace.padded_bytes, 128)),
                ]),
                words_table("Initial hash", trace.initial_hash, HASH_NAMES, COLORS["hash"]),
            )
        case ChunkStartEvent():
            return Group(
                details_table([("Chunk bytes", format_bytes(trace.chunks[event.chunk_index].data))]),
                message_words_table(event.chunk_words),
                words_table("Hash before chunk", event.hash_before, HASH_NAMES, COLORS["hash"]),
                words_table("Registers", event.registers_before, REGISTER_NAMES, COLORS["register"]),
            )
        case RoundEvent():
            return Group(
                details_table([
                    ("Function", f"{event.function_name} = {event.function_formula}"),
                    ("Index", f"{event.index_formula} = {event.g}"),
                    ("M[g]", format_word(event.message_word)),
                    ("K[i]", format_word(event.constant)),
                    ("S[i]", event.shift),
                    ("f", format_word(event.function_result)),
                    ("A + f + K[i] + M[g]", format_word(event.sum)),
                    ("rotated", format_word(event.rotated)),
                ]),
                message_words_table(trace.chunks[event.chunk_index].words, highlight=event.g),
                words_table("Registers before", event.registers_before, REGISTER_NAMES, COLORS["register"]),
                words_table("Registers after", event.registers_after, REGISTER_NAMES, COLORS["register"]),
            )
        case ChunkEndEvent():
            return Group(
                words_table("Hash before chunk", event.hash_before, HASH_NAMES, COLORS["hash"]),
                words_table("Final registers", event.registers_after, REGISTER_NAMES, COLORS["register"]),
                words_table("Hash after chunk", event.hash_after, HASH_NAMES, COLORS["hash"]),
            )
        case DoneEvent():
            return Group(
                details_table([("Chunks", event.chunk_count)]),
                words_table("Final hash", event.hash, HASH_NAMES, COLORS["hash"]),
            )
    raise ValueError(f"Unknown event type: {type(event).__name__}")


def render(trace: Trace, step: int) -> Panel:
    """Render the event at a step (clamped to the trace) with its digest preview."""
    event = trace.event_at(step)
    current = min(trace.max_step, max(0, step))
    body = Group(
        render_event(trace, event),
        f"[{COLORS['label']}]Digest[/{COLORS['label']}] "
        f"[{COLORS['digest']}]{event.digest_preview}[/{COLORS['digest']}]",
    )
    return Panel(
        body,
        title=event_title(event),
        subtitle=f"Step {current} / {trace.max_step}",
        padding=(0, 1),
    )


def rounds_table(trace: Trace, chunk_index: int) -> Table:
    """All 64 rounds of one chunk, one row per round."""
    t = Table(title=f"Chunk {chunk_index + 1} / {len(trace.chunks)}  |  {trace.digest}")
    t.add_column("i", justify="right", style=COLORS["label"])
    t.add_column("Fn", justify="center")
    t.add_column("g", justify="right")
    t.add_column("S", justify="right")
    t.add_column(escape("K[i]"), no_wrap=True)
    t.add_column("f", no_wrap=True)
    t.add_column("rotated", no_wrap=True)
    for name in REGISTER_NAMES:
        t.add_column(name, style=COLORS["register"], no_wrap=True)

    for event in trace.events:
        if not isinstance(event, RoundEvent) or event.chunk_index != chunk_index:
            continue
        t.add_row(
            str(event.round_index),
            event.function_name,
            str(event.g),
            str(event.shift),
            format_word(event.constant),
            format_word(event.function_result),
            format_word(event.rotated),
            *(format_word(r) for r in event.registers_after),
        )
    return t


def constants_table(constants: Iterable[int], shifts: Iterable[int]) -> Table:
    t = Table(title="Round constants and shift amounts")
    t.add_column("i", justify="right", style=COLORS["label"])
    t.add_column(escape("K[i]"), no_wrap=True)
    t.add_column(escape("S[i]"), justify="right")
    for i, (k, s) in enumerate(zip(constants, shifts)):
        t.add_row(str(i), format_word(k), str(s))
    return t
