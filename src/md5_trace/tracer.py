from typing import Iterator, Tuple

from md5_trace.algorithm.padding import pad_message
from md5_trace.algorithm.rounds import compress_chunk, fold
from md5_trace.constants import (
    INDEX_FORMULAS,
    INITIAL_HASH,
    ROUND_CONSTANTS,
    ROUND_FORMULAS,
    SHIFT_AMOUNTS,
    Words4,
)
from md5_trace.digest import digest_from_state
from md5_trace.logs import get_logger
from md5_trace.models.chunk import Chunk, PaddedMessage, split_chunks
from md5_trace.models.events import (
    ChunkEndEvent,
    ChunkStartEvent,
    DoneEvent,
    Event,
    PreprocessEvent,
    RoundEvent,
)
from md5_trace.models.trace import Trace
from md5_trace.utils import InputMode, MessageSource, parse_input_bytes

log = get_logger(__name__)


def preprocess_event(padded: PaddedMessage, input_mode: InputMode | str) -> PreprocessEvent:
    return PreprocessEvent(
        input_mode=str(input_mode),
        input_length_bytes=padded.original_length,
        input_length_bits=padded.original_length_bits,
        padded_length_bytes=len(padded),
        padded_length_bits=padded.length_bits,
        added_bytes=padded.added_bytes,
        chunk_count=padded.chunk_count,
        digest_preview=digest_from_state(INITIAL_HASH),
    )


def iter_chunk_events(chunk: Chunk, hash_before: Words4) -> Iterator[Event]:
    """
    Yield the 66 events of one chunk: start, 64 rounds, end.
    (chunk, hash_before) is a complete checkpoint, so any chunk can be
    replayed without recomputing the chunks before it.
    """
    yield ChunkStartEvent(
        chunk_index=chunk.index,
        chunk_words=chunk.words,
        hash_before=hash_before,
        registers_before=hash_before,
        digest_preview=digest_from_state(hash_before),
    )

    hash_after, rounds = compress_chunk(hash_before, chunk)
    for state in rounds:
        function_name = state.function.value
        yield RoundEvent(
            chunk_index=chunk.index,
            round_index=state.round_index,
            step_within_chunk=state.round_index + 1,
            function_name=function_name,
            function_formula=ROUND_FORMULAS[function_name],
            index_formula=INDEX_FORMULAS[function_name],
            g=state.g,
            shift=state.shift,
            constant=state.constant,
            message_word=state.message_word,
            function_result=state.function_result,
            sum=state.sum,
            rotated=state.rotated,
            registers_before=state.registers_before,
            registers_after=state.registers_after,
            digest_preview=digest_from_state(fold(hash_before, state.registers_after)),
        )

    yield ChunkEndEvent(
        chunk_index=chunk.index,
        hash_before=hash_before,
        registers_after=rounds[-1].registers_after,
        hash_after=hash_after,
        digest_after_chunk=digest_from_state(hash_after),
    )


def _iter_padded_events(
    padded: PaddedMessage, chunks: Tuple[Chunk, ...], input_mode: InputMode | str
) -> Iterator[Event]:
    yield preprocess_event(padded, input_mode)

    hash_state: Words4 = INITIAL_HASH
    for chunk in chunks:
        for event in iter_chunk_events(chunk, hash_state):
            if isinstance(event, ChunkEndEvent):
                hash_state = event.hash_after
            yield event

    yield DoneEvent(
        hash=hash_state,
        digest=digest_from_state(hash_state),
        chunk_count=padded.chunk_count,
    )


def iter_events(data: bytes, input_mode: InputMode | str = InputMode.TEXT) -> Iterator[Event]:
    """Lazily yield every event of the computation over already normalized bytes."""
    padded = pad_message(data)
    yield from _iter_padded_events(padded, split_chunks(padded), input_mode)


def build_trace(message: MessageSource, mode: InputMode | str = InputMode.TEXT) -> Trace:
    """
    Compute the MD5 digest of a message and record every state transition.
    - message: text, or hex digits when mode is "hex"
    Raises InvalidHexInput before any event is produced.
    """
    mode = InputMode(mode)
    input_bytes = parse_input_bytes(message, mode)
    padded = pad_message(input_bytes)
    chunks = split_chunks(padded)
    events = tuple(_iter_padded_events(padded, chunks, mode))

    done = events[-1]
    log.debug(
        "trace built",
        input_mode=str(mode),
        input_len=len(input_bytes),
        chunk_count=len(chunks),
        event_count=len(events),
        digest=done.digest,
    )

    return Trace(
        input_mode=str(mode),
        input_bytes=input_bytes,
        padded=padded,
        chunks=chunks,
        events=events,
        digest=done.digest,
        constants=ROUND_CONSTANTS,
        shifts=SHIFT_AMOUNTS,
        initial_hash=INITIAL_HASH,
    )
