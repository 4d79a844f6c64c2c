from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Tuple, TypeAlias, Union

from md5_trace.constants import Words4


class EventKind(str, Enum):
    PREPROCESS = "preprocess"
    CHUNK_START = "chunk-start"
    ROUND = "round"
    CHUNK_END = "chunk-end"
    DONE = "done"

    def __str__(self):
        return self.value


@dataclass(frozen=True, slots=True)
class PreprocessEvent:
    """Input framed with MD5 padding, before any chunk runs."""

    kind: ClassVar[EventKind] = EventKind.PREPROCESS

    input_mode: str
    input_length_bytes: int
    input_length_bits: int
    padded_length_bytes: int
    padded_length_bits: int
    added_bytes: int
    chunk_count: int
    digest_preview: str


@dataclass(frozen=True, slots=True)
class ChunkStartEvent:
    """Chunk words M[0..15] loaded and A, B, C, D initialized from the hash."""

    kind: ClassVar[EventKind] = EventKind.CHUNK_START

    chunk_index: int
    chunk_words: Tuple[int, ...]
    hash_before: Words4
    registers_before: Words4
    digest_preview: str


@dataclass(frozen=True, slots=True)
class RoundEvent:
    """One of the 64 compression rounds of a chunk.

    digest_preview folds the current registers into the hash that entered
    the chunk, as if the chunk ended after this round.
    """

    kind: ClassVar[EventKind] = EventKind.ROUND

    chunk_index: int
    round_index: int
    step_within_chunk: int
    function_name: str
    function_formula: str
    index_formula: str
    g: int
    shift: int
    constant: int
    message_word: int
    function_result: int
    sum: int
    rotated: int
    registers_before: Words4
    registers_after: Words4
    digest_preview: str


@dataclass(frozen=True, slots=True)
class ChunkEndEvent:
    """Working registers added back into the running hash state."""

    kind: ClassVar[EventKind] = EventKind.CHUNK_END

    chunk_index: int
    hash_before: Words4
    registers_after: Words4
    hash_after: Words4
    digest_after_chunk: str

    @property
    def digest_preview(self) -> str:
        return self.digest_after_chunk


@dataclass(frozen=True, slots=True)
class DoneEvent:
    """Final digest assembled from H0..H3."""

    kind: ClassVar[EventKind] = EventKind.DONE

    hash: Words4
    digest: str
    chunk_count: int

    @property
    def digest_preview(self) -> str:
        return self.digest


Event: TypeAlias = Union[PreprocessEvent, ChunkStartEvent, RoundEvent, ChunkEndEvent, DoneEvent]
