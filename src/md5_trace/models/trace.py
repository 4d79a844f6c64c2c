from dataclasses import dataclass
from typing import Tuple

from md5_trace.constants import Words4
from md5_trace.models.chunk import Chunk, PaddedMessage
from md5_trace.models.events import DoneEvent, Event, PreprocessEvent


@dataclass(frozen=True, slots=True)
class Trace:
    """Every state transition of one MD5 computation, eagerly materialized."""

    input_mode: str
    input_bytes: bytes
    padded: PaddedMessage
    chunks: Tuple[Chunk, ...]
    events: Tuple[Event, ...]
    digest: str
    constants: Tuple[int, ...]
    shifts: Tuple[int, ...]
    initial_hash: Words4

    @property
    def padded_bytes(self) -> bytes:
        return self.padded.data

    @property
    def max_step(self) -> int:
        return len(self.events) - 1

    def event_at(self, step: int) -> Event:
        """Random access to a step, clamped into 0..max_step."""
        return self.events[min(self.max_step, max(0, step))]

    def chunk_index_for(self, event: Event) -> int:
        """Chunk an event belongs to. Done maps to the last chunk, preprocess to the first."""
        if isinstance(event, DoneEvent):
            return len(self.chunks) - 1
        if isinstance(event, PreprocessEvent):
            return 0
        return min(len(self.chunks) - 1, max(0, event.chunk_index))

    def __len__(self) -> int:
        return len(self.events)

    def __getitem__(self, index: int) -> Event:
        return self.events[index]

    def __iter__(self):
        return iter(self.events)
