from dataclasses import dataclass, field
from typing import Tuple

from md5_trace.constants import CHUNK_SIZE, WORDS_PER_CHUNK


def bytes_to_word_le(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + 4], "little")


@dataclass(frozen=True, slots=True)
class PaddedMessage:
    """A message framed with MD5 padding and its 64-bit length suffix."""

    data: bytes
    original_length: int

    def __post_init__(self):
        object.__setattr__(self, "data", bytes(self.data))
        if not self.data or len(self.data) % CHUNK_SIZE != 0:
            raise ValueError(f"padded length {len(self.data)} is not a positive multiple of {CHUNK_SIZE}")
        if self.original_length < 0 or self.original_length > len(self.data):
            raise ValueError(f"original_length {self.original_length} out of range")

    @property
    def original_length_bits(self) -> int:
        return self.original_length * 8

    @property
    def length_bits(self) -> int:
        return len(self.data) * 8

    @property
    def added_bytes(self) -> int:
        return len(self.data) - self.original_length

    @property
    def chunk_count(self) -> int:
        return len(self.data) // CHUNK_SIZE

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class Chunk:
    """One 64 byte block of the padded message and its words M[0..15]."""

    index: int
    data: bytes
    words: Tuple[int, ...] = field(init=False)

    def __post_init__(self):
        data = bytes(self.data)
        if len(data) != CHUNK_SIZE:
            raise ValueError(f"chunk[{self.index}] length {len(data)} != {CHUNK_SIZE}")
        object.__setattr__(self, "data", data)
        object.__setattr__(
            self, "words", tuple(bytes_to_word_le(data, i * 4) for i in range(WORDS_PER_CHUNK))
        )


def split_chunks(padded: PaddedMessage) -> Tuple[Chunk, ...]:
    """Break the padded message into chunks, in input order."""
    return tuple(
        Chunk(index=offset // CHUNK_SIZE, data=padded.data[offset:offset + CHUNK_SIZE])
        for offset in range(0, len(padded.data), CHUNK_SIZE)
    )
