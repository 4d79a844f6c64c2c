from md5_trace.constants import CHUNK_SIZE
from md5_trace.models.chunk import PaddedMessage

LENGTH_FIELD_SIZE = 8


def md5_padding(length: int) -> bytes:
    """Return the bytes appended to a message of the given length.

    Padding: 0x80 byte, then 0x00 bytes up to 56 mod 64, then the
    64-bit little-endian length (in bits).
    """
    zero_count = (CHUNK_SIZE - LENGTH_FIELD_SIZE - 1 - length) % CHUNK_SIZE
    bit_length = (length * 8) % (1 << 64)
    return b"\x80" + b"\x00" * zero_count + bit_length.to_bytes(LENGTH_FIELD_SIZE, "little")


def pad_message(data: bytes) -> PaddedMessage:
    """Frame a message into a whole number of 64 byte chunks."""
    data = bytes(data)
    return PaddedMessage(data=data + md5_padding(len(data)), original_length=len(data))
