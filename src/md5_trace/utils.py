import re
from enum import Enum
from typing import TypeAlias, Union

from md5_trace.logs import get_logger

log = get_logger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]

MessageSource: TypeAlias = Union[str, BytesLike]

HEX_DIGITS = frozenset("0123456789abcdef")
WHITESPACE_RE = re.compile(r"\s+")


class InputMode(str, Enum):
    TEXT = "text"
    HEX = "hex"

    def __str__(self):
        return self.value


class InvalidHexInput(ValueError):
    pass


def _as_bytes(data: BytesLike) -> bytes:
    """Normalize bytes-like values to type bytes."""
    if isinstance(data, bytes):
        return data
    return bytes(data)


def parse_hex_input(value: MessageSource) -> bytes:
    """Decode whitespace separated hex digits into bytes, in input order."""
    if not isinstance(value, str):
        try:
            value = _as_bytes(value).decode("ascii")
        except UnicodeDecodeError as e:
            raise InvalidHexInput("Hex input can only contain 0-9 and a-f.") from e

    clean = WHITESPACE_RE.sub("", value).lower()
    if not clean:
        return b""

    if len(clean) % 2 != 0:
        log.debug("hex input rejected", reason="odd digit count", digits=len(clean))
        raise InvalidHexInput("Hex input must contain an even number of digits.")

    if any(ch not in HEX_DIGITS for ch in clean):
        log.debug("hex input rejected", reason="non-hex character")
        raise InvalidHexInput("Hex input can only contain 0-9 and a-f.")

    return bytes.fromhex(clean)


def encode_text(value: str) -> bytes:
    """UTF-8 encode like a browser TextEncoder: paired surrogates join, lone ones become U+FFFD."""
    return value.encode("utf-16", "surrogatepass").decode("utf-16", "replace").encode("utf-8")


def parse_input_bytes(value: MessageSource, mode: InputMode | str = InputMode.TEXT) -> bytes:
    """Turn a text or hex message into the byte sequence to be hashed."""
    mode = InputMode(mode)
    match mode:
        case InputMode.HEX:
            return parse_hex_input(value)
        case InputMode.TEXT:
            if isinstance(value, str):
                return encode_text(value)
            return _as_bytes(value)


def load_message(file_path: str) -> bytes:
    """Load a message file as raw bytes, to be normalized by parse_input_bytes()."""
    with open(file_path, "rb") as f:
        return f.read()
