from typing import Iterable

from md5_trace.constants import MASK32, Words4


def word_to_hex_le(word: int) -> str:
    """Render a 32-bit word as 4 little-endian bytes of lowercase hex."""
    return (word & MASK32).to_bytes(4, "little").hex()


def to_hex32(word: int) -> str:
    return f"{word & MASK32:08x}"


def format_word(word: int) -> str:
    return f"0x{to_hex32(word)}"


def digest_from_state(state: Iterable[int]) -> str:
    """Serialize H0..H3 into the canonical 32 character MD5 hex digest."""
    return "".join(word_to_hex_le(word) for word in state)


def state_from_digest(digest: str) -> Words4:
    """Recover H0..H3 from a digest string produced by digest_from_state()."""
    if len(digest) != 32:
        raise ValueError(f"Digest must be 32 hex digits, got {len(digest)}")
    try:
        raw = bytes.fromhex(digest)
    except ValueError as e:
        raise ValueError(f"Digest is not valid hex: {digest!r}") from e
    # bytes.fromhex() skips whitespace, so a short decode means embedded spaces.
    if len(raw) != 16:
        raise ValueError(f"Digest is not valid hex: {digest!r}")

    words = [int.from_bytes(raw[i:i + 4], "little") for i in range(0, 16, 4)]
    return (words[0], words[1], words[2], words[3])
