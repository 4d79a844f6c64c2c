import math
from typing import Tuple, TypeAlias

MASK32 = 0xFFFFFFFF
CHUNK_SIZE = 64
WORDS_PER_CHUNK = 16
ROUNDS_PER_CHUNK = 64

Words4: TypeAlias = Tuple[int, int, int, int]

INITIAL_HASH: Words4 = (
    0x67452301,
    0xEFCDAB89,
    0x98BADCFE,
    0x10325476,
)

# Per-round left-rotation amounts (RFC 1321)
SHIFT_AMOUNTS: Tuple[int, ...] = tuple(
    [7, 12, 17, 22] * 4
    + [5, 9, 14, 20] * 4
    + [4, 11, 16, 23] * 4
    + [6, 10, 15, 21] * 4
)

# K[i] = floor(2^32 * |sin(i + 1)|)
ROUND_CONSTANTS: Tuple[int, ...] = tuple(
    int(abs(math.sin(i + 1)) * (1 << 32)) & MASK32 for i in range(ROUNDS_PER_CHUNK)
)

ROUND_FORMULAS = {
    "F": "(B & C) | (~B & D)",
    "G": "(D & B) | (~D & C)",
    "H": "B ^ C ^ D",
    "I": "C ^ (B | ~D)",
}

INDEX_FORMULAS = {
    "F": "g = i",
    "G": "g = (5i + 1) mod 16",
    "H": "g = (3i + 5) mod 16",
    "I": "g = (7i) mod 16",
}
