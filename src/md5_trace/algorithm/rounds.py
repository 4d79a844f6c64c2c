"""MD5 compression function, one inspectable round at a time.

Each round consumes the working registers (A, B, C, D) and one message word
and yields a RoundState recording every intermediate value. Python ints are
unbounded, so every result is masked back to 32 bits.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

from md5_trace.constants import MASK32, ROUND_CONSTANTS, ROUNDS_PER_CHUNK, SHIFT_AMOUNTS, Words4
from md5_trace.models.chunk import Chunk


class RoundFunction(str, Enum):
    F = "F"
    G = "G"
    H = "H"
    I = "I"

    def __str__(self):
        return self.value


@dataclass(frozen=True, slots=True)
class RoundState:
    round_index: int
    function: RoundFunction
    g: int
    message_word: int
    shift: int
    constant: int
    function_result: int
    sum: int
    rotated: int
    registers_before: Words4
    registers_after: Words4


def u32(x: int) -> int:
    return x & MASK32


def left_rotate(value: int, amount: int) -> int:
    value = u32(value)
    return u32((value << amount) | (value >> (32 - amount)))


def round_function(round_index: int) -> RoundFunction:
    """Pick the boolean function family for a round (16 rounds each)."""
    if 0 <= round_index < 16:
        return RoundFunction.F
    if 16 <= round_index < 32:
        return RoundFunction.G
    if 32 <= round_index < 48:
        return RoundFunction.H
    if 48 <= round_index < 64:
        return RoundFunction.I
    raise ValueError(f"Invalid round index: {round_index}")


def message_index(round_index: int) -> int:
    """Index g of the message word M[g] consumed by a round."""
    match round_function(round_index):
        case RoundFunction.F:
            return round_index
        case RoundFunction.G:
            return (5 * round_index + 1) % 16
        case RoundFunction.H:
            return (3 * round_index + 5) % 16
        case RoundFunction.I:
            return (7 * round_index) % 16


def boolean_function(function: RoundFunction, b: int, c: int, d: int) -> int:
    b, c, d = u32(b), u32(c), u32(d)
    match function:
        case RoundFunction.F:
            return u32((b & c) | (~b & d))
        case RoundFunction.G:
            return u32((d & b) | (~d & c))
        case RoundFunction.H:
            return u32(b ^ c ^ d)
        case RoundFunction.I:
            return u32(c ^ (b | ~d))
    raise ValueError(f"Invalid round function: {function}")


def run_round(registers: Words4, words: Sequence[int], round_index: int) -> RoundState:
    """Perform one MD5 step on (a, b, c, d) with the chunk words M[0..15]."""
    a, b, c, d = (u32(r) for r in registers)
    function = round_function(round_index)
    g = message_index(round_index)

    function_result = boolean_function(function, b, c, d)
    total = u32(a + function_result + ROUND_CONSTANTS[round_index] + words[g])
    rotated = left_rotate(total, SHIFT_AMOUNTS[round_index])

    return RoundState(
        round_index=round_index,
        function=function,
        g=g,
        message_word=words[g],
        shift=SHIFT_AMOUNTS[round_index],
        constant=ROUND_CONSTANTS[round_index],
        function_result=function_result,
        sum=total,
        rotated=rotated,
        registers_before=(a, b, c, d),
        # a' = d, b' = b + rotated, c' = b, d' = c
        registers_after=(d, u32(b + rotated), b, c),
    )


def fold(hash_state: Words4, registers: Words4) -> Words4:
    """Add the working registers back into the hash state (A->H0 ... D->H3)."""
    return (
        u32(hash_state[0] + registers[0]),
        u32(hash_state[1] + registers[1]),
        u32(hash_state[2] + registers[2]),
        u32(hash_state[3] + registers[3]),
    )


def compress_chunk(hash_state: Words4, chunk: Chunk) -> Tuple[Words4, Tuple[RoundState, ...]]:
    """Run all 64 rounds over a chunk, returning the folded hash and every round."""
    registers = hash_state
    rounds = []
    for round_index in range(ROUNDS_PER_CHUNK):
        state = run_round(registers, chunk.words, round_index)
        rounds.append(state)
        registers = state.registers_after

    return fold(hash_state, registers), tuple(rounds)
