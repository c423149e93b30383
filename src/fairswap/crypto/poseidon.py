"""
Poseidon permutation and hash over the BN254 scalar field.

Parameters follow the x^5 instance used by circomlib: 8 full rounds and a
width-dependent number of partial rounds. Round constants and the Cauchy MDS
matrix are drawn from the Grain LFSR seeded with the instance description,
as in the Poseidon reference parameter script.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, List, Sequence, Tuple

from ..constants import FIELD_MODULUS
from ..errors import ValidationError

logger = logging.getLogger(__name__)

FULL_ROUNDS = 8
SBOX_ALPHA = 5
FIELD_BITS = 254

# Partial rounds for state widths t = 2..17.
PARTIAL_ROUNDS = [56, 57, 56, 60, 60, 63, 64, 63, 60, 66, 60, 65, 70, 60, 64, 68]

MIN_WIDTH = 2
MAX_WIDTH = MIN_WIDTH + len(PARTIAL_ROUNDS) - 1


@dataclass(frozen=True)
class PoseidonParams:
    """Round constants and MDS matrix for one state width."""

    width: int
    full_rounds: int
    partial_rounds: int
    round_constants: Tuple[int, ...]
    mds: Tuple[Tuple[int, ...], ...]

    @property
    def total_rounds(self) -> int:
        return self.full_rounds + self.partial_rounds


class GrainLFSR:
    """80-bit Grain LFSR in self-shrinking mode."""

    STATE_BITS = 80
    WARMUP_STEPS = 160

    def __init__(self, width: int, full_rounds: int, partial_rounds: int):
        seed = (
            format(1, "02b")  # prime field
            + format(0, "04b")  # x^alpha s-box
            + format(FIELD_BITS, "012b")
            + format(width, "012b")
            + format(full_rounds, "010b")
            + format(partial_rounds, "010b")
            + "1" * 30
        )
        self._state = 0
        for i, ch in enumerate(seed):
            if ch == "1":
                self._state |= 1 << i
        for _ in range(self.WARMUP_STEPS):
            self._step()

    def _step(self) -> int:
        s = self._state
        bit = ((s >> 62) ^ (s >> 51) ^ (s >> 38) ^ (s >> 23) ^ (s >> 13) ^ s) & 1
        self._state = (s >> 1) | (bit << (self.STATE_BITS - 1))
        return bit

    def bits(self) -> Iterator[int]:
        while True:
            bit = self._step()
            while bit == 0:
                self._step()
                bit = self._step()
            yield self._step()

    def random_int(self, num_bits: int) -> int:
        source = self.bits()
        value = 0
        for _ in range(num_bits):
            value = (value << 1) | next(source)
        return value

    def field_element(self, modulus: int) -> int:
        """Rejection-sampled field element."""
        value = self.random_int(FIELD_BITS)
        while value >= modulus:
            value = self.random_int(FIELD_BITS)
        return value


@lru_cache(maxsize=None)
def get_params(width: int) -> PoseidonParams:
    """Generate (once) the parameters for state width ``width``."""
    if not MIN_WIDTH <= width <= MAX_WIDTH:
        raise ValidationError(
            f"Unsupported Poseidon width {width}",
            field="width",
            value=width,
            expected=f"{MIN_WIDTH}..{MAX_WIDTH}",
        )
    p = FIELD_MODULUS
    partial_rounds = PARTIAL_ROUNDS[width - MIN_WIDTH]
    lfsr = GrainLFSR(width, FULL_ROUNDS, partial_rounds)

    constants = tuple(
        lfsr.field_element(p) for _ in range((FULL_ROUNDS + partial_rounds) * width)
    )

    while True:
        samples = [lfsr.random_int(FIELD_BITS) % p for _ in range(2 * width)]
        while len(set(samples)) != len(samples):
            samples = [lfsr.random_int(FIELD_BITS) % p for _ in range(2 * width)]
        xs, ys = samples[:width], samples[width:]
        if any((x + y) % p == 0 for x in xs for y in ys):
            continue
        mds = tuple(tuple(pow(x + y, -1, p) for y in ys) for x in xs)
        break

    logger.debug(
        "Generated Poseidon parameters for t=%d (R_F=%d, R_P=%d)",
        width,
        FULL_ROUNDS,
        partial_rounds,
    )
    return PoseidonParams(width, FULL_ROUNDS, partial_rounds, constants, mds)


def poseidon_permutation(state: Sequence[int]) -> List[int]:
    """Apply the Poseidon permutation to a state of width 2..17."""
    p = FIELD_MODULUS
    params = get_params(len(state))
    t = params.width
    half_full = params.full_rounds // 2
    current = [value % p for value in state]

    for r in range(params.total_rounds):
        offset = r * t
        current = [(current[i] + params.round_constants[offset + i]) % p for i in range(t)]
        if r < half_full or r >= half_full + params.partial_rounds:
            current = [pow(value, SBOX_ALPHA, p) for value in current]
        else:
            current[0] = pow(current[0], SBOX_ALPHA, p)
        current = [
            sum(m * v for m, v in zip(row, current)) % p for row in params.mds
        ]

    return current


def poseidon_hash(inputs: Sequence[int]) -> int:
    """Poseidon hash of 1..16 field elements (capacity element first, output state[0])."""
    if not 1 <= len(inputs) <= MAX_WIDTH - 1:
        raise ValidationError(
            "Poseidon accepts between 1 and 16 inputs",
            field="inputs",
            value=len(inputs),
        )
    for i, value in enumerate(inputs):
        if not 0 <= value < FIELD_MODULUS:
            raise ValidationError(
                "Poseidon input is not a field element", field=f"inputs[{i}]", value=value
            )
    return poseidon_permutation([0] + list(inputs))[0]
