"""
Public-input binder.

The quasi-public values (buyer key, seller key, nonce, ciphertext) are
serialized into one 9984-bit transcript, hashed with SHA-256 and the digest
is compared, split into two 128-bit halves, against the public commitment
``Hpub``.

Transcript layout (bit offsets):

    [0, 512)       Qa    x limbs then y limbs, each limb LSB first
    [512, 1024)    Qb    same encoding
    [1024, 1280)   nonce 256 bits, MSB first (bit-reversed)
    [1280, 9984)   ew    34 elements x 256 bits, each LSB first

Only the nonce is reversed. Each field has its own serializer so that the
layout stays a fixed protocol table rather than a uniform rule.
"""

import logging
from typing import Any, Callable, List, NamedTuple, Sequence, Tuple

from ..constants import (
    CIPHERTEXT_ELEMENT_BITS,
    CIPHERTEXT_LENGTH,
    DIGEST_HALF_BITS,
    NONCE_BITS,
    POINT_BITS,
    TRANSCRIPT_BITS,
)
from ..crypto.bits import msb_bits_to_int, point_to_bits, to_bits
from ..crypto.hashing import sha256_bits
from ..errors import ValidationError
from .circuits import CircuitComponent, ConstraintSystem, ConstraintType, Witness
from .inputs import CurvePoint

logger = logging.getLogger(__name__)


def serialize_point(point: CurvePoint) -> List[int]:
    return point_to_bits(point)


def serialize_nonce(nonce: int) -> List[int]:
    bits = to_bits(nonce, NONCE_BITS)
    return [bits[NONCE_BITS - 1 - i] for i in range(NONCE_BITS)]


def serialize_ciphertext(ew: Sequence[int]) -> List[int]:
    bits: List[int] = []
    for element in ew:
        bits.extend(to_bits(element, CIPHERTEXT_ELEMENT_BITS))
    return bits


class TranscriptField(NamedTuple):
    name: str
    width: int
    serialize: Callable[[Any], List[int]]


TRANSCRIPT_LAYOUT: Tuple[TranscriptField, ...] = (
    TranscriptField("Qa", POINT_BITS, serialize_point),
    TranscriptField("Qb", POINT_BITS, serialize_point),
    TranscriptField("nonce", NONCE_BITS, serialize_nonce),
    TranscriptField("ew", CIPHERTEXT_LENGTH * CIPHERTEXT_ELEMENT_BITS, serialize_ciphertext),
)


def transcript_bits(
    qa: CurvePoint,
    qb: CurvePoint,
    nonce: int,
    ew: Sequence[int],
    layout: Sequence[TranscriptField] = TRANSCRIPT_LAYOUT,
) -> List[int]:
    """Serialize the bound values into the hash input bit string."""
    values = {"Qa": qa, "Qb": qb, "nonce": nonce, "ew": ew}
    bits: List[int] = []
    for entry in layout:
        chunk = entry.serialize(values[entry.name])
        if len(chunk) != entry.width:
            raise ValidationError(
                f"Transcript field {entry.name} has {len(chunk)} bits",
                field=entry.name,
                value=len(chunk),
                expected=entry.width,
            )
        bits.extend(chunk)
    return bits


def digest_halves(digest: Sequence[int]) -> Tuple[int, int]:
    """Reassemble digest bits [0,128) and [128,256), first bit most significant."""
    return (
        msb_bits_to_int(digest[:DIGEST_HALF_BITS]),
        msb_bits_to_int(digest[DIGEST_HALF_BITS : 2 * DIGEST_HALF_BITS]),
    )


def compute_public_commitment(
    qa: CurvePoint,
    qb: CurvePoint,
    nonce: int,
    ew: Sequence[int],
    layout: Sequence[TranscriptField] = TRANSCRIPT_LAYOUT,
) -> Tuple[int, int]:
    """Compute ``Hpub`` for the given quasi-public values."""
    return digest_halves(sha256_bits(transcript_bits(qa, qb, nonce, ew, layout)))


class PublicInputBinder(CircuitComponent):
    """Enforces ``SHA256(transcript) == Hpub`` (split in halves)."""

    name = "binder"

    def synthesize(
        self,
        cs: ConstraintSystem,
        witness: Witness,
        qa: CurvePoint,
        qb: CurvePoint,
        nonce: int,
        ew: Sequence[int],
        hpub: Sequence[int],
    ) -> None:
        bits = transcript_bits(qa, qb, nonce, ew)
        if len(bits) != TRANSCRIPT_BITS:
            raise ValidationError(
                "Transcript width mismatch", field="transcript", value=len(bits), expected=TRANSCRIPT_BITS
            )

        halves = digest_halves(sha256_bits(bits))
        for i, half in enumerate(halves):
            witness.set_value(self.signal(f"digest[{i}]"), half)
            cs.assert_equal(
                self.signal(f"Hpub[{i}]"),
                self.name,
                half,
                hpub[i],
                constraint_type=ConstraintType.BINDING,
                description=f"digest half {i} equals Hpub[{i}]",
            )
        logger.debug("Transcript digest halves: %s", halves)
