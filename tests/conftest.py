"""
Shared fixtures for fair-exchange circuit tests.

Honest instances are assembled from the library's own collaborators. A real
Poseidon collision cannot be produced, so honest-path tests plug an additive
preimage hasher into the circuit; the default Poseidon hasher is used where a
test relies on collision resistance (e.g. the self-collision gap).
"""

from typing import Callable, List, Optional, Sequence

import pytest

from fairswap.constants import FIELD_MODULUS, PREIMAGE_LENGTH
from fairswap.crypto.curve import public_key_from_scalar, scalar_mul
from fairswap.crypto.encryption import poseidon_encrypt
from fairswap.zkp import (
    CurvePoint,
    FairExchangeCircuit,
    FairExchangeInputs,
    compute_public_commitment,
    derive_encryption_key,
    int_to_limbs,
)

SELLER_SCALAR = 0x5C1D0F7A3B2E4D6C8A9B0C1D2E3F405162738495A6B7C8D9EAFB0C1D2E3F4051
BUYER_SCALAR = 0x2B7E151628AED2A6ABF7158809CF4F3C762E7160F38B4DA56A784D9045190CFE
NONCE = 0x0123456789ABCDEF0011223344556677


def additive_hash(values: Sequence[int]) -> int:
    """Linear stand-in for H16 under which collisions are easy to build."""
    return sum(values) % FIELD_MODULUS


def make_preimage(seed: int) -> List[int]:
    return [(seed * 7919 + i * 104729 + 1) % FIELD_MODULUS for i in range(PREIMAGE_LENGTH)]


def make_colliding_pair(seed: int = 1, delta: int = 5):
    """Two distinct preimages with equal ``additive_hash``."""
    preimage0 = make_preimage(seed)
    preimage1 = list(preimage0)
    preimage1[0] = (preimage1[0] + delta) % FIELD_MODULUS
    preimage1[1] = (preimage1[1] - delta) % FIELD_MODULUS
    return preimage0, preimage1


def build_instance(
    preimage0: Sequence[int],
    preimage1: Sequence[int],
    db: int = SELLER_SCALAR,
    buyer_scalar: int = BUYER_SCALAR,
    nonce: int = NONCE,
) -> FairExchangeInputs:
    """Assemble an honest instance for the given secrets."""
    qa = CurvePoint.from_affine(public_key_from_scalar(buyer_scalar))
    qb = CurvePoint.from_affine(public_key_from_scalar(db))
    qs = CurvePoint.from_affine(scalar_mul(db, qa.to_affine()))
    key = derive_encryption_key(qs.x)
    ew = poseidon_encrypt(list(preimage0) + list(preimage1), key, nonce)
    hpub = compute_public_commitment(qa, qb, nonce, ew)
    return FairExchangeInputs(
        preimage0=tuple(preimage0),
        preimage1=tuple(preimage1),
        db=int_to_limbs(db),
        qs=qs,
        qa=qa,
        qb=qb,
        nonce=nonce,
        ew=tuple(ew),
        hpub=hpub,
    )


def rebind(inputs: FairExchangeInputs) -> FairExchangeInputs:
    """Recompute Hpub after tampering so only the tampered component fails."""
    hpub = compute_public_commitment(inputs.qa, inputs.qb, inputs.nonce, inputs.ew)
    return inputs.replace(hpub=hpub)


@pytest.fixture
def circuit() -> FairExchangeCircuit:
    """Circuit with a collision-friendly preimage hasher."""
    return FairExchangeCircuit(preimage_hasher=additive_hash)


@pytest.fixture
def poseidon_circuit() -> FairExchangeCircuit:
    """Circuit with the default Poseidon-16 preimage hasher."""
    return FairExchangeCircuit()


@pytest.fixture
def honest_inputs() -> FairExchangeInputs:
    preimage0, preimage1 = make_colliding_pair()
    return build_instance(preimage0, preimage1)


@pytest.fixture
def instance_factory() -> Callable[..., FairExchangeInputs]:
    return build_instance


@pytest.fixture
def rebinder() -> Callable[[FairExchangeInputs], FairExchangeInputs]:
    return rebind
