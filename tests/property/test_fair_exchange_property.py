"""
Property-based tests for the fair-exchange circuit using Hypothesis.

Each example runs several secp256k1 multiplications and Poseidon
permutations, so example counts are kept small.
"""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from fairswap.constants import FIELD_MODULUS, SECP256K1_N
from fairswap.crypto.bits import bits_to_bytes, bytes_to_bits, from_bits, to_bits
from fairswap.crypto.encryption import poseidon_decrypt, poseidon_encrypt
from fairswap.zkp import CircuitStatus, FairExchangeCircuit, int_to_limbs, limbs_to_int

from conftest import additive_hash, build_instance, rebind

pytestmark = pytest.mark.slow

field_elements = st.integers(min_value=0, max_value=FIELD_MODULUS - 1)
scalars = st.integers(min_value=1, max_value=SECP256K1_N - 1)
nonces = st.integers(min_value=0, max_value=2**128 - 1)

CIRCUIT_SETTINGS = settings(
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)


@st.composite
def colliding_pairs(draw):
    """Two distinct preimages with equal additive hash."""
    preimage0 = draw(st.lists(field_elements, min_size=16, max_size=16))
    delta = draw(st.integers(min_value=1, max_value=FIELD_MODULUS - 1))
    i, j = draw(st.lists(st.integers(0, 15), min_size=2, max_size=2, unique=True))
    preimage1 = list(preimage0)
    preimage1[i] = (preimage1[i] + delta) % FIELD_MODULUS
    preimage1[j] = (preimage1[j] - delta) % FIELD_MODULUS
    return preimage0, preimage1


class TestCircuitProperties:
    """Completeness and soundness over random instances."""

    @CIRCUIT_SETTINGS
    @given(pair=colliding_pairs(), db=scalars, buyer=scalars, nonce=nonces)
    def test_honest_instances_verify(self, pair, db, buyer, nonce):
        """Every honestly built instance is satisfied."""
        circuit = FairExchangeCircuit(preimage_hasher=additive_hash)
        inputs = build_instance(pair[0], pair[1], db=db, buyer_scalar=buyer, nonce=nonce)
        assert circuit.evaluate(inputs).status == CircuitStatus.SATISFIED

    @CIRCUIT_SETTINGS
    @given(
        pair=colliding_pairs(),
        index=st.integers(0, 33),
        delta=st.integers(min_value=1, max_value=FIELD_MODULUS - 1),
    )
    def test_any_ciphertext_change_is_caught(self, pair, index, delta):
        """Changing any ew element fails the encryption component."""
        circuit = FairExchangeCircuit(preimage_hasher=additive_hash)
        inputs = build_instance(pair[0], pair[1])
        ew = list(inputs.ew)
        ew[index] = (ew[index] + delta) % FIELD_MODULUS
        result = circuit.evaluate(rebind(inputs.replace(ew=tuple(ew))))
        assert result.failed_components() == ["encryption"]

    @CIRCUIT_SETTINGS
    @given(pair=colliding_pairs(), bit=st.integers(0, 255))
    def test_any_commitment_bit_is_caught(self, pair, bit):
        """Flipping any bit of Hpub fails the binder."""
        circuit = FairExchangeCircuit(preimage_hasher=additive_hash)
        inputs = build_instance(pair[0], pair[1])
        hpub = list(inputs.hpub)
        hpub[bit // 128] ^= 1 << (bit % 128)
        result = circuit.evaluate(inputs.replace(hpub=tuple(hpub)))
        assert result.failed_components() == ["binder"]


class TestPrimitiveProperties:
    """Cheap properties of the building blocks."""

    @settings(max_examples=50, deadline=None)
    @given(value=st.integers(min_value=0, max_value=2**256 - 1))
    def test_limbs_round_trip(self, value):
        assert limbs_to_int(int_to_limbs(value)) == value

    @settings(max_examples=50, deadline=None)
    @given(value=st.integers(min_value=0, max_value=2**256 - 1))
    def test_bits_round_trip(self, value):
        assert from_bits(to_bits(value, 256)) == value

    @settings(max_examples=50, deadline=None)
    @given(data=st.binary(min_size=0, max_size=64))
    def test_bytes_round_trip(self, data):
        assert bits_to_bytes(bytes_to_bits(data)) == data

    @settings(max_examples=10, deadline=None)
    @given(
        message=st.lists(field_elements, min_size=1, max_size=8),
        key=st.tuples(nonces, nonces),
        nonce=nonces,
    )
    def test_decrypt_inverts_encrypt(self, message, key, nonce):
        ciphertext = poseidon_encrypt(message, key, nonce)
        recovered, ok = poseidon_decrypt(ciphertext, key, nonce, len(message))
        assert ok == 1
        assert recovered == message
