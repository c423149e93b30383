"""
Adversarial tests for the fair-exchange circuit.

A dishonest seller controls every private input and tries to make the
verifier accept a ciphertext the buyer cannot use. The circuit must never
raise on such instances; it must report them as unsatisfied.
"""

import pytest

from fairswap.constants import CIPHERTEXT_LENGTH, FIELD_MODULUS, SECP256K1_P
from fairswap.crypto.curve import scalar_mul
from fairswap.crypto.encryption import poseidon_encrypt
from fairswap.zkp import CircuitStatus, CurvePoint, derive_encryption_key, int_to_limbs

from conftest import BUYER_SCALAR, build_instance, make_colliding_pair, rebind


class TestMaliciousSeller:
    """Attacks on the key agreement and encryption."""

    def test_negated_shared_point(self, circuit, honest_inputs):
        """-Qs has the same x (so the same key) but is rejected by key agreement."""
        x, y = honest_inputs.qs.to_affine()
        negated = CurvePoint.from_ints(x, SECP256K1_P - y)
        tampered = rebind(honest_inputs.replace(qs=negated))
        result = circuit.evaluate(tampered)
        assert set(result.failed_components()) == {"key_agreement"}
        assert all(".diff.y" in c.constraint_id for c in result.failed_constraints)

    def test_encrypt_to_self(self, circuit, honest_inputs):
        """Seller encrypts under a key derived from its own public key."""
        own = honest_inputs.qb
        ew = poseidon_encrypt(honest_inputs.message, derive_encryption_key(own.x), honest_inputs.nonce)
        tampered = rebind(honest_inputs.replace(qs=own, ew=tuple(ew)))
        assert not circuit.verify(tampered)

    def test_swapped_public_keys(self, circuit, honest_inputs):
        """Swapping Qa and Qb breaks both scalar relations."""
        tampered = rebind(honest_inputs.replace(qa=honest_inputs.qb, qb=honest_inputs.qa))
        result = circuit.evaluate(tampered)
        assert "key_agreement" in result.failed_components()

    def test_zero_scalar(self, circuit, honest_inputs):
        """db = 0 is rejected without raising."""
        tampered = honest_inputs.replace(db=int_to_limbs(0))
        result = circuit.evaluate(tampered)
        assert result.status == CircuitStatus.UNSATISFIED
        assert result.witness.get_value("key_agreement.shared.valid") == 0

    def test_buyer_key_off_curve(self, circuit, honest_inputs):
        """An off-curve Qa fails closed in key agreement."""
        bogus = CurvePoint.from_ints(5, 7)
        tampered = rebind(honest_inputs.replace(qa=bogus))
        result = circuit.evaluate(tampered)
        assert result.status == CircuitStatus.UNSATISFIED
        assert "key_agreement" in result.failed_components()

    def test_point_at_infinity_encoding(self, circuit, honest_inputs):
        """(0, 0) is not a valid curve point."""
        zero = CurvePoint.from_ints(0, 0)
        tampered = rebind(honest_inputs.replace(qs=zero))
        assert not circuit.verify(tampered)

    def test_all_zero_ciphertext(self, circuit, honest_inputs):
        tampered = rebind(honest_inputs.replace(ew=(0,) * CIPHERTEXT_LENGTH))
        result = circuit.evaluate(tampered)
        assert set(result.failed_components()) == {"encryption"}
        assert result.witness.get_value("encryption.ok") == 0

    def test_maximal_limbs(self, circuit, honest_inputs):
        """Limbs at 2^64 - 1 are accepted as input and rejected by the curve checks."""
        top = (2**64 - 1,) * 4
        tampered = rebind(honest_inputs.replace(qa=CurvePoint(top, top)))
        assert not circuit.verify(tampered)


class TestReplay:
    """Reusing values from another exchange."""

    def test_ciphertext_from_other_buyer(self, circuit):
        """A ciphertext prepared for another buyer does not verify."""
        preimage0, preimage1 = make_colliding_pair(seed=2)
        mine = build_instance(preimage0, preimage1)
        other = build_instance(preimage0, preimage1, buyer_scalar=BUYER_SCALAR + 1)
        tampered = rebind(mine.replace(ew=other.ew))
        assert set(circuit.evaluate(tampered).failed_components()) == {"encryption"}

    def test_commitment_from_other_exchange(self, circuit):
        preimage0, preimage1 = make_colliding_pair(seed=3)
        mine = build_instance(preimage0, preimage1)
        other = build_instance(preimage0, preimage1, nonce=mine.nonce + 1)
        result = circuit.evaluate(mine.replace(hpub=other.hpub))
        assert set(result.failed_components()) == {"binder"}

    def test_nonce_changed_after_encryption(self, circuit, honest_inputs):
        """The nonce is bound both by the ciphertext and by the commitment."""
        tampered = rebind(honest_inputs.replace(nonce=honest_inputs.nonce + 1))
        assert set(circuit.evaluate(tampered).failed_components()) == {"encryption"}

    def test_shared_point_not_in_transcript(self, circuit, honest_inputs):
        """Qs is not committed to; changing it never affects the binder."""
        other = CurvePoint.from_affine(scalar_mul(2, honest_inputs.qs.to_affine()))
        result = circuit.evaluate(honest_inputs.replace(qs=other))
        assert "binder" not in result.failed_components()
        assert "key_agreement" in result.failed_components()


class TestCollisionAttacks:
    """Attacks on the collision relation."""

    def test_self_collision_is_accepted_by_verifier(self, poseidon_circuit):
        """Identical preimages pass every enforced constraint."""
        preimage = [7] * 16
        inputs = build_instance(preimage, list(preimage))
        assert poseidon_circuit.verify(inputs)
        assert poseidon_circuit.evaluate(inputs).status == CircuitStatus.SANITY_FAILED

    @pytest.mark.parametrize("index", [0, 7, 15])
    def test_field_wraparound_does_not_collide(self, poseidon_circuit, index):
        """Elements differing by p are rejected as out of range, not reduced."""
        preimage0, _ = make_colliding_pair()
        data = build_instance(preimage0, list(preimage0)).to_dict()
        data["preimage1"][index] = str(int(data["preimage1"][index]) + FIELD_MODULUS)
        assert poseidon_circuit.evaluate(data).status == CircuitStatus.INVALID_INPUT
