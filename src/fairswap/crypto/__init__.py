"""
Cryptographic building blocks for the fair-exchange circuit.

These are the gadgets the constraint logic treats as audited collaborators:
- Bit codec (field elements, limbs, points, SHA-256 byte packing)
- SHA-256 over bit streams
- Poseidon permutation and hash over BN254
- Poseidon sponge authenticated encryption
- secp256k1 scalar multiplication and key generation
"""

from .bits import (
    bits_to_bytes,
    bytes_to_bits,
    from_bits,
    limbs_to_bits,
    msb_bits_to_int,
    point_to_bits,
    to_bits,
)
from .curve import (
    GENERATOR,
    generate_keypair,
    is_on_curve,
    point_add,
    public_key_from_scalar,
    scalar_mul,
)
from .encryption import ciphertext_length, poseidon_decrypt, poseidon_encrypt
from .hashing import sha256_bits
from .poseidon import PoseidonParams, get_params, poseidon_hash, poseidon_permutation

__all__ = [
    # Bits
    "to_bits",
    "from_bits",
    "limbs_to_bits",
    "point_to_bits",
    "bits_to_bytes",
    "bytes_to_bits",
    "msb_bits_to_int",
    # Hashing
    "sha256_bits",
    "poseidon_hash",
    "poseidon_permutation",
    "get_params",
    "PoseidonParams",
    # Encryption
    "poseidon_encrypt",
    "poseidon_decrypt",
    "ciphertext_length",
    # Curve
    "GENERATOR",
    "scalar_mul",
    "point_add",
    "is_on_curve",
    "public_key_from_scalar",
    "generate_keypair",
]
