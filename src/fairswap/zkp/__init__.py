"""
Constraint logic of the zero-knowledge fair exchange.

A seller proves knowledge of a colliding pair of preimages, encrypted for
the buyer under an ECDH-derived key, with every quasi-public value bound to a
single public SHA-256 commitment.

Components:
- CollisionChecker: Poseidon-16 collision (distinctness checked prover-side only)
- KeyAgreementVerifier: secp256k1 key agreement consistency
- EncryptionVerifier: Poseidon authenticated encryption of the preimages
- PublicInputBinder: transcript hash against the public commitment
- FairExchangeCircuit: conjunction of the four
"""

from .binder import (
    TRANSCRIPT_LAYOUT,
    PublicInputBinder,
    TranscriptField,
    compute_public_commitment,
    digest_halves,
    serialize_ciphertext,
    serialize_nonce,
    serialize_point,
    transcript_bits,
)
from .circuits import (
    CircuitComponent,
    ConstraintCheck,
    ConstraintSystem,
    ConstraintType,
    EnforcementLevel,
    PublicInputs,
    Witness,
    ZKCircuit,
)
from .collision import CollisionChecker
from .core import CircuitConfig, CircuitStatus, EvaluationResult
from .encryption_check import EncryptionVerifier, derive_encryption_key
from .fair_exchange import FairExchangeCircuit
from .inputs import (
    PUBLIC_INPUT_NAMES,
    CurvePoint,
    FairExchangeInputs,
    int_to_limbs,
    limbs_to_int,
)
from .key_agreement import KeyAgreementVerifier

__all__ = [
    # Core types
    "CircuitConfig",
    "CircuitStatus",
    "EvaluationResult",
    # Constraint system
    "ConstraintSystem",
    "ConstraintCheck",
    "ConstraintType",
    "EnforcementLevel",
    "Witness",
    "PublicInputs",
    "CircuitComponent",
    "ZKCircuit",
    # Inputs
    "CurvePoint",
    "FairExchangeInputs",
    "PUBLIC_INPUT_NAMES",
    "int_to_limbs",
    "limbs_to_int",
    # Components
    "CollisionChecker",
    "KeyAgreementVerifier",
    "EncryptionVerifier",
    "derive_encryption_key",
    "PublicInputBinder",
    "TranscriptField",
    "TRANSCRIPT_LAYOUT",
    "transcript_bits",
    "digest_halves",
    "compute_public_commitment",
    "serialize_point",
    "serialize_nonce",
    "serialize_ciphertext",
    # Main
    "FairExchangeCircuit",
]
