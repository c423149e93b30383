"""
Poseidon sponge authenticated encryption.

A width-4 Poseidon duplex absorbs the message three elements at a time.
The state is keyed with two key words and domain-separated by the nonce and
message length; the final squeeze is the authentication tag.
"""

import logging
from typing import List, Sequence, Tuple

from ..constants import ENCRYPTION_KEY_WORDS, FIELD_MODULUS
from ..errors import CryptographicError, ValidationError
from .poseidon import poseidon_permutation

logger = logging.getLogger(__name__)

RATE = 3
NONCE_LIMIT = 1 << 128


def ciphertext_length(message_length: int) -> int:
    """Ciphertext elements for a message of ``message_length`` elements (padding + tag)."""
    return -(-message_length // RATE) * RATE + 1


def _initial_state(key: Sequence[int], nonce: int, length: int) -> List[int]:
    if len(key) != ENCRYPTION_KEY_WORDS:
        raise ValidationError(
            "Encryption key must have two words", field="key", value=len(key)
        )
    return [0, key[0] % FIELD_MODULUS, key[1] % FIELD_MODULUS, (nonce + length * NONCE_LIMIT) % FIELD_MODULUS]


def poseidon_encrypt(message: Sequence[int], key: Sequence[int], nonce: int) -> List[int]:
    """
    Encrypt ``message`` under ``key`` and ``nonce``.

    Raises:
        CryptographicError: if the nonce does not fit in 128 bits.
    """
    if not 0 <= nonce < NONCE_LIMIT:
        raise CryptographicError("Nonce must be below 2^128", algorithm="poseidon-encryption")

    p = FIELD_MODULUS
    padded = list(message) + [0] * (-len(message) % RATE)
    state = _initial_state(key, nonce, len(message))
    ciphertext: List[int] = []

    for offset in range(0, len(padded), RATE):
        state = poseidon_permutation(state)
        for j in range(RATE):
            state[j + 1] = (state[j + 1] + padded[offset + j]) % p
        ciphertext.extend(state[1:])

    state = poseidon_permutation(state)
    ciphertext.append(state[1])
    return ciphertext


def poseidon_decrypt(
    ciphertext: Sequence[int], key: Sequence[int], nonce: int, length: int
) -> Tuple[List[int], int]:
    """
    Decrypt and authenticate ``ciphertext``.

    Returns:
        ``(message, ok)``; ``ok`` is 1 only if the nonce is in range, the
        padding decrypts to zero and the tag matches. The message is returned
        even when ``ok`` is 0.
    """
    if len(ciphertext) != ciphertext_length(length):
        raise ValidationError(
            "Ciphertext length does not match message length",
            field="ciphertext",
            value=len(ciphertext),
            expected=ciphertext_length(length),
        )

    p = FIELD_MODULUS
    state = _initial_state(key, nonce, length)
    padded: List[int] = []

    for offset in range(0, len(ciphertext) - 1, RATE):
        state = poseidon_permutation(state)
        for j in range(RATE):
            c = ciphertext[offset + j] % p
            padded.append((c - state[j + 1]) % p)
            state[j + 1] = c

    state = poseidon_permutation(state)

    ok = int(
        0 <= nonce < NONCE_LIMIT
        and all(value == 0 for value in padded[length:])
        and state[1] == ciphertext[-1] % p
    )
    if not ok:
        logger.debug("Poseidon decryption rejected ciphertext of %d elements", len(ciphertext))
    return padded[:length], ok
