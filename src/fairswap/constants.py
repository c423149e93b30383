"""Protocol constants for the fair-exchange circuit."""

# BN254 scalar field: the native field of the proof system.
FIELD_MODULUS = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001

# secp256k1
SECP256K1_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SECP256K1_A = 0
SECP256K1_B = 7
SECP256K1_GX = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
SECP256K1_GY = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8

# Limb representation of 256-bit integers (little-endian limbs)
LIMB_BITS = 64
LIMB_COUNT = 4

PREIMAGE_LENGTH = 16
MESSAGE_LENGTH = 2 * PREIMAGE_LENGTH
CIPHERTEXT_LENGTH = 34
ENCRYPTION_KEY_WORDS = 2

# Transcript serialization widths, in bits
POINT_BITS = 2 * LIMB_COUNT * LIMB_BITS
NONCE_BITS = 256
CIPHERTEXT_ELEMENT_BITS = 256
TRANSCRIPT_BITS = 2 * POINT_BITS + NONCE_BITS + CIPHERTEXT_LENGTH * CIPHERTEXT_ELEMENT_BITS
DIGEST_BITS = 256
DIGEST_HALF_BITS = 128
