"""
Base62 encoding for sortable identifiers.

The alphabet is ordered 0-9 < A-Z < a-z, which is also ASCII order, so
fixed-width encodings compare the same way as the numbers they encode.
"""

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)
ZERO = ALPHABET[0]


def encode_scalar(n: int) -> str:
    """Encode a non-negative integer, most significant digit first."""
    if n < 0:
        raise ValueError("Number must be non-negative")

    chars = []
    while True:
        n, remainder = divmod(n, BASE)
        chars.append(ALPHABET[remainder])
        if n == 0:
            break

    return "".join(reversed(chars))


def encode_bytes(data: bytes) -> str:
    """
    Encode a byte string read as one big-endian unsigned integer.

    Digits are kept little-endian and every byte is folded in with a
    multiply-by-256-and-add, carrying in base 62. Equal-length outputs
    compare like the byte strings' magnitudes.
    """
    if not data:
        return ZERO

    digits = [0]
    for byte in data:
        carry = byte
        for i, digit in enumerate(digits):
            carry, digits[i] = divmod(digit * 256 + carry, BASE)
        while carry:
            carry, digit = divmod(carry, BASE)
            digits.append(digit)

    return "".join(ALPHABET[digit] for digit in reversed(digits))


def encode_octets(data: bytes) -> str:
    """Map each octet to a symbol independently (octet mod 62)."""
    return "".join(ALPHABET[byte % BASE] for byte in data)
