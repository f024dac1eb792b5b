"""HMAC-SHA256 verification tokens appended to identifiers."""

import hashlib
import hmac
from dataclasses import dataclass
from typing import Callable, Union

from prefixed.base62 import ZERO, encode_bytes

Key = Union[bytes, str]


@dataclass(frozen=True)
class VerifyTokenParams:
    """Token length and secret key; must match between generate and verify."""

    length: int
    key: Key


def _as_bytes(value: Key) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def derive_token(message: str, key: Key, length: int) -> str:
    """Derive a `length`-char base62 token from HMAC-SHA256(key, message)."""
    digest = hmac.new(_as_bytes(key), _as_bytes(message), hashlib.sha256).digest()
    return encode_bytes(digest).rjust(length, ZERO)[:length]


def constant_time_equals(a: bytes, b: bytes) -> bool:
    """Compare two byte strings without short-circuiting on the first mismatch."""
    if len(a) != len(b):
        return False
    result = 0
    for x, y in zip(a, b):
        result |= x ^ y
    return result == 0


def verify(id: str, params: VerifyTokenParams) -> bool:
    """
    Check the token at the end of `id`.

    Anything malformed (too short, wrong key, tampered, not a string)
    is just False.
    """
    if not isinstance(id, str) or not isinstance(params.length, int) or params.length <= 0:
        return False

    token_start = len(id) - params.length
    if token_start <= 0:
        return False

    id_part, candidate = id[:token_start], id[token_start:]
    try:
        expected = derive_token(id_part, params.key, params.length)
        candidate_bytes = candidate.encode("ascii")
    except (UnicodeEncodeError, TypeError, AttributeError):
        return False

    if len(expected) != len(candidate):
        return False

    return constant_time_equals(expected.encode("ascii"), candidate_bytes)


def create_verifier(params: VerifyTokenParams) -> Callable[[str], bool]:
    """Bind `params` into a one-argument verifier."""
    def verifier(id):
        return verify(id, params)
    return verifier
