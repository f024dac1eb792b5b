from prefixed.base62 import ALPHABET, encode_bytes, encode_scalar
from prefixed.generator import Options, create_generator, generate
from prefixed.token import VerifyTokenParams, create_verifier, derive_token, verify

__all__ = [
    "ALPHABET",
    "encode_bytes",
    "encode_scalar",
    "Options",
    "generate",
    "create_generator",
    "VerifyTokenParams",
    "derive_token",
    "verify",
    "create_verifier",
]
