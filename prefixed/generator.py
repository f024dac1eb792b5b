"""
Prefixed identifier assembly.

Layout: <prefix><delimiter><timestamp:6><random:R>[<token:T>]

The timestamp segment is fixed width, so ids sharing a prefix and
delimiter sort by creation time (ties within one millisecond fall back
to the random segment).
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Callable, Optional

from prefixed.base62 import ZERO, encode_octets, encode_scalar
from prefixed.token import VerifyTokenParams, derive_token
from utils.timestamp import now_millis

TIMESTAMP_LENGTH = 6


@dataclass(frozen=True, init=False)
class Options:
    length: int = 16
    delimiter: str = "_"
    random_bytes: Callable[[int], bytes] = os.urandom
    include_timestamp: bool = True
    include_verify_token: Optional[VerifyTokenParams] = None
    now: Callable[[], int] = now_millis

    def __init__(self, **given):
        known = {f.name for f in fields(self)}
        unknown = set(given) - known
        if unknown:
            raise TypeError(f"Unknown options: {', '.join(sorted(unknown))}")
        for f in fields(self):
            object.__setattr__(self, f.name, given.get(f.name, f.default))
        # Fields the caller passed, as opposed to ones left at their default.
        object.__setattr__(self, "_given", frozenset(given))

    def explicit(self):
        """Fields passed to the constructor, by name."""
        return {name: getattr(self, name) for name in self._given}

    def merge(self, **overrides):
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


DEFAULT_OPTIONS = Options()


def timestamp_segment(millis: int) -> str:
    """Zero-padded to TIMESTAMP_LENGTH; longer encodings are kept whole."""
    return encode_scalar(millis).rjust(TIMESTAMP_LENGTH, ZERO)


def random_length(options: Options) -> int:
    reserved = TIMESTAMP_LENGTH if options.include_timestamp else 0
    return max(options.length - reserved, 1)


def generate(prefix: str, options: Optional[Options] = None, **overrides) -> str:
    """Generate an identifier for `prefix`.

    Keyword overrides (length, delimiter, random_bytes, include_timestamp,
    include_verify_token, now) are applied on top of `options`.
    """
    options = (options or DEFAULT_OPTIONS).merge(**overrides)

    ts_part = timestamp_segment(options.now()) if options.include_timestamp else ""

    count = random_length(options)
    random_part = encode_octets(options.random_bytes(count)[:count])

    id = f"{prefix}{options.delimiter}{ts_part}{random_part}"

    params = options.include_verify_token
    if params:
        return id + derive_token(id, params.key, params.length)
    return id


def create_generator(prefix: str, options: Optional[Options] = None) -> Callable[..., str]:
    """Bind `prefix` and base options.

    A per-call Options overrides exactly the fields it was constructed
    with; keyword overrides are applied last.
    """
    base = options or DEFAULT_OPTIONS

    def generator(options=None, **overrides):
        merged = replace(base, **options.explicit()) if options else base
        return generate(prefix, merged, **overrides)

    return generator

