"""Service-side wrapper around the generator: bound options plus counters."""

import re
import threading

from prefixed.generator import generate
from prefixed.token import verify

PREFIX_PATTERN = re.compile(r"[A-Za-z0-9-]{1,32}")
MAX_BATCH = 1000


class IdIssuer:
    def __init__(self, options, logger=None):
        self.options = options
        self._logger = logger
        self._lock = threading.Lock()
        self.issued = 0
        self.verified = 0
        self.rejected = 0

    @property
    def verify_enabled(self):
        return bool(self.options.include_verify_token)

    def issue(self, prefix, count=1):
        """Issue `count` ids for `prefix`. Raises ValueError on bad input."""
        if not PREFIX_PATTERN.fullmatch(prefix):
            raise ValueError(f"Invalid prefix: {prefix!r}")
        if not 1 <= count <= MAX_BATCH:
            raise ValueError(f"count must be between 1 and {MAX_BATCH}")

        ids = [generate(prefix, self.options) for _ in range(count)]
        with self._lock:
            self.issued += count
        if self._logger:
            self._logger.debug("Issued ids", prefix=prefix, count=count)
        return ids

    def check(self, id):
        """Verify `id` against the configured token params."""
        params = self.options.include_verify_token
        if not params:
            raise LookupError("Verification tokens are not configured")

        ok = verify(id, params)
        with self._lock:
            if ok:
                self.verified += 1
            else:
                self.rejected += 1
        if not ok and self._logger:
            self._logger.info("Verification failed", length=len(id) if isinstance(id, str) else None)
        return ok

    def get_stats(self):
        with self._lock:
            return {
                "issued": self.issued,
                "verified": self.verified,
                "rejected": self.rejected,
                "verify_enabled": self.verify_enabled,
            }
