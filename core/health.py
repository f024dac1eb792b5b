import asyncio
import time
from enum import Enum

from core.errors import HealthCheckError
from prefixed.generator import generate
from prefixed.token import verify
from utils.timestamp import format_timestamp

class Status(Enum):
    OK = "healthy"
    DEGRADED = "degraded"
    FAIL = "unhealthy"

class CheckResult:
    __slots__ = ("name", "status", "msg")
    
    def __init__(self, name, status, msg=""): 
        self.name = name
        self.status = status
        self.msg = msg
    
    def to_dict(self): 
        return {"name": self.name,
                "status": self.status.value,
                "msg": self.msg}

class HealthReport:
    __slots__ = ("status", "checks", "uptime", "timestamp")
    
    def __init__(self, status, checks, uptime=0):
        self.status = status
        self.checks = checks
        self.uptime = uptime
        self.timestamp = format_timestamp()
    
    def to_dict(self):
        return {"status": self.status.value,
                "timestamp": self.timestamp,
                "uptime": round(self.uptime, 1),
                "checks": [check.to_dict() for check in self.checks]}

class HealthChecker:
    def __init__(self, ttl=1.0):
        self._checks = {}
        self._cache = None
        self._cache_time = 0
        self._ttl = ttl
        self._start_time = time.time()

    @property
    def uptime(self):
        return time.time() - self._start_time

    def register(self, name, check_fn, critical=True):
        self._checks[name] = (check_fn, critical)

    async def check(self):
        now = time.time()
        if self._cache and now - self._cache_time < self._ttl:
            return self._cache

        results = []
        for name, (check_fn, is_critical) in self._checks.items():
            try:
                result = await asyncio.wait_for(check_fn(), timeout=5)
            except asyncio.TimeoutError:
                result = CheckResult(name, Status.FAIL, "timeout")
            except Exception as exc:
                result = CheckResult(name, Status.FAIL, str(exc))
            results.append((result, is_critical))

        status = Status.OK
        for result, is_critical in results:
            if result.status == Status.FAIL and is_critical:
                status = Status.FAIL
            elif result.status != Status.OK and status == Status.OK:
                status = Status.DEGRADED

        self._cache = HealthReport(status, [result for result, _ in results], now - self._start_time)
        self._cache_time = now
        return self._cache

# Checks
async def check_event_loop():
    await asyncio.sleep(0)
    return CheckResult("loop", Status.OK)

def create_generator_check(issuer, prefix="health"):
    """Issue a throwaway id; when tokens are on, it must verify."""
    async def check():
        options = issuer.options
        id = generate(prefix, options)
        if not id.startswith(prefix + options.delimiter):
            raise HealthCheckError("malformed id", component="generator")
        params = options.include_verify_token
        if params and not verify(id, params):
            raise HealthCheckError("token self-check failed", component="generator")
        return CheckResult("generator", Status.OK, "signed" if params else "unsigned")
    return check

def create_verify_check(issuer, threshold=0.05):
    async def check():
        stats = issuer.get_stats()
        checked = stats["verified"] + stats["rejected"]
        if checked >= 20 and stats["rejected"] / checked > threshold:
            return CheckResult("verify", Status.DEGRADED, f"{stats['rejected']}/{checked} rejected")
        return CheckResult("verify", Status.OK, f"{checked} checked")
    return check
