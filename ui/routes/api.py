"""API routes for issuer statistics."""

from fastapi import APIRouter, Depends

from utils.timestamp import format_timestamp
from ui.auth import verify_basic_auth

router = APIRouter(prefix="/api/v1", tags=["api"])

# These will be set by app.py
_issuer = None
_health_checker = None


def init(issuer, health_checker):
    """Initialize with issuer and health checker references."""
    global _issuer, _health_checker
    _issuer = issuer
    _health_checker = health_checker


@router.get("/stats")
async def stats(username=Depends(verify_basic_auth)):
    """Return issuance and verification counters (requires basic auth)."""
    options = _issuer.options
    return {
        "timestamp": format_timestamp(),
        "uptime_s": round(_health_checker.uptime, 1),
        "issuer": _issuer.get_stats(),
        "options": {
            "length": options.length,
            "delimiter": options.delimiter,
            "include_timestamp": options.include_timestamp,
        },
    }
