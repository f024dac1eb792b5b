"""Identifier issuance and verification routes."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from utils.timestamp import format_timestamp
from ui.auth import verify_basic_auth

router = APIRouter(prefix="/api/v1/ids", tags=["ids"])

# These will be set by app.py
_issuer = None


def init(issuer):
    """Initialize with the issuer reference."""
    global _issuer
    _issuer = issuer


class VerifyRequest(BaseModel):
    id: str


# Declared before /{prefix} so "verify" is never taken as a prefix.
@router.post("/verify")
async def verify_id(body: VerifyRequest, username=Depends(verify_basic_auth)):
    """Check an id's verification token (requires basic auth)."""
    try:
        valid = _issuer.check(body.id)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return {"valid": valid}


@router.post("/{prefix}")
async def issue(prefix: str, count: int = Query(1), username=Depends(verify_basic_auth)):
    """Issue one or more ids for a prefix (requires basic auth)."""
    try:
        ids = _issuer.issue(prefix, count)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return {"ids": ids, "timestamp": format_timestamp()}
