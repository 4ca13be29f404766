"""HTTP Basic authentication for the admin routes."""

import base64
import binascii
import logging

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

import crud
from db import get_db

logger = logging.getLogger(__name__)


def parse_basic_auth(header: str | None) -> tuple[str, str] | None:
    """Decode ``Basic base64(username:password)``; None if the header is unusable."""
    if not header or not header.startswith("Basic "):
        return None
    try:
        decoded = base64.b64decode(header[6:].strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


def require_admin(request: Request, db: Session = Depends(get_db)) -> dict:
    """Check the Basic credentials against admin_users on every request."""
    credentials = parse_basic_auth(request.headers.get("Authorization"))
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")

    user = crud.authenticate(db, *credentials)
    if user is None:
        logger.info("Rejected admin request for user %r", credentials[0])
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return user
