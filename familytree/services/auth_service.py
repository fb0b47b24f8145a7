import logging
from fastapi import HTTPException
from familytree.core.config import settings
from familytree.core.security import verify_password, create_access_token

logger = logging.getLogger(__name__)

FAMILY_SUBJECT = "family"

def login(password: str) -> str:
    try:
        ok = verify_password(password, settings.ACCESS_PASSWORD_HASH)
    except ValueError:
        # passlib raises UnknownHashError (a ValueError) for empty or malformed hashes
        logger.error("ACCESS_PASSWORD_HASH is not a recognised password hash")
        ok = False
    if not ok:
        logger.info("Rejected login attempt")
        raise HTTPException(status_code=401, detail="Incorrect password")
    return create_access_token(FAMILY_SUBJECT)
