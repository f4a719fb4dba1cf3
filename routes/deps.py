from fastapi import Header, HTTPException
from typing import Optional
import re
import logging

logger = logging.getLogger(__name__)

# User ids double as directory names under storage.DATA_DIR.
_USER_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def current_user(x_user_id: Optional[str] = Header(default=None)) -> str:
    user_id = (x_user_id or "").strip()
    if not user_id:
        logger.warning("Request without X-User-Id header rejected")
        raise HTTPException(status_code=401, detail="Not logged in")
    if not _USER_ID_RE.match(user_id):
        logger.warning("Request with malformed X-User-Id rejected: %r", user_id)
        raise HTTPException(status_code=401, detail="Invalid user id")
    return user_id
