from fastapi import APIRouter, Depends
from models import ProfileUpdate
from routes.deps import current_user
from typing import Any, Dict
import storage
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_THEME = "light"


@router.get("/me/settings")
def get_settings(user_id: str = Depends(current_user)):
    logger.info("GET /me/settings — user: %s", user_id)
    settings = storage.load_settings(user_id)
    prefs = settings["preferences"]
    return {
        "ok": True,
        "profile": {"username": user_id, "displayName": settings["display_name"]},
        "preferences": {"theme": DEFAULT_THEME, **prefs},
    }


@router.patch("/me/preferences")
def patch_preferences(prefs: Dict[str, Any], user_id: str = Depends(current_user)):
    logger.info("PATCH /me/preferences — user: %s, keys: %s", user_id, sorted(prefs))
    merged = storage.merge_preferences(user_id, prefs)
    return {"ok": True, "preferences": merged}


@router.patch("/me/profile")
def patch_profile(body: ProfileUpdate, user_id: str = Depends(current_user)):
    display_name = storage.set_display_name(user_id, body.displayName.strip())
    logger.info("PATCH /me/profile — user: %s, display name set", user_id)
    return {"ok": True, "displayName": display_name}
