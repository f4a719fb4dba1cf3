from fastapi import APIRouter, Depends, HTTPException
from models import CategoryIn, CategoryUpdate
from routes.deps import current_user
from typing import Optional
import math
import storage
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

WEIGHT_ERROR = "Weight must be 1–100."


def _valid_weight(weight: Optional[float]) -> bool:
    return weight is not None and math.isfinite(weight) and 0 < weight <= 100


@router.get("/me/classes/{class_id}/categories")
def get_categories(class_id: str, user_id: str = Depends(current_user)):
    logger.info("GET /me/classes/%s/categories — loading categories", class_id)
    categories = storage.list_categories(user_id, class_id)
    logger.info("GET /me/classes/%s/categories — returned %d categories", class_id, len(categories))
    return {"ok": True, "categories": categories}


@router.post("/me/classes/{class_id}/categories")
def post_category(class_id: str, body: CategoryIn, user_id: str = Depends(current_user)):
    name = body.name.strip()
    logger.info("POST /me/classes/%s/categories — name: %s, weight: %s", class_id, name, body.weight_percent)
    if not name:
        logger.warning("POST /me/classes/%s/categories — rejected: empty name", class_id)
        raise HTTPException(status_code=400, detail="Category name is required.")
    if not _valid_weight(body.weight_percent):
        logger.warning("POST /me/classes/%s/categories — rejected weight: %s", class_id, body.weight_percent)
        raise HTTPException(status_code=400, detail=WEIGHT_ERROR)
    try:
        record = storage.create_category(user_id, class_id, {"name": name, "weight_percent": body.weight_percent})
    except storage.NotFoundError as e:
        logger.warning("POST /me/classes/%s/categories — %s", class_id, e)
        raise HTTPException(status_code=404, detail="Class not found.")
    except storage.DuplicateCategoryError as e:
        logger.warning("POST /me/classes/%s/categories — %s", class_id, e)
        raise HTTPException(status_code=409, detail=str(e))
    logger.info("POST /me/classes/%s/categories — created category %s", class_id, record["id"])
    return {"ok": True, "category": record}


@router.put("/me/categories/{category_id}")
def put_category(category_id: str, body: CategoryUpdate, user_id: str = Depends(current_user)):
    patch = body.model_dump(exclude_unset=True)
    if "name" in patch:
        if not (patch["name"] or "").strip():
            logger.warning("PUT /me/categories/%s — rejected: empty name", category_id)
            raise HTTPException(status_code=400, detail="Category name is required.")
        patch["name"] = patch["name"].strip()
    if "weight_percent" in patch and not _valid_weight(patch["weight_percent"]):
        logger.warning("PUT /me/categories/%s — rejected weight: %s", category_id, patch["weight_percent"])
        raise HTTPException(status_code=400, detail=WEIGHT_ERROR)
    try:
        record = storage.update_category(user_id, category_id, patch)
    except storage.NotFoundError as e:
        logger.warning("PUT /me/categories/%s — %s", category_id, e)
        raise HTTPException(status_code=404, detail="Category not found.")
    except storage.DuplicateCategoryError as e:
        logger.warning("PUT /me/categories/%s — %s", category_id, e)
        raise HTTPException(status_code=409, detail=str(e))
    logger.info("PUT /me/categories/%s — updated fields: %s", category_id, sorted(patch))
    return {"ok": True, "category": record}


@router.delete("/me/categories/{category_id}")
def delete_category(category_id: str, user_id: str = Depends(current_user)):
    try:
        storage.delete_category(user_id, category_id)
    except storage.NotFoundError as e:
        logger.warning("DELETE /me/categories/%s — %s", category_id, e)
        raise HTTPException(status_code=404, detail="Category not found.")
    logger.info("DELETE /me/categories/%s — deleted", category_id)
    return {"ok": True}
