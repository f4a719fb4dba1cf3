from fastapi import APIRouter, Depends, HTTPException
from models import ClassIn, ClassUpdate
from routes.deps import current_user
import storage
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me/classes")
def get_classes(user_id: str = Depends(current_user)):
    logger.info("GET /me/classes — user: %s", user_id)
    classes = storage.list_classes(user_id)
    logger.info("GET /me/classes — returned %d classes", len(classes))
    return {"ok": True, "classes": classes}


@router.post("/me/classes")
def post_class(body: ClassIn, user_id: str = Depends(current_user)):
    name = body.name.strip()
    if not name:
        logger.warning("POST /me/classes — rejected: empty class name")
        raise HTTPException(status_code=400, detail="Class name is required.")
    record = storage.create_class(user_id, {**body.model_dump(), "name": name})
    logger.info("POST /me/classes — created class %s (%s)", record["id"], name)
    return {"ok": True, "class": record}


@router.put("/me/classes/{class_id}")
def put_class(class_id: str, body: ClassUpdate, user_id: str = Depends(current_user)):
    patch = body.model_dump(exclude_unset=True)
    if "name" in patch:
        if not (patch["name"] or "").strip():
            logger.warning("PUT /me/classes/%s — rejected: empty class name", class_id)
            raise HTTPException(status_code=400, detail="Class name is required.")
        patch["name"] = patch["name"].strip()
    try:
        record = storage.update_class(user_id, class_id, patch)
    except storage.NotFoundError as e:
        logger.warning("PUT /me/classes/%s — %s", class_id, e)
        raise HTTPException(status_code=404, detail="Class not found.")
    logger.info("PUT /me/classes/%s — updated fields: %s", class_id, sorted(patch))
    return {"ok": True, "class": record}


@router.delete("/me/classes/{class_id}")
def delete_class(class_id: str, user_id: str = Depends(current_user)):
    try:
        storage.delete_class(user_id, class_id)
    except storage.NotFoundError as e:
        logger.warning("DELETE /me/classes/%s — %s", class_id, e)
        raise HTTPException(status_code=404, detail="Class not found.")
    logger.info("DELETE /me/classes/%s — deleted with its grades and categories", class_id)
    return {"ok": True}
