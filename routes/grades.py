from fastapi import APIRouter, Depends, HTTPException
from models import GradeIn, GradeUpdate
from routes.deps import current_user
from typing import Optional
import math
import storage
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

POINTS_REQUIRED = "Points earned/possible are required."
POINTS_INVALID = "Points must be finite numbers."


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def _check_points(route: str, values: dict):
    for key in ("points_earned", "points_possible"):
        if key not in values:
            continue
        if values[key] is None:
            logger.warning("%s — rejected: %s is missing", route, key)
            raise HTTPException(status_code=400, detail=POINTS_REQUIRED)
        if not math.isfinite(values[key]):
            logger.warning("%s — rejected: %s is %s", route, key, values[key])
            raise HTTPException(status_code=400, detail=POINTS_INVALID)


@router.get("/me/classes/{class_id}/grades")
def get_grades(class_id: str, user_id: str = Depends(current_user)):
    logger.info("GET /me/classes/%s/grades — loading grades", class_id)
    grades = storage.list_grades(user_id, class_id)
    logger.info("GET /me/classes/%s/grades — returned %d grades", class_id, len(grades))
    return {"ok": True, "grades": grades}


@router.post("/me/classes/{class_id}/grades")
def post_grade(class_id: str, entry: GradeIn, user_id: str = Depends(current_user)):
    route = f"POST /me/classes/{class_id}/grades"
    title = entry.title.strip()
    logger.info("%s — title: %s, earned: %s, possible: %s, category: %s",
                route, title, entry.points_earned, entry.points_possible, entry.category)
    if not title:
        logger.warning("%s — rejected: empty title", route)
        raise HTTPException(status_code=400, detail="Title is required.")
    fields = {**entry.model_dump(), "title": title, "due_date": _blank_to_none(entry.due_date)}
    _check_points(route, fields)
    try:
        record = storage.create_grade(user_id, class_id, fields)
    except storage.NotFoundError as e:
        logger.warning("%s — %s", route, e)
        raise HTTPException(status_code=404, detail="Class not found.")
    logger.info("%s — saved grade %s", route, record["id"])
    return {"ok": True, "grade": record}


@router.put("/me/grades/{grade_id}")
def put_grade(grade_id: str, entry: GradeUpdate, user_id: str = Depends(current_user)):
    route = f"PUT /me/grades/{grade_id}"
    patch = entry.model_dump(exclude_unset=True)
    if "title" in patch:
        if not (patch["title"] or "").strip():
            logger.warning("%s — rejected: empty title", route)
            raise HTTPException(status_code=400, detail="Title is required.")
        patch["title"] = patch["title"].strip()
    if "due_date" in patch:
        patch["due_date"] = _blank_to_none(patch["due_date"])
    _check_points(route, patch)
    try:
        record = storage.update_grade(user_id, grade_id, patch)
    except storage.NotFoundError as e:
        logger.warning("%s — %s", route, e)
        raise HTTPException(status_code=404, detail="Grade not found.")
    logger.info("%s — updated fields: %s", route, sorted(patch))
    return {"ok": True, "grade": record}


@router.delete("/me/grades/{grade_id}")
def delete_grade(grade_id: str, user_id: str = Depends(current_user)):
    try:
        storage.delete_grade(user_id, grade_id)
    except storage.NotFoundError as e:
        logger.warning("DELETE /me/grades/%s — %s", grade_id, e)
        raise HTTPException(status_code=404, detail="Grade not found.")
    logger.info("DELETE /me/grades/%s — deleted", grade_id)
    return {"ok": True}
