from fastapi import APIRouter, Depends, HTTPException
from models import SummaryResponse
from routes.deps import current_user
from summary import compute_summary
import storage
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def load_class_summary(user_id: str, class_id: str):
    """Read one class's categories and grades and run the summary engine on them."""
    storage.get_class(user_id, class_id)
    categories = storage.list_categories(user_id, class_id)
    grades = storage.list_grades(user_id, class_id)
    return compute_summary(categories, grades)


@router.get("/me/classes/{class_id}/summary", response_model=SummaryResponse)
def get_summary(class_id: str, user_id: str = Depends(current_user)):
    logger.info("GET /me/classes/%s/summary — computing summary", class_id)
    try:
        result = load_class_summary(user_id, class_id)
    except storage.NotFoundError as e:
        logger.warning("GET /me/classes/%s/summary — %s", class_id, e)
        raise HTTPException(status_code=404, detail="Class not found.")
    logger.info("GET /me/classes/%s/summary — overall: %s, rows: %d, sum of weights: %s",
                class_id, result.overall_percent, len(result.categories), result.sum_weights)
    return {"ok": True, **result.to_dict()}
