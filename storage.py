"""JSON-file persistence for classes, grades, categories and settings, one directory per user."""
import json
import os
import threading
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from summary import normalize

DATA_DIR = os.environ.get("GRADEBOOK_DATA_DIR", "./data")

# Guards every read and every load-modify-save of the JSON files.
_lock = threading.RLock()


class StorageError(Exception):
    pass


class NotFoundError(StorageError):
    pass


class DuplicateCategoryError(StorageError):
    pass


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _user_dir(user_id: str) -> str:
    return os.path.join(DATA_DIR, "users", user_id)


def _load(user_id: str, kind: str, default=None):
    path = os.path.join(_user_dir(user_id), f"{kind}.json")
    with _lock:
        if not os.path.exists(path):
            return [] if default is None else default
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)


def _save(user_id: str, kind: str, data):
    user_dir = _user_dir(user_id)
    os.makedirs(user_dir, exist_ok=True)
    with open(os.path.join(user_dir, f"{kind}.json"), "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def _find(items: List[dict], item_id: str, kind: str) -> dict:
    for item in items:
        if item.get("id") == item_id:
            return item
    raise NotFoundError(f"{kind} not found: {item_id}")


# ── Classes ───────────────────────────────────────────────────────────────────

def _class_sort_key(c: dict):
    period = c.get("period")
    return (period is None, period if period is not None else 0, (c.get("name") or "").lower())


def list_classes(user_id: str) -> List[dict]:
    return sorted(_load(user_id, "classes"), key=_class_sort_key)


def get_class(user_id: str, class_id: str) -> dict:
    return _find(_load(user_id, "classes"), class_id, "Class")


def create_class(user_id: str, fields: dict) -> dict:
    with _lock:
        classes = _load(user_id, "classes")
        record = {
            "id": _new_id(),
            "name": fields["name"],
            "period": fields.get("period"),
            "teacher": fields.get("teacher"),
            "weight": fields.get("weight"),
            "created_at": _now(),
        }
        classes.append(record)
        _save(user_id, "classes", classes)
    return record


def update_class(user_id: str, class_id: str, patch: dict) -> dict:
    with _lock:
        classes = _load(user_id, "classes")
        record = _find(classes, class_id, "Class")
        record.update(patch)
        _save(user_id, "classes", classes)
    return record


def delete_class(user_id: str, class_id: str):
    """Remove a class together with its grades and categories."""
    with _lock:
        classes = _load(user_id, "classes")
        _find(classes, class_id, "Class")
        _save(user_id, "classes", [c for c in classes if c["id"] != class_id])
        for kind in ("grades", "categories"):
            items = _load(user_id, kind)
            _save(user_id, kind, [i for i in items if i.get("class_id") != class_id])


# ── Grades ────────────────────────────────────────────────────────────────────

def list_grades(user_id: str, class_id: str) -> List[dict]:
    """Grades of one class ordered by due date, undated ones last."""
    grades = [g for g in _load(user_id, "grades") if g.get("class_id") == class_id]
    return sorted(grades, key=lambda g: (not g.get("due_date"), g.get("due_date") or ""))


def create_grade(user_id: str, class_id: str, fields: dict) -> dict:
    with _lock:
        get_class(user_id, class_id)
        grades = _load(user_id, "grades")
        record = {
            "id": _new_id(),
            "class_id": class_id,
            "title": fields["title"],
            "points_earned": float(fields["points_earned"]),
            "points_possible": float(fields["points_possible"]),
            "category": fields.get("category"),
            "due_date": fields.get("due_date"),
            "created_at": _now(),
        }
        grades.append(record)
        _save(user_id, "grades", grades)
    return record


def update_grade(user_id: str, grade_id: str, patch: dict) -> dict:
    with _lock:
        grades = _load(user_id, "grades")
        record = _find(grades, grade_id, "Grade")
        record.update(patch)
        _save(user_id, "grades", grades)
    return record


def delete_grade(user_id: str, grade_id: str):
    with _lock:
        grades = _load(user_id, "grades")
        _find(grades, grade_id, "Grade")
        _save(user_id, "grades", [g for g in grades if g["id"] != grade_id])


# ── Categories ────────────────────────────────────────────────────────────────

def list_categories(user_id: str, class_id: str) -> List[dict]:
    cats = [c for c in _load(user_id, "categories") if c.get("class_id") == class_id]
    return sorted(cats, key=lambda c: (c.get("name") or "").lower())


def _check_unique_name(categories: List[dict], class_id: str, name: str,
                       exclude_id: Optional[str] = None):
    key = normalize(name)
    for c in categories:
        if c.get("class_id") != class_id or c.get("id") == exclude_id:
            continue
        if normalize(c.get("name")) == key:
            raise DuplicateCategoryError(f"Category already exists: {c.get('name')}")


def create_category(user_id: str, class_id: str, fields: dict) -> dict:
    with _lock:
        get_class(user_id, class_id)
        categories = _load(user_id, "categories")
        _check_unique_name(categories, class_id, fields["name"])
        record = {
            "id": _new_id(),
            "class_id": class_id,
            "name": fields["name"],
            "weight_percent": float(fields["weight_percent"]),
            "created_at": _now(),
        }
        categories.append(record)
        _save(user_id, "categories", categories)
    return record


def update_category(user_id: str, category_id: str, patch: dict) -> dict:
    with _lock:
        categories = _load(user_id, "categories")
        record = _find(categories, category_id, "Category")
        if "name" in patch:
            _check_unique_name(categories, record["class_id"], patch["name"], exclude_id=category_id)
        record.update(patch)
        _save(user_id, "categories", categories)
    return record


def delete_category(user_id: str, category_id: str):
    with _lock:
        categories = _load(user_id, "categories")
        _find(categories, category_id, "Category")
        _save(user_id, "categories", [c for c in categories if c["id"] != category_id])


# ── Settings ──────────────────────────────────────────────────────────────────

def load_settings(user_id: str) -> dict:
    """Return {"display_name": str, "preferences": dict} for *user_id*."""
    data = _load(user_id, "settings", default={})
    return {
        "display_name": data.get("display_name") or "",
        "preferences": data.get("preferences") or {},
    }


def save_settings(user_id: str, settings: dict):
    with _lock:
        _save(user_id, "settings", settings)


def merge_preferences(user_id: str, prefs: dict) -> dict:
    """Shallow-merge *prefs* into the stored preferences and return the result."""
    with _lock:
        settings = load_settings(user_id)
        settings["preferences"] = {**settings["preferences"], **prefs}
        save_settings(user_id, settings)
    return settings["preferences"]


def set_display_name(user_id: str, display_name: str) -> str:
    with _lock:
        settings = load_settings(user_id)
        settings["display_name"] = display_name
        save_settings(user_id, settings)
    return display_name
