"""Grade summary engine: fold a class's grades into per-category rows and an overall percent."""
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

logger = logging.getLogger(__name__)

UNCATEGORIZED_KEY = "uncategorized"
UNCATEGORIZED_LABEL = "Uncategorized"


@dataclass
class CategoryDefinition:
    name: str
    weight_percent: Any = 0
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CategoryDefinition":
        return cls(
            name=data.get("name") or "",
            weight_percent=data.get("weight_percent"),
            id=data.get("id"),
        )


@dataclass
class AssignmentRecord:
    title: str
    points_earned: Any = 0
    points_possible: Any = 0
    category: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AssignmentRecord":
        return cls(
            title=data.get("title") or "",
            points_earned=data.get("points_earned"),
            points_possible=data.get("points_possible"),
            category=data.get("category"),
        )


@dataclass
class CategoryAggregate:
    label: str
    earned: float = 0.0
    possible: float = 0.0


@dataclass
class CategoryRow:
    id: Optional[str]
    name: str
    weight_percent: float
    earned: float
    possible: float
    percent: Optional[float]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "weight_percent": self.weight_percent,
            "earned": self.earned,
            "possible": self.possible,
            "percent": self.percent,
        }


@dataclass
class SummaryResult:
    overall_percent: Optional[float]
    categories: List[CategoryRow] = field(default_factory=list)
    sum_weights: float = 0.0

    def to_dict(self) -> dict:
        """Wire shape served by ``GET /me/classes/{class_id}/summary``."""
        return {
            "overallPercent": self.overall_percent,
            "categories": [row.to_dict() for row in self.categories],
            "sumWeights": self.sum_weights,
        }


CategoryInput = Union[CategoryDefinition, Mapping[str, Any]]
AssignmentInput = Union[AssignmentRecord, Mapping[str, Any]]


def normalize(label: Optional[str]) -> str:
    """Join key shared by category definitions and assignment labels."""
    if not isinstance(label, str):
        return ""
    return label.strip().lower()


def number_or_zero(value: Any) -> float:
    """Coerce *value* to a finite float; anything unusable becomes 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def _points(value: Any) -> float:
    return max(0.0, number_or_zero(value))


def _percent(earned: float, possible: float) -> Optional[float]:
    if possible > 0:
        return (earned / possible) * 100
    return None


def _as_category(item: CategoryInput) -> CategoryDefinition:
    if isinstance(item, CategoryDefinition):
        return item
    return CategoryDefinition.from_dict(item)


def _as_assignment(item: AssignmentInput) -> AssignmentRecord:
    if isinstance(item, AssignmentRecord):
        return item
    return AssignmentRecord.from_dict(item)


def aggregate_by_category(assignments: Sequence[AssignmentRecord]) -> Dict[str, CategoryAggregate]:
    """Return ``{normalized key: aggregate}`` in first-encounter order."""
    buckets: Dict[str, CategoryAggregate] = {}
    for record in assignments:
        key = normalize(record.category) or UNCATEGORIZED_KEY
        bucket = buckets.get(key)
        if bucket is None:
            label = record.category.strip() if normalize(record.category) else UNCATEGORIZED_LABEL
            bucket = CategoryAggregate(label=label)
            buckets[key] = bucket
        bucket.earned += _points(record.points_earned)
        bucket.possible += _points(record.points_possible)
    return buckets


def flat_percent(assignments: Sequence[AssignmentRecord]) -> Optional[float]:
    """Plain earned/possible ratio across every assignment, ignoring categories."""
    total_earned = sum(_points(a.points_earned) for a in assignments)
    total_possible = sum(_points(a.points_possible) for a in assignments)
    return _percent(total_earned, total_possible)


def weighted_percent(rows: Sequence[CategoryRow]) -> Optional[float]:
    """Weighted average over rows that carry weight and have graded work.

    The result is rescaled to the total weight of rows with graded work.
    Returns None when no row qualifies.
    """
    eligible = [r for r in rows if r.weight_percent > 0 and r.percent is not None]
    effective_weight = sum(r.weight_percent for r in eligible)
    if effective_weight <= 0:
        return None
    weighted_sum = sum(r.percent * r.weight_percent / 100 for r in eligible)
    return weighted_sum * (100 / effective_weight)


def compute_summary(categories: Sequence[CategoryInput],
                    assignments: Sequence[AssignmentInput]) -> SummaryResult:
    """Compute the per-category breakdown and overall percent for one class.

    *categories* and *assignments* must already be scoped to a single user and
    class. Both may hold dataclass instances or plain dicts as stored on disk.
    Malformed numbers count as 0; the function never raises for such input.
    """
    definitions = [_as_category(c) for c in categories]
    records = [_as_assignment(a) for a in assignments]

    buckets = aggregate_by_category(records)

    rows: List[CategoryRow] = []
    matched = set()
    sum_weights = 0.0
    for definition in definitions:
        weight = number_or_zero(definition.weight_percent)
        sum_weights += weight
        key = normalize(definition.name)
        matched.add(key)
        bucket = buckets.get(key) or CategoryAggregate(label=definition.name)
        rows.append(CategoryRow(
            id=definition.id,
            name=definition.name,
            weight_percent=weight,
            earned=bucket.earned,
            possible=bucket.possible,
            percent=_percent(bucket.earned, bucket.possible),
        ))

    for key, bucket in buckets.items():
        if key in matched:
            continue
        rows.append(CategoryRow(
            id=None,
            name=bucket.label,
            weight_percent=0.0,
            earned=bucket.earned,
            possible=bucket.possible,
            percent=_percent(bucket.earned, bucket.possible),
        ))

    overall = None
    if sum_weights > 0:
        overall = weighted_percent(rows)
    if overall is None:
        overall = flat_percent(records)

    logger.debug(
        "compute_summary: %d categories, %d assignments, sum_weights=%s, overall=%s",
        len(definitions), len(records), sum_weights, overall,
    )
    return SummaryResult(overall_percent=overall, categories=rows, sum_weights=sum_weights)
