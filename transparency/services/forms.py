# transparency/services/forms.py
import math
import time
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional
from uuid import uuid4

from sqlalchemy.sql import func

# Evaluated by the database when the write is flushed
SERVER_TIMESTAMP = func.now()

PROJECT_TEXT_FIELDS = ("title", "subtitle", "tagline", "description", "call_to_action", "image", "tag")
PROJECT_FLAGS = ("is_active", "is_live", "is_completed", "is_parent")
PARTNER_TEXT_FIELDS = ("name", "logo", "website", "project", "note", "date")
WORKSPACE_TEXT_FIELDS = ("name", "logo", "date", "note")
IMAGE_LIST_FIELDS = ("before_images", "after_images", "progress_images")


class FormValidationError(ValueError):
    """Raised when a form is rejected before anything is written"""


def today() -> str:
    return date.today().isoformat()


def to_number(value: Any, field: str = "value") -> float:
    """Coerce a form value to a float; blanks become 0"""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            raise FormValidationError(f"{field} must be a number")
    if not math.isfinite(number):
        raise FormValidationError(f"{field} must be a number")
    return number


def to_count(value: Any, field: str = "value") -> int:
    return int(to_number(value, field))


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _blank(value: Any) -> bool:
    return not _text(value).strip()


def clean_urls(urls: Optional[Iterable[str]]) -> List[str]:
    """Drop blank and whitespace-only image URLs"""
    return [url for url in (urls or []) if not _blank(url)]


def clean_testimonials(testimonials: Optional[Iterable[Mapping[str, Any]]]) -> List[Dict[str, str]]:
    """Keep testimonials that carry both a name and a text"""
    cleaned = []
    for testimonial in testimonials or []:
        if _blank(testimonial.get("name")) or _blank(testimonial.get("text")):
            continue
        cleaned.append({
            "name": _text(testimonial.get("name")),
            "text": _text(testimonial.get("text")),
            "role": _text(testimonial.get("role")),
        })
    return cleaned


def with_timestamps(payload: Dict[str, Any], creating: bool) -> Dict[str, Any]:
    payload["updated_at"] = SERVER_TIMESTAMP
    if creating:
        payload["created_at"] = SERVER_TIMESTAMP
    return payload


def project_document(form: Mapping[str, Any], creating: bool) -> Dict[str, Any]:
    """Map the project form to a document write"""
    goal = to_number(form.get("goal"), "goal")
    if _blank(form.get("title")) or _blank(form.get("description")) or goal <= 0:
        raise FormValidationError("Please fill in all required fields (Title, Description, Goal)")

    payload = {name: _text(form.get(name)) for name in PROJECT_TEXT_FIELDS}
    payload["category"] = _text(form.get("category")) or "water"
    payload["goal"] = goal
    payload["raised"] = to_number(form.get("raised"), "raised")
    payload["supporters"] = to_count(form.get("supporters"), "supporters")
    for flag in PROJECT_FLAGS:
        if flag in form and form[flag] is not None:
            payload[flag] = bool(form[flag])
    if creating:
        payload.setdefault("is_active", True)
        payload.setdefault("is_live", False)
        payload.setdefault("is_completed", False)
        payload.setdefault("is_parent", False)
        payload["sub_projects"] = []
    return with_timestamps(payload, creating)


def completion_data(form: Mapping[str, Any]) -> Dict[str, Any]:
    """Clean completion form state into the embedded completion record"""
    stats = form.get("impact_stats") or {}
    data = {
        "completed_date": _text(form.get("completed_date")) or today(),
        "completion_story": _text(form.get("completion_story")),
        "testimonials": clean_testimonials(form.get("testimonials")),
        "impact_stats": {
            "people_helped": to_count(stats.get("people_helped"), "people_helped"),
            "items_distributed": to_count(stats.get("items_distributed"), "items_distributed"),
            "custom_metric": _text(stats.get("custom_metric")),
        },
    }
    for name in IMAGE_LIST_FIELDS:
        data[name] = clean_urls(form.get(name))
    return data


def completion_document(form: Mapping[str, Any]) -> Dict[str, Any]:
    """Document write that marks a project completed"""
    return with_timestamps({
        "is_completed": True,
        "completion_data": completion_data(form),
    }, creating=False)


def sub_project_entry(form: Mapping[str, Any], existing: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Embedded sub-project built from its form, keeping the id and completion of an existing entry"""
    if _blank(form.get("title")):
        raise FormValidationError("Sub-project title is required")
    goal = to_number(form.get("goal"), "goal")
    if goal < 0:
        raise FormValidationError("goal must not be negative")

    entry = dict(existing or {})
    entry.update({
        "id": entry.get("id") or uuid4().hex,
        "title": _text(form.get("title")),
        "community": _text(form.get("community")),
        "description": _text(form.get("description")),
        "goal": goal,
        "raised": to_number(form.get("raised"), "raised"),
        "is_completed": bool(entry.get("is_completed", False) if form.get("is_completed") is None else form["is_completed"]),
    })
    entry.setdefault("completion_data", None)
    return entry


def partner_document(form: Mapping[str, Any], creating: bool) -> Dict[str, Any]:
    if _blank(form.get("name")):
        raise FormValidationError("Partner name is required")

    payload = {name: _text(form.get(name)) for name in PARTNER_TEXT_FIELDS}
    payload["date"] = payload["date"] or today()
    payload["amount"] = to_number(form.get("amount"), "amount")
    payload["featured"] = bool(form.get("featured", False))
    return with_timestamps(payload, creating)


def workspace_document(form: Mapping[str, Any], creating: bool) -> Dict[str, Any]:
    if _blank(form.get("name")):
        raise FormValidationError("Workspace name is required")

    payload = {name: _text(form.get(name)) for name in WORKSPACE_TEXT_FIELDS}
    payload["total_received"] = to_number(form.get("total_received"), "total_received")
    if creating:
        payload["expenses"] = []
    return with_timestamps(payload, creating)


def generate_expense_id() -> str:
    return f"exp_{int(time.time() * 1000)}_{uuid4().hex[:4]}"


def expense_entry(form: Mapping[str, Any], existing: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Embedded workspace expense built from its form"""
    if _blank(form.get("description")):
        raise FormValidationError("Expense description is required")

    entry = dict(existing or {})
    entry.update({
        "id": entry.get("id") or generate_expense_id(),
        "description": _text(form.get("description")),
        "amount": to_number(form.get("amount"), "amount"),
        "date": _text(form.get("date")) or today(),
        "note": _text(form.get("note")),
    })
    return entry


def find_entry(entries: Iterable[Mapping[str, Any]], entry_id: str) -> Optional[Dict[str, Any]]:
    for entry in entries or []:
        if entry.get("id") == entry_id:
            return dict(entry)
    return None


def replace_entry(entries: Iterable[Mapping[str, Any]], entry: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """New list with the entry sharing `entry['id']` replaced"""
    return [dict(entry) if current.get("id") == entry["id"] else dict(current) for current in entries or []]


def remove_entry(entries: Iterable[Mapping[str, Any]], entry_id: str) -> List[Dict[str, Any]]:
    return [dict(current) for current in entries or [] if current.get("id") != entry_id]


def apply_document(row: Any, payload: Mapping[str, Any]) -> Any:
    """Write every payload field onto a row; last writer wins"""
    for field, value in payload.items():
        setattr(row, field, value)
    return row
