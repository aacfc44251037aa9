# transparency/services/flattener.py
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from .rollup import field_value
from ..utils.logging import service_logger

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Parent fields copied onto a sub-project item when the child has no value of its own
INHERITED_FIELDS = ("supporters", "category", "image")


def completion_timestamp(item: Dict[str, Any]) -> datetime:
    """Completion date of an item; missing or unparsable dates sort as the epoch"""
    completed_date = (item.get("completion_data") or {}).get("completed_date")
    if not completed_date:
        return EPOCH
    try:
        parsed = datetime.fromisoformat(str(completed_date).replace("Z", "+00:00"))
    except ValueError:
        service_logger.warning("Unparsable completion date", extra={
            "item_id": item.get("id"),
            "completed_date": completed_date
        })
        return EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _project_item(project: Any) -> Dict[str, Any]:
    return {
        "id": field_value(project, "id", None),
        "title": field_value(project, "title", ""),
        "subtitle": field_value(project, "subtitle", None),
        "description": field_value(project, "description", ""),
        "category": field_value(project, "category", None),
        "image": field_value(project, "image", None),
        "goal": field_value(project, "goal"),
        "raised": field_value(project, "raised"),
        "supporters": field_value(project, "supporters"),
        "completion_data": field_value(project, "completion_data", None),
        "parent_id": None,
        "parent_title": None,
        "community": None,
    }


def _sub_project_item(parent: Any, child: Dict[str, Any]) -> Dict[str, Any]:
    item = {
        "id": child.get("id"),
        "title": child.get("title", ""),
        "subtitle": child.get("subtitle"),
        "description": child.get("description") or "",
        "category": child.get("category"),
        "image": child.get("image"),
        "goal": child.get("goal") or 0,
        "raised": child.get("raised") or 0,
        "supporters": child.get("supporters"),
        "completion_data": child.get("completion_data"),
        "parent_id": field_value(parent, "id", None),
        "parent_title": field_value(parent, "title", ""),
        "community": child.get("community"),
    }
    for name in INHERITED_FIELDS:
        if item[name] is None:
            item[name] = field_value(parent, name, None)
    return item


def flatten_completed(projects: Iterable[Any]) -> List[Dict[str, Any]]:
    """Expand projects into one list of completed display items, newest first.

    A parent never appears itself; each of its completed sub-projects does,
    tagged with the parent's title.
    """
    items = []
    for project in projects:
        if field_value(project, "is_parent", False):
            for child in field_value(project, "sub_projects", []):
                if child.get("is_completed"):
                    items.append(_sub_project_item(project, child))
        elif field_value(project, "is_completed", False):
            items.append(_project_item(project))

    items.sort(key=completion_timestamp, reverse=True)
    return items
