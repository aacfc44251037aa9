# transparency/services/rollup.py
from dataclasses import dataclass
from typing import Any, Iterable, Mapping


def field_value(record: Any, name: str, default: Any = 0) -> Any:
    """Read a field from a dict or an ORM row, treating None as missing"""
    if isinstance(record, Mapping):
        value = record.get(name)
    else:
        value = getattr(record, name, None)
    return default if value is None else value


@dataclass(frozen=True)
class Progress:
    """Funding progress of a goal-bearing record"""
    ratio: float
    percent: float  # unclamped, used for labels and sorting
    display_percent: float  # clamped to [0, 100] for progress bars


@dataclass(frozen=True)
class Rollup:
    total: float
    count: int


@dataclass(frozen=True)
class Balance:
    received: float
    spent: float
    remaining: float


def progress(raised: float | None, goal: float | None) -> Progress:
    """Compute progress towards a goal; a non-positive goal is 0%"""
    goal = goal or 0
    raised = raised or 0
    if goal <= 0:
        return Progress(ratio=0.0, percent=0.0, display_percent=0.0)

    ratio = raised / goal
    percent = ratio * 100
    return Progress(
        ratio=ratio,
        percent=percent,
        display_percent=min(max(percent, 0.0), 100.0)
    )


def rollup(records: Iterable[Any], field: str = "amount") -> Rollup:
    """Sum a numeric field over records and count them"""
    total = 0.0
    count = 0
    for record in records:
        total += float(field_value(record, field))
        count += 1
    return Rollup(total=total, count=count)


def workspace_balance(workspace: Any) -> Balance:
    """Received, spent and remaining amounts for a giving-circle workspace"""
    received = float(field_value(workspace, "total_received"))
    spent = rollup(field_value(workspace, "expenses", []), "amount").total
    return Balance(received=received, spent=spent, remaining=received - spent)


def is_fully_funded(project: Any) -> bool:
    raised = field_value(project, "raised")
    return bool(raised) and raised >= field_value(project, "goal")
