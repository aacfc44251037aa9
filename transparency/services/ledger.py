# transparency/services/ledger.py
import csv
import io
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from .rollup import field_value, progress, rollup
from ..utils.formatting import (
    format_currency, format_numeric_date, format_short_date, iso_date, parse_date, plain_number
)

CSV_HEADERS = ["Date", "Type", "Description", "Project", "Amount", "Category", "Receipt/Payment"]
TRANSACTION_FILTERS = ("all", "income", "expense")


def _iso(value: Any) -> Optional[str]:
    if isinstance(value, datetime):
        return value.isoformat()
    return None


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _with_labels(transaction: Dict[str, Any]) -> Dict[str, Any]:
    transaction["date_label"] = format_short_date(transaction["date"])
    transaction["amount_label"] = format_currency(transaction["amount"])
    return transaction


def donation_transaction(donation: Any) -> Dict[str, Any]:
    """Ledger view of a donation (income)"""
    donor_email = field_value(donation, "donor_email", None)
    return _with_labels({
        "id": field_value(donation, "id", ""),
        "type": "income",
        "date": _iso(field_value(donation, "created_at", None)) or _now_iso(),
        "category": "donation",
        "description": f"Donation from {donor_email or 'Anonymous'}",
        "amount": float(field_value(donation, "amount")),
        "project": field_value(donation, "project_id", None) or "General",
        "receipt": None,
        "payment_method": "Stripe",
        "donor_email": donor_email,
    })


def expense_transaction(expense: Any) -> Dict[str, Any]:
    """Ledger view of an expense; falls back to its own date field, then now"""
    date = _iso(field_value(expense, "created_at", None)) or field_value(expense, "date", None) or _now_iso()
    return _with_labels({
        "id": field_value(expense, "id", ""),
        "type": "expense",
        "date": date,
        "category": field_value(expense, "category", None) or "general",
        "description": field_value(expense, "description", None) or "Expense",
        "amount": float(field_value(expense, "amount")),
        "project": field_value(expense, "project", None) or "General",
        "receipt": field_value(expense, "receipt", None),
        "payment_method": None,
        "donor_email": None,
    })


def _sort_key(transaction: Dict[str, Any]) -> float:
    parsed = parse_date(transaction["date"])
    if parsed is None:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def build_transactions(donations: Iterable[Any], expenses: Iterable[Any]) -> List[Dict[str, Any]]:
    """Merge donations and expenses into one ledger, newest first"""
    transactions = [donation_transaction(d) for d in donations]
    transactions.extend(expense_transaction(e) for e in expenses)
    transactions.sort(key=_sort_key, reverse=True)
    return transactions


def filter_transactions(transactions: Iterable[Dict[str, Any]], kind: str = "all", search: str = "") -> List[Dict[str, Any]]:
    """Filter by type and by a case-insensitive match on description or project"""
    needle = (search or "").lower()
    return [
        t for t in transactions
        if (kind == "all" or t["type"] == kind)
        and (needle in t["description"].lower() or needle in t["project"].lower())
    ]


def summarize(transactions: List[Dict[str, Any]]) -> Dict[str, Any]:
    income = rollup((t for t in transactions if t["type"] == "income"), "amount")
    expenses = rollup((t for t in transactions if t["type"] == "expense"), "amount")
    return {
        "total_income": income.total,
        "income_count": income.count,
        "total_expenses": expenses.total,
        "expense_count": expenses.count,
    }


def project_funds(projects: Iterable[Any]) -> List[Dict[str, Any]]:
    """Per-project funding rows for the active projects breakdown"""
    funds = []
    for project in projects:
        raised = float(field_value(project, "raised"))
        goal = float(field_value(project, "goal"))
        funds.append({
            "id": field_value(project, "id", ""),
            "title": field_value(project, "title", None) or "Untitled Project",
            "category": field_value(project, "category", None) or "general",
            "raised": raised,
            "goal": goal,
            "progress": asdict(progress(raised, goal)),
        })
    return funds


def export_csv(transactions: Iterable[Dict[str, Any]]) -> str:
    """CSV export of the ledger with every field quoted"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buffer.write(",".join(CSV_HEADERS) + "\n")
    for t in transactions:
        writer.writerow([
            format_numeric_date(t["date"]),
            t["type"],
            t["description"],
            t["project"],
            plain_number(t["amount"]),
            t["category"],
            t.get("receipt") or t.get("payment_method") or "",
        ])
    return buffer.getvalue().rstrip("\n")


def export_filename(day: Optional[Any] = None) -> str:
    return f"ledger-{iso_date(day)}.csv"
