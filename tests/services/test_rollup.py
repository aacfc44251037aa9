# tests/services/test_rollup.py
import pytest

from transparency.services.rollup import is_fully_funded, progress, rollup, workspace_balance


@pytest.mark.parametrize("raised,goal,percent,display", [
    (50, 200, 25, 25),
    (300, 200, 150, 100),
    (0, 200, 0, 0),
    (None, 200, 0, 0),
    (500, 0, 0, 0),
    (500, -10, 0, 0),
    (500, None, 0, 0),
])
def test_progress(raised, goal, percent, display):
    result = progress(raised, goal)
    assert result.percent == pytest.approx(percent)
    assert result.display_percent == pytest.approx(display)


def test_progress_ratio_is_unclamped():
    assert progress(300, 200).ratio == pytest.approx(1.5)


def test_rollup_sum_and_count():
    donations = [{"amount": 100}, {"amount": 250}]

    result = rollup(donations)

    assert result.total == 350
    assert result.count == 2
    assert rollup(list(reversed(donations))) == result
    assert rollup(donations) == result


def test_rollup_missing_values_count_as_zero():
    result = rollup([{"amount": None}, {}, {"amount": 10}])
    assert result.total == 10
    assert result.count == 3


def test_rollup_reads_attributes():
    class Row:
        def __init__(self, raised):
            self.raised = raised

    assert rollup([Row(5), Row(7)], "raised").total == 12


def test_rollup_empty():
    result = rollup([])
    assert result.total == 0
    assert result.count == 0


def test_workspace_balance():
    balance = workspace_balance({
        "total_received": 1000,
        "expenses": [{"amount": 300}, {"amount": 150}]
    })
    assert balance.received == 1000
    assert balance.spent == 450
    assert balance.remaining == 550


def test_workspace_balance_without_expenses():
    balance = workspace_balance({"total_received": None})
    assert balance.spent == 0
    assert balance.remaining == 0


def test_is_fully_funded():
    assert is_fully_funded({"raised": 100, "goal": 100})
    assert not is_fully_funded({"raised": 99, "goal": 100})
    assert not is_fully_funded({"raised": 0, "goal": 0})
