"""建议饮水量分配测试。"""
from datetime import datetime, timedelta

import pytest

from reminder_app.water.quota import plan_quota, round_up_to_step, suggest_amount

NOW = datetime(2026, 3, 10, 10, 0)


def test_round_up_to_step() -> None:
    assert round_up_to_step(0) == 0
    assert round_up_to_step(-5) == 0
    assert round_up_to_step(1) == 50
    assert round_up_to_step(450) == 450
    assert round_up_to_step(451) == 500
    assert round_up_to_step(120, 100) == 200


def test_even_split_over_remaining_reminders() -> None:
    plan = plan_quota(2000, NOW, NOW + timedelta(minutes=120), 60)
    assert plan.reminders_left == 2
    assert plan.raw_amount == 1000
    assert plan.amount == 1000


def test_amount_is_clamped_to_remaining() -> None:
    end = NOW + timedelta(minutes=30)
    assert suggest_amount(450, NOW, end, 60) == 450
    plan = plan_quota(430, NOW, end, 60)
    assert plan.raw_amount == 430
    assert plan.amount == 430


def test_nothing_left_means_no_suggestion() -> None:
    assert suggest_amount(0, NOW, NOW + timedelta(hours=2), 60) is None
    assert suggest_amount(-100, NOW, NOW + timedelta(hours=2), 60) is None


def test_window_end_already_passed_counts_as_one_reminder() -> None:
    plan = plan_quota(700, NOW, NOW - timedelta(minutes=5), 60)
    assert plan.reminders_left == 1
    assert plan.amount == 700


@pytest.mark.parametrize("goal,interval", [(2000, 45), (2000, 60), (1730, 60), (2500, 180), (990, 25)])
def test_confirmed_suggestions_never_overshoot_goal(goal: int, interval: int) -> None:
    now = datetime(2026, 3, 10, 9, 0)
    end = datetime(2026, 3, 10, 21, 0)
    remaining = goal
    amounts = []
    while now < end:
        amount = suggest_amount(remaining, now, end, interval)
        if amount is None:
            break
        amounts.append(amount)
        remaining -= amount
        now += timedelta(minutes=interval)
    assert sum(amounts) <= goal
    assert remaining >= 0
    # 前面的建议量不小于后面的
    assert amounts == sorted(amounts, reverse=True)
