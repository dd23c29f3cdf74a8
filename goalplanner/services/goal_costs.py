from typing import Mapping
from goalplanner.core.errors import InvalidArgument, require_finite
from goalplanner.models.plan import GoalEntry


def _read_goal(goal_id, goal):
    if isinstance(goal, GoalEntry):
        return goal.enabled, goal.amount
    if isinstance(goal, Mapping) and "enabled" in goal and "amount" in goal:
        return bool(goal["enabled"]), goal["amount"]
    raise InvalidArgument(f"Goal '{goal_id}' must carry 'enabled' and 'amount', got {goal!r}")


def total_goal_cost(goals: Mapping) -> float:
    """Sum of enabled goals with a positive amount, in today's currency units"""
    if not isinstance(goals, Mapping):
        raise InvalidArgument(f"goals must be a mapping of goal id to goal, got {type(goals).__name__}")

    total = 0.0
    for goal_id, goal in goals.items():
        enabled, amount = _read_goal(goal_id, goal)
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            raise InvalidArgument(f"Goal '{goal_id}' amount is not numeric: {amount!r}")
        require_finite(**{f"{goal_id}.amount": amount})
        if enabled and amount > 0:
            total += amount
    return total
