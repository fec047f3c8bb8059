"""Reward policy: converts an accumulated balance into earned rewards."""

from typing import NamedTuple

from .exceptions import InvalidConfigError, InvalidCreditRequestError


class RewardOutcome(NamedTuple):
    rewards_earned: int
    remaining_balance: int


def apply_reward_policy(balance: int, threshold: int) -> RewardOutcome:
    """
    Split a balance into whole rewards and the carried-over remainder.

    ``balance == rewards_earned * threshold + remaining_balance`` and
    ``0 <= remaining_balance < threshold`` always hold.

    Args:
        balance: Points accumulated, including the current credit
        threshold: Points required for one reward

    Returns:
        RewardOutcome(rewards_earned, remaining_balance)

    Raises:
        InvalidConfigError: If threshold is not a positive integer
        InvalidCreditRequestError: If balance is negative
    """
    if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold <= 0:
        raise InvalidConfigError(f"Reward threshold must be a positive integer, got {threshold!r}")
    if balance < 0:
        raise InvalidCreditRequestError(f"Balance cannot be negative, got {balance}")

    rewards_earned, remaining_balance = divmod(balance, threshold)
    return RewardOutcome(rewards_earned, remaining_balance)
