"""Split reconciliation"""

from decimal import Decimal
from typing import Protocol, Sequence

from app.core.exceptions import SplitMismatchError
from app.utils.decimal_utils import format_money, sum_money, to_money


class SplitLike(Protocol):
    """Anything carrying a user's paid and owed share"""

    paid_share: Decimal
    owed_share: Decimal


def validate_splits(target_amount: Decimal, splits: Sequence[SplitLike]) -> Decimal:
    """
    Check that the owed shares of an expense add up to its amount exactly.

    Only ``owed_share`` takes part; how ``paid_share`` is distributed does not
    matter here. Arithmetic is fixed-point at two decimal places, so a
    difference of a single cent fails.

    Args:
        target_amount: Total expense amount
        splits: Splits in input order

    Returns:
        The reconciled total

    Raises:
        SplitMismatchError: If the owed shares do not sum to ``target_amount``
        ValidationError: If any amount has more than two decimal places
    """
    expected = to_money(target_amount)

    total_owed = sum_money(split.owed_share for split in splits)

    if total_owed != expected:
        raise SplitMismatchError(
            expected=format_money(expected),
            actual=format_money(total_owed),
        )

    return total_owed
