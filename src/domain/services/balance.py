"""Balance rules for ledger transactions.

A transaction's effect on its account is derived from its type, never from
the sign of its amount: income adds, expense subtracts.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BalanceAdjustment:
    """Signed balance delta to apply to one account."""

    account_id: str
    delta: int


def signed_amount(transaction_type: str, amount: int) -> int:
    """Return the signed balance effect of a transaction.

    Args:
        transaction_type: ``income`` or ``expense``.
        amount: Positive magnitude in minor units.

    Returns:
        int: ``+amount`` for income, ``-amount`` for expense.

    Raises:
        ValueError: If the type is unknown.
    """
    if transaction_type == "income":
        return amount
    if transaction_type == "expense":
        return -amount
    raise ValueError(f"Unknown transaction type: {transaction_type}")


def apply_adjustment(
    account_id: str,
    transaction_type: str,
    amount: int,
) -> BalanceAdjustment:
    """Return the adjustment recording a new transaction."""
    return BalanceAdjustment(account_id, signed_amount(transaction_type, amount))


def reverse_adjustment(
    account_id: str,
    transaction_type: str,
    amount: int,
) -> BalanceAdjustment:
    """Return the adjustment undoing an existing transaction."""
    return BalanceAdjustment(
        account_id,
        -signed_amount(transaction_type, amount),
    )


def plan_update_adjustments(
    old_account_id: str,
    old_type: str,
    old_amount: int,
    new_account_id: str,
    new_type: str,
    new_amount: int,
) -> list[BalanceAdjustment]:
    """Return the adjustments needed to move from the old to the new effect.

    When the account is unchanged a single net adjustment is returned (none
    if the net is zero). When the account changes, the old account loses
    the old effect and the new account gains the new effect.

    Args:
        old_account_id: Account the transaction currently belongs to.
        old_type: Current transaction type.
        old_amount: Current amount.
        new_account_id: Account after the update.
        new_type: Type after the update.
        new_amount: Amount after the update.

    Returns:
        list[BalanceAdjustment]: Zero, one or two adjustments.
    """
    old_effect = signed_amount(old_type, old_amount)
    new_effect = signed_amount(new_type, new_amount)
    if old_account_id == new_account_id:
        net = new_effect - old_effect
        if net == 0:
            return []
        return [BalanceAdjustment(old_account_id, net)]
    return [
        BalanceAdjustment(old_account_id, -old_effect),
        BalanceAdjustment(new_account_id, new_effect),
    ]


__all__ = [
    "BalanceAdjustment",
    "signed_amount",
    "apply_adjustment",
    "reverse_adjustment",
    "plan_update_adjustments",
]
