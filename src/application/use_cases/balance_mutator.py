"""Balance mutations applied inside a ledger unit of work."""

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.errors import NotFoundError
from src.domain.models import LedgerTransaction
from src.domain.services.balance import (
    BalanceAdjustment,
    apply_adjustment,
    plan_update_adjustments,
    reverse_adjustment,
)
from src.infrastructure.logging.logger import get_app_logger


APPLY = "apply"
REVERSE = "reverse"


class BalanceMutator:
    """Apply signed balance deltas to accounts.

    The caller passes the connection of its open unit of work, so every
    increment commits or rolls back together with the transaction row
    write that triggered it.
    """

    def __init__(self, ledger_repository: LedgerRepositoryPort, logger=None) -> None:
        """Initialize the mutator.

        Args:
            ledger_repository: Port used for atomic balance increments.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def mutate(
        self,
        conn,
        user_id: str,
        account_id: str,
        transaction_type: str,
        amount: int,
        direction: str,
    ) -> list[BalanceAdjustment]:
        """Apply or reverse the effect of one transaction.

        Args:
            conn: Connection of the open unit of work.
            user_id: Owner of the account.
            account_id: Account to adjust.
            transaction_type: ``income`` or ``expense``.
            amount: Positive magnitude in minor units.
            direction: ``apply`` or ``reverse``.

        Returns:
            list[BalanceAdjustment]: The adjustment that was applied.
        """
        if direction == APPLY:
            adjustment = apply_adjustment(account_id, transaction_type, amount)
        elif direction == REVERSE:
            adjustment = reverse_adjustment(account_id, transaction_type, amount)
        else:
            raise ValueError(f"Unknown balance direction: {direction}")
        return self.apply_all(conn, user_id, [adjustment])

    def adjust_for_update(
        self,
        conn,
        user_id: str,
        existing: LedgerTransaction,
        new_account_id: str,
        new_type: str,
        new_amount: int,
    ) -> list[BalanceAdjustment]:
        """Move the balance effect of ``existing`` to its updated values."""
        adjustments = plan_update_adjustments(
            existing.account_id,
            existing.type,
            existing.amount,
            new_account_id,
            new_type,
            new_amount,
        )
        return self.apply_all(conn, user_id, adjustments)

    def apply_all(
        self,
        conn,
        user_id: str,
        adjustments: list[BalanceAdjustment],
    ) -> list[BalanceAdjustment]:
        """Apply adjustments in order; a missing account aborts the unit.

        Raises:
            NotFoundError: If an account row no longer matches the user.
        """
        applied = []
        for adjustment in adjustments:
            if adjustment.delta == 0:
                continue
            updated = self._ledger_repository.increment_balance(
                conn,
                adjustment.account_id,
                user_id,
                adjustment.delta,
            )
            if not updated:
                raise NotFoundError(
                    f"Account with ID {adjustment.account_id} not found"
                )
            self._logger.debug(
                f"Balance of account={adjustment.account_id} "
                f"changed by {adjustment.delta}"
            )
            applied.append(adjustment)
        return applied


__all__ = ["BalanceMutator", "APPLY", "REVERSE"]
