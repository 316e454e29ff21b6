"""Transaction ledger service: create, update and delete with balances."""

from collections.abc import Mapping
from typing import Callable

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.application.use_cases.balance_mutator import (
    APPLY,
    REVERSE,
    BalanceMutator,
)
from src.application.use_cases.report_cache import ReportCache
from src.application.use_cases.storage_errors import translate_storage_errors
from src.domain.errors import ForbiddenError, LedgerError, NotFoundError
from src.domain.models import (
    Account,
    Category,
    LedgerTransaction,
    TransactionInput,
    TransactionView,
)
from src.domain.services.balance import BalanceAdjustment
from src.domain.services.validation import (
    validate_transaction_input,
    validate_transaction_patch,
    validate_uuid,
)
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger


ACCOUNT_FORBIDDEN_MESSAGE = "Account not found or does not belong to you"


class TransactionLedgerService:
    """Mutate transactions while keeping account balances consistent.

    Each write runs in one unit of work: the transaction row change and the
    balance increments it implies commit together or not at all. After a
    successful commit the user's cached reports are invalidated.
    """

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        report_cache: ReportCache,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the service.

        Args:
            ledger_repository: Port for rows and balance increments.
            report_cache: Cache to invalidate after every write.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording committed mutations.
        """
        self._repository = ledger_repository
        self._report_cache = report_cache
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._mutator = BalanceMutator(ledger_repository, logger=self._logger)

    def get(self, transaction_id: str, user_id: str) -> TransactionView:
        """Return one transaction of the user.

        Raises:
            NotFoundError: If it does not exist or belongs to another user.
        """
        transaction_id = self._validate_transaction_id(transaction_id)
        with translate_storage_errors(
            self._logger,
            "load transaction",
            f"user={user_id} transaction={transaction_id}",
        ):
            with self._repository.begin() as conn:
                view = self._repository.fetch_transaction_view(
                    conn, transaction_id, user_id
                )
        if view is None:
            raise self._transaction_not_found(transaction_id)
        return view

    def create(
        self,
        user_id: str,
        payload: Mapping | TransactionInput,
    ) -> TransactionView:
        """Record a transaction and apply its effect to the account.

        Args:
            user_id: Owner of the transaction.
            payload: Raw create payload or an already validated input.

        Returns:
            TransactionView: The stored transaction with display names.

        Raises:
            ValidationError: If the payload is malformed.
            ForbiddenError: If the account is missing or not the user's.
            NotFoundError: If the category is missing or not the user's.
            InternalError: If storage fails unexpectedly.
        """
        data = (
            payload
            if isinstance(payload, TransactionInput)
            else validate_transaction_input(payload)
        )

        def work(conn):
            self._load_account(conn, data.account_id, user_id)
            if data.category_id is not None:
                self._load_category(conn, data.category_id, user_id)
            transaction_id = self._repository.insert_transaction(
                conn, user_id, data
            )
            adjustments = self._mutator.mutate(
                conn, user_id, data.account_id, data.type, data.amount, APPLY
            )
            view = self._repository.fetch_transaction_view(
                conn, transaction_id, user_id
            )
            return view, adjustments

        view, adjustments = self._run_unit(
            "create transaction",
            user_id,
            f"account={data.account_id} type={data.type} amount={data.amount}",
            work,
        )
        self._record_usage("create", user_id, view.id, adjustments)
        return view

    def update(
        self,
        transaction_id: str,
        user_id: str,
        payload: Mapping,
    ) -> TransactionView:
        """Apply a partial update and move the balance effect accordingly.

        Changing the account, type or amount reverses the old effect and
        applies the new one. Other fields never touch balances.

        Raises:
            ValidationError: If the payload is malformed.
            NotFoundError: If the transaction or new category is not found.
            ForbiddenError: If the new account is missing or not the user's.
            InternalError: If storage fails unexpectedly.
        """
        transaction_id = self._validate_transaction_id(transaction_id)
        patch = validate_transaction_patch(payload)

        def work(conn):
            existing = self._load_transaction(
                conn, transaction_id, user_id, for_update=True
            )
            new_account_id = patch.account_id or existing.account_id
            if new_account_id != existing.account_id:
                self._load_account(conn, new_account_id, user_id)
            if (
                patch.category_id is not None
                and patch.category_id != existing.category_id
            ):
                self._load_category(conn, patch.category_id, user_id)

            adjustments = []
            if patch.touches_balance():
                adjustments = self._mutator.adjust_for_update(
                    conn,
                    user_id,
                    existing,
                    new_account_id,
                    patch.type or existing.type,
                    patch.amount if patch.amount is not None else existing.amount,
                )
            changes = patch.changed_fields()
            if changes:
                self._repository.update_transaction(
                    conn, transaction_id, user_id, changes
                )
            view = self._repository.fetch_transaction_view(
                conn, transaction_id, user_id
            )
            return view, adjustments

        view, adjustments = self._run_unit(
            "update transaction",
            user_id,
            f"transaction={transaction_id} fields={sorted(payload)}",
            work,
        )
        self._record_usage("update", user_id, transaction_id, adjustments)
        return view

    def delete(self, transaction_id: str, user_id: str) -> TransactionView:
        """Delete a transaction and reverse its balance effect.

        Returns:
            TransactionView: Snapshot of the transaction before deletion.

        Raises:
            NotFoundError: If it does not exist or belongs to another user.
            InternalError: If storage fails unexpectedly.
        """
        transaction_id = self._validate_transaction_id(transaction_id)

        def work(conn):
            existing = self._load_transaction(
                conn, transaction_id, user_id, for_update=True
            )
            snapshot = self._repository.fetch_transaction_view(
                conn, transaction_id, user_id
            )
            self._repository.delete_transaction(conn, transaction_id, user_id)
            adjustments = self._mutator.mutate(
                conn,
                user_id,
                existing.account_id,
                existing.type,
                existing.amount,
                REVERSE,
            )
            return snapshot, adjustments

        snapshot, adjustments = self._run_unit(
            "delete transaction",
            user_id,
            f"transaction={transaction_id}",
            work,
        )
        self._record_usage("delete", user_id, transaction_id, adjustments)
        return snapshot

    def _run_unit(self, operation: str, user_id: str, context: str, work: Callable):
        with translate_storage_errors(
            self._logger, operation, f"user={user_id} {context}"
        ):
            try:
                with self._repository.begin() as conn:
                    result = work(conn)
            except LedgerError as exc:
                self._logger.info(
                    f"Rejected {operation} for user={user_id}: "
                    f"{exc.category}: {exc.message}"
                )
                raise
        self._report_cache.invalidate_user(user_id)
        return result

    def _load_owned(
        self,
        fetch: Callable,
        conn,
        entity_id: str,
        user_id: str,
        missing: LedgerError,
        **kwargs,
    ):
        """Load a row scoped to the user or raise ``missing``.

        A row that exists under another user is indistinguishable from an
        absent one.
        """
        entity = fetch(conn, entity_id, user_id, **kwargs)
        if entity is None:
            raise missing
        return entity

    def _load_transaction(
        self,
        conn,
        transaction_id: str,
        user_id: str,
        for_update: bool = False,
    ) -> LedgerTransaction:
        return self._load_owned(
            self._repository.fetch_transaction,
            conn,
            transaction_id,
            user_id,
            self._transaction_not_found(transaction_id),
            for_update=for_update,
        )

    def _load_account(self, conn, account_id: str, user_id: str) -> Account:
        return self._load_owned(
            self._repository.fetch_account,
            conn,
            account_id,
            user_id,
            ForbiddenError(ACCOUNT_FORBIDDEN_MESSAGE),
            for_update=True,
        )

    def _load_category(self, conn, category_id: str, user_id: str) -> Category:
        return self._load_owned(
            self._repository.fetch_category,
            conn,
            category_id,
            user_id,
            NotFoundError(f"Category with ID {category_id} not found"),
        )

    @staticmethod
    def _transaction_not_found(transaction_id: str) -> NotFoundError:
        return NotFoundError(f"Transaction with ID {transaction_id} not found")

    @staticmethod
    def _validate_transaction_id(transaction_id: str) -> str:
        return validate_uuid(transaction_id, "Transaction")

    def _record_usage(
        self,
        action: str,
        user_id: str,
        transaction_id: str,
        adjustments: list[BalanceAdjustment],
    ) -> None:
        deltas = ", ".join(
            f"{adjustment.account_id}:{adjustment.delta:+d}"
            for adjustment in adjustments
        )
        self._usage_logger.info(
            f"{action} user={user_id} transaction={transaction_id} "
            f"balance_deltas=[{deltas}]"
        )


__all__ = ["TransactionLedgerService", "ACCOUNT_FORBIDDEN_MESSAGE"]
