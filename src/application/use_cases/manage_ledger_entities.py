"""Use case to create, archive and delete accounts and categories."""

from src.application.ports.accounts_repository import AccountsRepositoryPort
from src.application.use_cases.report_cache import ReportCache
from src.application.use_cases.storage_errors import translate_storage_errors
from src.domain.errors import NotFoundError, ValidationError
from src.domain.models import Account, Category
from src.domain.services.validation import validate_transaction_type, validate_uuid
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger


class ManageLedgerEntitiesUseCase:
    """Maintain the accounts and categories transactions refer to.

    Accounts always start with a zero balance. Deleting an account removes
    its transactions; deleting a category leaves its transactions
    uncategorized. Every change invalidates the user's cached reports.
    """

    def __init__(
        self,
        accounts_repository: AccountsRepositoryPort,
        report_cache: ReportCache,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            accounts_repository: Port persisting accounts and categories.
            report_cache: Cache to invalidate after every change.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording committed changes.
        """
        self._accounts_repository = accounts_repository
        self._report_cache = report_cache
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()

    def list_accounts(self, user_id: str) -> list[Account]:
        with translate_storage_errors(
            self._logger, "list accounts", f"user={user_id}"
        ):
            return self._accounts_repository.fetch_accounts(user_id)

    def create_account(
        self,
        user_id: str,
        name: str,
        color: str | None = None,
    ) -> Account:
        name = self._validate_name(name, "Account")
        with translate_storage_errors(
            self._logger, "create account", f"user={user_id} name={name!r}"
        ):
            account = self._accounts_repository.create_account(
                user_id, name, color=color
            )
        self._after_write(user_id, f"create_account account={account.id}")
        return account

    def archive_account(
        self,
        account_id: str,
        user_id: str,
        is_archived: bool = True,
    ) -> Account:
        """Archive or restore an account; balances are left untouched.

        Raises:
            NotFoundError: If the account is not the user's.
        """
        account_id = validate_uuid(account_id, "Account")
        with translate_storage_errors(
            self._logger, "archive account", f"user={user_id} account={account_id}"
        ):
            account = self._accounts_repository.set_archived(
                account_id, user_id, is_archived
            )
        if account is None:
            raise NotFoundError(f"Account with ID {account_id} not found")
        self._after_write(
            user_id,
            f"archive_account account={account_id} archived={is_archived}",
        )
        return account

    def delete_account(self, account_id: str, user_id: str) -> None:
        account_id = validate_uuid(account_id, "Account")
        with translate_storage_errors(
            self._logger, "delete account", f"user={user_id} account={account_id}"
        ):
            deleted = self._accounts_repository.delete_account(account_id, user_id)
        if not deleted:
            raise NotFoundError(f"Account with ID {account_id} not found")
        self._after_write(user_id, f"delete_account account={account_id}")

    def create_category(
        self,
        user_id: str,
        name: str,
        category_type: str,
        icon: str | None = None,
        color: str | None = None,
    ) -> Category:
        name = self._validate_name(name, "Category")
        category_type = validate_transaction_type(category_type)
        with translate_storage_errors(
            self._logger, "create category", f"user={user_id} name={name!r}"
        ):
            category = self._accounts_repository.create_category(
                user_id, name, category_type, icon=icon, color=color
            )
        self._after_write(user_id, f"create_category category={category.id}")
        return category

    def delete_category(self, category_id: str, user_id: str) -> None:
        category_id = validate_uuid(category_id, "Category")
        with translate_storage_errors(
            self._logger,
            "delete category",
            f"user={user_id} category={category_id}",
        ):
            deleted = self._accounts_repository.delete_category(
                category_id, user_id
            )
        if not deleted:
            raise NotFoundError(f"Category with ID {category_id} not found")
        self._after_write(user_id, f"delete_category category={category_id}")

    @staticmethod
    def _validate_name(value, label: str) -> str:
        name = value.strip() if isinstance(value, str) else ""
        if not name:
            raise ValidationError(f"{label} name is required")
        return name

    def _after_write(self, user_id: str, action: str) -> None:
        self._report_cache.invalidate_user(user_id)
        self._usage_logger.info(f"{action} user={user_id}")


__all__ = ["ManageLedgerEntitiesUseCase"]
