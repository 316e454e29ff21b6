"""Translation of storage failures into the ledger error taxonomy."""

from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from src.domain.errors import InternalError


@contextmanager
def translate_storage_errors(logger, operation: str, context: str):
    """Log unexpected storage failures and re-raise them as InternalError.

    Ledger errors raised inside the block propagate unchanged.

    Args:
        logger: Logger used to record the failure.
        operation: Short name of the attempted operation.
        context: Details needed to reconstruct the attempt.

    Raises:
        InternalError: If SQLAlchemy raised inside the block.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(
            f"Storage failure during {operation} ({context}): "
            f"{type(exc).__name__}: {exc}"
        )
        raise InternalError(f"Failed to {operation}") from exc


__all__ = ["translate_storage_errors"]
