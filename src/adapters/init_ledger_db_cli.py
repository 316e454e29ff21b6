"""CLI adapter to create the ledger schema.

This module wires the table definitions to the configured ledger engine and
provides a command-line entry point for preparing a fresh database.
"""

from src.infrastructure.container import build_database_adapter
from src.infrastructure.ledger_tables import init_schema
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Create any missing ledger tables."""
    logger = get_app_logger()
    engine = build_database_adapter().get_ledger_engine()
    logger.info(f"Initializing ledger schema on {engine.url}")

    tables = init_schema(engine)

    print(f"Ledger schema ready: {', '.join(tables)}.")


if __name__ == "__main__":  # pragma: no cover
    main()
