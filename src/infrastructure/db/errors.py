from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError

from src.application.errors import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Translate connection-level database failures into StorageError."""
    try:
        yield
    except (OperationalError, InterfaceError, DisconnectionError) as exc:
        logger.error("Database failure while trying to %s: %s", action, exc)
        raise StorageError(f"Failed to {action}") from exc
