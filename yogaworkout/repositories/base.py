"""
Yoga Workout Backend — Repository Helpers
===========================================

What:  Translation of driver errors into the application's DatabaseError.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from pymongo.errors import PyMongoError

from yogaworkout.exceptions import DatabaseError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str, **context) -> Iterator[None]:
    """
    Wrap one or more awaited motor calls.

    Usage:
        with store_errors("list stretches"):
            docs = await collection.find().to_list(length=None)

    Any PyMongoError raised inside is logged with full detail and re-raised
    as DatabaseError, whose client-facing message stays generic.
    """
    try:
        yield
    except PyMongoError as e:
        logger.error(
            "MongoDB error during %s: %s | Context: %s",
            operation,
            str(e),
            context,
            exc_info=True,
        )
        raise DatabaseError(
            context={"operation": operation, "error_type": type(e).__name__, **context},
        ) from e
