"""
Shared connection handling for repositories

Every repository method takes an optional open connection. Without one it
opens its own, commits on success and closes it; with one (passed in by a
service running a transaction) it only borrows a cursor and leaves commit /
rollback to the owner.
"""
import logging
from contextlib import contextmanager

import psycopg2
from psycopg2 import errors as pg_errors

from storefront.core.database import get_db_connection_dict
from storefront.core.errors import ConflictError, StoreError

logger = logging.getLogger(__name__)


class BaseRepository:

    @contextmanager
    def _cursor(self, conn=None):
        should_close = conn is None
        if conn is None:
            try:
                conn = get_db_connection_dict()
            except psycopg2.Error as e:
                logger.error(f"Could not connect to database: {e}")
                raise StoreError() from e

        cursor = conn.cursor()
        try:
            yield cursor
            if should_close:
                conn.commit()
        except pg_errors.UniqueViolation as e:
            if should_close:
                conn.rollback()
            raise ConflictError("Record already exists") from e
        except psycopg2.Error as e:
            if should_close:
                conn.rollback()
            logger.error(f"Database error in {type(self).__name__}: {e}")
            raise StoreError() from e
        except Exception:
            if should_close:
                conn.rollback()
            raise
        finally:
            cursor.close()
            if should_close:
                conn.close()
