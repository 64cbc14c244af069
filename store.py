import logging

from flask import current_app
from mysql.connector import pooling

logger = logging.getLogger(__name__)


class Store:
    """Owns the MySQL connection pool for the lifetime of one application.

    Handlers reach it through ``get_store()`` and must close every
    connection they borrow so it goes back to the pool.
    """

    def __init__(self, pool):
        self._pool = pool

    @classmethod
    def open(cls, **pool_args):
        pool = pooling.MySQLConnectionPool(**pool_args)
        logger.info("Opened connection pool %s (size %s)",
                    pool_args.get('pool_name'), pool_args.get('pool_size'))
        return cls(pool)

    @property
    def closed(self):
        return self._pool is None

    def get_connection(self):
        if self._pool is None:
            raise RuntimeError("Store is closed")
        return self._pool.get_connection()

    def close(self):
        if self._pool is None:
            return
        # mysql-connector has no public way to drain a pool
        self._pool._remove_connections()
        self._pool = None
        logger.info("Closed connection pool")


def get_store():
    return current_app.extensions['store']
