"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool


def create_pool(
    conninfo: str,
    min_size: int = 1,
    max_size: int = 10,
    statement_timeout_ms: int | None = None,
) -> AsyncConnectionPool:
    """Create the pool shared by every Unit of Work.

    Pool is created with open=False; PoolLifespanMiddleware opens it at ASGI
    startup. Connections are health-checked on checkout so a restarted
    database does not surface as a failed principal lookup. A statement
    timeout, when set, bounds every query issued through the pool.
    """
    options = {}
    if statement_timeout_ms:
        options["options"] = f"-c statement_timeout={statement_timeout_ms}"
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        kwargs=options,
        check=AsyncConnectionPool.check_connection,
        name="widgetadmin",
        open=False,
    )
