from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError  # type: ignore[import-not-found]

from roopsnap.core.db import DatabaseException, database_manager


async def check_db() -> tuple[bool, str | None]:
    try:
        await database_manager.ping()
    except (SQLAlchemyError, DatabaseException, OSError) as exc:
        return False, str(exc)
    return True, None
