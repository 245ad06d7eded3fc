from __future__ import annotations

from roopsnap.health import repository


async def get_health_payload() -> dict:
    db_ok, db_detail = await repository.check_db()
    # DB reachability is reported but does not change the overall status.
    return {
        "status": "OK",
        "message": "Server is running",
        "db": {"ok": db_ok, "detail": db_detail},
    }
