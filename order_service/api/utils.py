from __future__ import annotations

from datetime import datetime, timezone

from fastapi import Response


def isoformat_utc(value: datetime | None) -> str | None:
    if value is None:
        return None
    # SQLite hands back naive datetimes; everything is stored as UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat().replace("+00:00", "Z")


def created(location: str) -> Response:
    return Response(status_code=201, headers={"Location": location})


def no_content() -> Response:
    return Response(status_code=204)
