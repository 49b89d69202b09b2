# conversa_api/api/schemas/_datetime_serializer.py
from datetime import datetime, timezone


def serialize_dt(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    if dt.tzinfo is None:
        # sqlite devolve datetimes sem fuso; gravamos sempre em UTC
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()
