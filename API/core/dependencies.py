"""
FastAPI dependencies shared by the routers.
"""

from datetime import date
from typing import Optional

from fastapi import HTTPException, Query, status

from .config import settings


def parse_date(value: Optional[str]) -> Optional[date]:
    """YYYY-MM-DD, or an ISO timestamp cut to its date part."""
    if not value:
        return None
    text = value.strip()
    # "2026-02-15T10:00:00" / "2026-02-15 10:00:00"
    if len(text) > 10 and text[10] in ("T", " "):
        text = text[:10]
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid date: {value!r}, expected YYYY-MM-DD"
        )


def resolve_as_of(value: Optional[date] = None) -> date:
    """Reference date: explicit value, then BILLING_AS_OF, then today."""
    if value is not None:
        return value
    if settings.billing_as_of is not None:
        return settings.billing_as_of
    return date.today()


async def get_as_of(
    as_of: Optional[str] = Query(None, description="Reference date YYYY-MM-DD")
) -> date:
    """
    Resolve the reference date for "current period" logic once per request.
    Services receive it as a plain argument.
    """
    return resolve_as_of(parse_date(as_of))
