"""Option helpers shared by presigned URLs and post policies."""
from __future__ import annotations

import calendar
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..errors import InvalidArgument

Expiry = Union[int, timedelta, datetime]

M = TypeVar("M", bound=BaseModel)


def coerce_options(model: Type[M], options: Any) -> M:
    """
    Accept a model instance, a mapping, or None.

    Raises:
        InvalidArgument: If the mapping does not validate against ``model``
    """
    if options is None:
        return model()
    if isinstance(options, model):
        return options
    try:
        return model.model_validate(options)
    except ValidationError as e:
        raise InvalidArgument(f"Invalid {model.__name__}: {e}") from e


def resolve_expiry(expires: Optional[Expiry], default_s: int, now: float) -> int:
    """
    Resolve an expiry option into a Unix timestamp.

    Args:
        expires: Seconds from now, a timedelta, or an absolute datetime
            (naive datetimes are UTC). None uses ``default_s``.
        default_s: Default lifetime in seconds
        now: Current Unix time

    Returns:
        Unix timestamp in whole seconds
    """
    if expires is None:
        return int(now) + default_s
    if isinstance(expires, datetime):
        if expires.tzinfo is None:
            return calendar.timegm(expires.timetuple())
        return int(expires.astimezone(timezone.utc).timestamp())
    if isinstance(expires, timedelta):
        return int(now) + int(expires.total_seconds())
    if isinstance(expires, int) and not isinstance(expires, bool):
        return int(now) + expires
    raise InvalidArgument(f"expires must be seconds, a timedelta or a datetime, got {type(expires).__name__}")
