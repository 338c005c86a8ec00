# src/util/ids.py
import uuid

from core.exception.exceptions import MalformedReferenceException


def parse_reference(raw, label: str = "identifier") -> uuid.UUID:
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw).strip())
    except (ValueError, AttributeError, TypeError):
        raise MalformedReferenceException(detail=f"Malformed {label}: {raw}")


def is_reference(raw) -> bool:
    try:
        uuid.UUID(str(raw).strip())
    except (ValueError, AttributeError, TypeError):
        return False
    return True
