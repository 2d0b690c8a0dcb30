from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from typing import Any, Mapping

from ..domain.errors import SchemaError
from ..domain.models import (
    ActivityEntry,
    DocumentItem,
    DormFavorite,
    UniversityRecord,
    UniversityType,
    UserProfile,
)

# 1: bare JSON values without ids on universities
# 2: {"schema": 2, "data": ...} envelope, universities carry ids
SCHEMA_VERSION = 2
LEGACY_SCHEMA_VERSION = 1


def wrap(data: Any) -> dict:
    return {"schema": SCHEMA_VERSION, "data": data}


def unwrap(value: Any) -> tuple[int, Any]:
    if isinstance(value, dict) and "schema" in value and "data" in value:
        version = value["schema"]
        if not isinstance(version, int) or isinstance(version, bool):
            raise SchemaError(f"schema version must be an integer, got {version!r}")
        if version > SCHEMA_VERSION:
            raise SchemaError(f"unsupported schema version {version}")
        return version, value["data"]
    return LEGACY_SCHEMA_VERSION, value


def _require_mapping(row: Any) -> Mapping[str, Any]:
    if not isinstance(row, Mapping):
        raise SchemaError(f"expected an object, got {type(row).__name__}")
    return row


def _require_str(row: Mapping[str, Any], key: str) -> str:
    value = row.get(key)
    if not isinstance(value, str):
        raise SchemaError(f"field {key!r} must be a string")
    return value


def _require_int(row: Mapping[str, Any], key: str) -> int:
    value = row.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"field {key!r} must be a number")
    if isinstance(value, float) and not value.is_integer():
        raise SchemaError(f"field {key!r} must be a whole number")
    return int(value)


def parse_timestamp(value: str) -> datetime:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def profile_from_dict(row: Any) -> UserProfile:
    row = _require_mapping(row)
    return UserProfile(
        name=_require_str(row, "name"),
        email=_require_str(row, "email"),
        country=_require_str(row, "country"),
    )


def profile_to_dict(profile: UserProfile) -> dict:
    return {"name": profile.name, "email": profile.email, "country": profile.country}


def legacy_university_id(index: int, row: Mapping[str, Any]) -> str:
    digest = hashlib.sha1(
        f"{index}|{row.get('name')}|{row.get('city')}|{row.get('field')}".encode("utf-8")
    ).hexdigest()
    return f"u-{digest[:12]}"


def university_from_dict(row: Any, *, index: int = 0) -> UniversityRecord:
    row = _require_mapping(row)
    raw_type = row.get("type") or UniversityType.PUBLIC.value
    try:
        uni_type = UniversityType(raw_type)
    except ValueError as exc:
        raise SchemaError(f"unknown university type {raw_type!r}") from exc
    uni_id = row.get("id")
    if uni_id is None:
        uni_id = legacy_university_id(index, row)
    elif not isinstance(uni_id, str) or not uni_id:
        raise SchemaError("field 'id' must be a non-empty string")
    return UniversityRecord(
        id=uni_id,
        name=_require_str(row, "name"),
        city=_require_str(row, "city"),
        field=_require_str(row, "field"),
        type=uni_type,
    )


def university_to_dict(record: UniversityRecord) -> dict:
    return {
        "id": record.id,
        "name": record.name,
        "city": record.city,
        "field": record.field,
        "type": record.type.value,
    }


def dorm_favorite_from_dict(row: Any, *, index: int = 0) -> DormFavorite:
    row = _require_mapping(row)
    return DormFavorite(
        id=_require_str(row, "id"),
        name=_require_str(row, "name"),
        city=_require_str(row, "city"),
        price=_require_int(row, "price"),
    )


def dorm_favorite_to_dict(favorite: DormFavorite) -> dict:
    return {"id": favorite.id, "name": favorite.name, "city": favorite.city, "price": favorite.price}


def document_from_dict(row: Any, *, index: int = 0) -> DocumentItem:
    row = _require_mapping(row)
    done = row.get("done", False)
    if not isinstance(done, bool):
        raise SchemaError("field 'done' must be a boolean")
    return DocumentItem(text=_require_str(row, "text"), done=done)


def document_to_dict(item: DocumentItem) -> dict:
    return {"text": item.text, "done": item.done}


def activity_from_dict(row: Any, *, index: int = 0) -> ActivityEntry:
    row = _require_mapping(row)
    raw_at = _require_str(row, "at")
    try:
        at = parse_timestamp(raw_at)
    except ValueError as exc:
        raise SchemaError(f"invalid timestamp {raw_at!r}") from exc
    return ActivityEntry(text=_require_str(row, "text"), at=at)


def activity_to_dict(entry: ActivityEntry) -> dict:
    return {"text": entry.text, "at": format_timestamp(entry.at)}
