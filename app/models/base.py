from __future__ import annotations

import json
from dataclasses import MISSING, field, fields
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from app.utils.validators import validate_required_fields


class RecordError(ValueError):
    """Raised when a payload cannot be decoded into a record."""


def record_field(key: str, kind: type, *, required: bool = False, secret: bool = False,
                 ts_type: Optional[str] = None):
    """Declare a record field with its external (JSON) name.

    Optional fields default to ``None``, which stands for "absent"; an empty
    string or zero is a present value.
    """
    metadata = {'key': key, 'kind': kind, 'secret': secret, 'ts_type': ts_type}
    if required:
        return field(metadata=metadata)
    return field(default=None, metadata=metadata)


def is_required(record_field_) -> bool:
    return record_field_.default is MISSING and record_field_.default_factory is MISSING


def parse_timestamp(value: str) -> datetime:
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return datetime.fromisoformat(value)


def _encode(kind: type, value: Any) -> Any:
    if kind is datetime:
        return value.isoformat()
    return value


def _decode(kind: type, key: str, value: Any) -> Any:
    if kind is datetime:
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str):
            raise RecordError(f'{key} must be an ISO-8601 timestamp')
        try:
            return parse_timestamp(value)
        except ValueError as exc:
            raise RecordError(f'{key} must be an ISO-8601 timestamp') from exc
    if kind is int:
        # bool is an int subclass but never a valid count or epoch
        if isinstance(value, bool) or not isinstance(value, int):
            raise RecordError(f'{key} must be an integer')
        return value
    if not isinstance(value, str):
        raise RecordError(f'{key} must be a string')
    return value


class Record:
    """Mixin giving the dataclass records their wire format.

    Records are encoded with the field names used by API consumers
    (``ID``, ``CreatedAt``, ``OwnerEmail``...). Absent optional fields are
    left out of the payload, so ``None`` and ``''`` stay distinguishable.
    """

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            payload[item.metadata['key']] = _encode(item.metadata['kind'], value)
        return payload

    def to_public_dict(self) -> Dict[str, Any]:
        """Encode without secret fields (password hashes, key hashes)."""
        payload = self.to_dict()
        for item in fields(self):
            if item.metadata['secret']:
                payload.pop(item.metadata['key'], None)
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        if not isinstance(data, dict):
            raise RecordError(f'{cls.__name__} payload must be an object')
        values = {}
        for item in fields(cls):
            key = item.metadata['key']
            value = data.get(key)
            if value is None:
                if is_required(item):
                    raise RecordError(f'Missing required field: {key}')
                continue
            values[item.name] = _decode(item.metadata['kind'], key, value)
        return cls(**values)

    @classmethod
    def from_json(cls, text: str):
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise RecordError(f'Invalid JSON for {cls.__name__}: {exc}') from exc
        return cls.from_dict(data)

    @property
    def is_deleted(self) -> bool:
        return getattr(self, 'deleted_at', None) is not None

    def validate(self) -> Tuple[bool, str]:
        """Check required fields are populated; subclasses add their own rules."""
        required = [item for item in fields(self) if is_required(item)]
        data = {item.metadata['key']: getattr(self, item.name) for item in required}
        valid, error = validate_required_fields(data, [item.metadata['key'] for item in required])
        if not valid:
            return valid, error
        for item in required:
            value = getattr(self, item.name)
            try:
                _decode(item.metadata['kind'], item.metadata['key'], value)
            except RecordError as exc:
                return False, str(exc)
        return True, ''
