"""Render TypeScript interfaces for the record dataclasses."""
from __future__ import annotations

from dataclasses import fields
from datetime import datetime
from typing import Dict, Iterable, Optional

from app.models import ApiKey, Post, User
from app.models.base import is_required

HEADER = '// Code generated by scripts/generate_types.py. DO NOT EDIT.\n'

TS_TYPES = {
    str: 'string',
    int: 'number',
    datetime: 'string',
}

# Interface names published to frontend code
INTERFACE_NAMES: Dict[type, str] = {
    ApiKey: 'APIKeys',
    Post: 'Post',
    User: 'User',
}


def render_interface(record_class: type, name: Optional[str] = None) -> str:
    name = name or INTERFACE_NAMES.get(record_class, record_class.__name__)
    lines = [f'export interface {name} {{']
    for item in fields(record_class):
        ts_type = item.metadata['ts_type'] or TS_TYPES[item.metadata['kind']]
        marker = '' if is_required(item) else '?'
        lines.append(f"  {item.metadata['key']}{marker}: {ts_type};")
    lines.append('}')
    return '\n'.join(lines) + '\n'


def render_module(record_classes: Iterable[type] = (ApiKey, Post, User)) -> str:
    return HEADER + '\n' + '\n'.join(render_interface(cls) for cls in record_classes)
