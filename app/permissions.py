"""Named permission bits stored in ``User.permissions``.

Each registered name owns one bit of the integer mask. ``Admin`` is always
bit 0 and implies every other permission.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List

logger = logging.getLogger(__name__)

ADMIN = 'Admin'
ADMIN_BIT = 1
MAX_PERMISSION_BITS = 63


class PermissionRegistry:
    """Registry mapping permission names to bit values."""

    def __init__(self):
        self._bits: Dict[str, int] = {ADMIN: ADMIN_BIT}

    def register(self, name: str) -> int:
        """Assign the next free bit to ``name``."""
        name = (name or '').strip()
        if not name:
            raise ValueError('Permission name is required')
        if name in self._bits:
            raise ValueError(f'Permission {name} is already registered')
        if len(self._bits) >= MAX_PERMISSION_BITS:
            raise ValueError(f'Cannot register {name}: all {MAX_PERMISSION_BITS} permission bits are in use')
        value = 1 << len(self._bits)
        self._bits[name] = value
        logger.debug("Registered permission %s as %d", name, value)
        return value

    def ensure(self, name: str) -> int:
        """Return the bit for ``name``, registering it on first use."""
        if name in self._bits:
            return self._bits[name]
        return self.register(name)

    def value_of(self, name: str) -> int:
        try:
            return self._bits[name]
        except KeyError:
            raise ValueError(f'Unknown permission: {name}') from None

    def mask_for(self, names: Iterable[str]) -> int:
        mask = 0
        for name in names:
            mask |= self.value_of(name)
        return mask

    def has(self, mask: int, name: str) -> bool:
        if mask & ADMIN_BIT:
            return True
        return bool(mask & self.value_of(name))

    def names_for(self, mask: int) -> List[str]:
        return [name for name, bit in self._bits.items() if mask & bit]


registry = PermissionRegistry()


def register_permission(name: str) -> int:
    return registry.register(name)


def has_permission(mask: int, name: str) -> bool:
    return registry.has(mask, name)
