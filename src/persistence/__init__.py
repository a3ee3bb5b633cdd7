"""
Persistence Module

JSON conversion for league snapshots. Storage location is the caller's
choice.
"""

from .snapshot_serializer import (
    to_primitive,
    from_primitive,
    snapshot_to_dict,
    snapshot_from_dict,
    save_snapshot,
    load_snapshot,
)

__all__ = [
    'to_primitive',
    'from_primitive',
    'snapshot_to_dict',
    'snapshot_from_dict',
    'save_snapshot',
    'load_snapshot',
]
