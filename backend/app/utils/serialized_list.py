"""
TripPlanner Backend: Serialized List Fields
=============================================

Participants, activities and photos are stored as text holding a JSON array.
Clients may send either a native list or a string that is already
serialized. normalize_serialized_list() is applied at the repository edge
before every insert or update.

    ["Alice", "Bob"]      -> '["Alice","Bob"]'
    '[ "Alice", "Bob" ]'  -> '["Alice","Bob"]'
    'Alice, Bob'          -> 'Alice, Bob'   (not JSON, stored unchanged)
    '{"a": 1}'            -> '{"a": 1}'     (JSON but not a list, unchanged)
"""

import json
from typing import Optional, Sequence, Union

SerializedListInput = Union[str, Sequence[str], None]

_SEPARATORS = (",", ":")


def normalize_serialized_list(value: SerializedListInput) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            return value
        if isinstance(parsed, list):
            return json.dumps(parsed, separators=_SEPARATORS, ensure_ascii=False)
        return value
    return json.dumps(list(value), separators=_SEPARATORS, ensure_ascii=False)

