
"""
serializer.py
Provides utility functions for serializing game events to/from JSON, and for writing and reading
transcripts as JSON lines. Keys and tags are written as upper-case hex.
"""

import json
from typing import Any, Iterable, List

from .events import GameEvent


def _default(o: Any):
    if isinstance(o, (bytes, bytearray)):
        return bytes(o).hex().upper()
    return getattr(o, '__dict__', str(o))


def dumps(obj: Any) -> str:
    """
    Serialize a Python object (including dataclasses and bytes) to a JSON string.
    Args:
        obj: Object to serialize.
    Returns:
        str: JSON string.
    """
    return json.dumps(obj, default=_default)


def loads(s: str):
    """
    Deserialize a JSON string to a Python object (dict/list).
    Args:
        s (str): JSON string.
    Returns:
        object: Deserialized Python object.
    """
    return json.loads(s)


def write_transcript(path: str, events: Iterable[GameEvent]) -> None:
    """Write one JSON object per event."""
    with open(path, "w", encoding="utf-8") as f:
        for event in events:
            f.write(dumps(event) + "\n")


def read_transcript(path: str) -> List[GameEvent]:
    """
    Read a transcript written by write_transcript. Hex strings stay strings; audit.py decodes them.
    Raises:
        ValueError: If a line is not a JSON event object.
    """
    events = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            d = loads(line)
            if not isinstance(d, dict) or not isinstance(d.get("payload"), dict):
                raise ValueError(f"malformed transcript line: {line[:80]}")
            events.append(GameEvent(d["game_id"], d["event_type"], d["payload"], d.get("player_type")))
    return events
