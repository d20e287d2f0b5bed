
"""
events.py
Defines the GameEvent dataclass for recording what the engine disclosed during a fair dice game.
Used by recorder.py and serializer.py to keep a transcript that can be audited after the game.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class GameEvent:
    """
    Represents a single event in the game (commitment published, secret revealed, die assigned, ...).
    Fields:
        game_id (str): Unique game identifier.
        event_type (str): Type of event (e.g., 'Committed').
        payload (dict): Event-specific data.
        player_type (str|None): Player class name or 'Human' for the human seat (optional).
    """
    game_id: str
    event_type: str
    payload: Dict[str, Any]
    player_type: Optional[str] = None
