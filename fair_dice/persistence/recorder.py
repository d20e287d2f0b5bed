
"""
recorder.py
Implements event recording for fair dice games. Stores the stream of GameEvent objects so a transcript
can be written out and audited later.
Related modules:
- events.py: Defines GameEvent type.
- serializer.py: Used for saving/loading transcripts.
- core/engine.py: Engine listeners feed the recorder.
"""

from typing import Dict, List, Optional
from .events import GameEvent


class InMemoryRecorder:
    """
    Records GameEvent objects in memory for later retrieval.
    Methods:
        record(event): Add a new event.
        listener(game_id): Engine listener that records every emitted event dict.
        events(): Get all recorded events.
        flush(): No-op for in-memory; used in file recorders.
    """
    def __init__(self):
        self._events: List[GameEvent] = []

    def record(self, event: GameEvent) -> None:
        """Add a new event to the recorder."""
        self._events.append(event)

    def listener(self, game_id: str, player_type: Optional[str] = None):
        """Return a callable suitable for GameEngine(listeners=[...])."""
        def _on_event(event: Dict) -> None:
            payload = {k: v for k, v in event.items() if k != "type"}
            self.record(GameEvent(game_id, event["type"], payload, player_type))
        return _on_event

    def events(self):
        """Return all recorded events as a list."""
        return list(self._events)

    def flush(self):
        """No-op for in-memory recorder."""
        pass
