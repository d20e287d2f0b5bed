"""
Registry of automated counterparts that can take the human seat.
Player modules in this package register themselves with @register_player("name"); they are imported
below so the CLI and the simulation script see every registered name.
Related modules:
- base.py: The Player interface.
- UI/cli.py, scripts/run_simulation.py: Look players up by name with create_player().
"""

import importlib
import pkgutil

PLAYER_MAP = {}


class UnknownPlayerError(KeyError):
    """Raised when no player is registered under the requested name."""
    def __init__(self, name):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Unknown player: {self.name}. Supported: {', '.join(sorted(PLAYER_MAP))}"


def register_player(name):
    """
    Class decorator that makes a Player subclass available under `name` (case-insensitive).
    Raises:
        ValueError: If another class already holds the name.
    """
    key = name.lower()

    def decorator(cls):
        if PLAYER_MAP.get(key, cls) is not cls:
            raise ValueError(f"player name {key!r} already registered by {PLAYER_MAP[key].__name__}")
        PLAYER_MAP[key] = cls
        return cls
    return decorator


def create_player(name, **kwargs):
    """
    Instantiate the player registered under `name`.
    Raises:
        UnknownPlayerError: If the name is not registered.
    """
    try:
        cls = PLAYER_MAP[name.lower()]
    except KeyError:
        raise UnknownPlayerError(name) from None
    return cls(**kwargs)


for _, _modname, _ispkg in pkgutil.iter_modules(__path__):
    if not _ispkg and _modname != "base":
        importlib.import_module(f"{__name__}.{_modname}")
