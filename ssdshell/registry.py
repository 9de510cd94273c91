"""Registry of externally supplied test-case classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Tuple, Type, TypeVar

from .logger import log_message


class ScriptTC(ABC):
    """A test case that can be created from the registry and run."""

    @abstractmethod
    def run_script_tc(self) -> None:
        """Run the test case."""


Creator = Callable[[], ScriptTC]
_T = TypeVar("_T", bound=Type[ScriptTC])


class Registry:
    """Maps names to factories of test cases, kept in name order."""

    def __init__(self) -> None:
        self._creators: Dict[str, Creator] = {}

    def register(self, name: str, creator: Creator) -> None:
        """Register ``creator`` under ``name``, replacing any earlier entry."""
        self._creators[name] = creator

    def items(self) -> List[Tuple[str, Creator]]:
        """Return the registered (name, creator) pairs sorted by name."""
        return sorted(self._creators.items())

    def run_all(self) -> None:
        """Create and run every registered test case in name order."""
        for name, creator in self.items():
            case = creator()
            log_message(f"DLL script tc class : {name}")
            case.run_script_tc()

    def __len__(self) -> int:
        return len(self._creators)

    def __contains__(self, name: object) -> bool:
        return name in self._creators


_default: Optional[Registry] = None


def default_registry() -> Registry:
    """Return the shared registry."""
    global _default
    if _default is None:
        _default = Registry()
    return _default


def register_class(cls: _T) -> _T:
    """Class decorator that registers ``cls`` by name in the shared registry."""
    default_registry().register(cls.__name__, cls)
    return cls