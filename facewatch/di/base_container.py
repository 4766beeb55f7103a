# Standard library imports
import logging
from typing import Any, Callable, Dict, Union

logger = logging.getLogger(__name__)

Key = Union[type, str]


class BaseContainer:
    """
    Minimal service registry.

    Keys are either types (interfaces or concrete classes) or plain strings
    for configuration values. Singletons are returned as-is; factories are
    invoked on every get().
    """

    def __init__(self) -> None:
        self._singletons: Dict[Key, Any] = {}
        self._factories: Dict[Key, Callable[[], Any]] = {}

    def register_singleton(self, key: Key, instance: Any) -> None:
        self._singletons[key] = instance
        self._factories.pop(key, None)

    def register_factory(self, key: Key, factory: Callable[[], Any]) -> None:
        self._factories[key] = factory
        self._singletons.pop(key, None)

    def is_registered(self, key: Key) -> bool:
        return key in self._singletons or key in self._factories

    def get(self, key: Key) -> Any:
        """
        Resolve a registered dependency.

        Raises:
            ValueError: If nothing is registered for key
        """
        if key in self._singletons:
            return self._singletons[key]
        if key in self._factories:
            return self._factories[key]()
        name = key if isinstance(key, str) else key.__name__
        raise ValueError(f"No registration found for {name}")
