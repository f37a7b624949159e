from __future__ import annotations

from typing import Any, Callable, Dict


_METHODS: Dict[str, Any] = {}


def register_method(name: str) -> Callable[[Any], Any]:
    def deco(cls: Any) -> Any:
        _METHODS[name.lower()] = cls
        return cls
    return deco


def get_method(name: str) -> Any:
    try:
        return _METHODS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(_METHODS)) or "<none>"
        raise KeyError(f"Unknown method '{name}' (registered: {known})") from None


def list_methods() -> Dict[str, Any]:
    return dict(_METHODS)


def build_method(name: str, **options: Any) -> Any:
    """Instantiate a registered method; options are validated by its config model."""
    return get_method(name)(**options)
