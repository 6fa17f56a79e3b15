from typing import Any, Mapping, TypedDict, TypeVar

U = TypeVar("U", bound=TypedDict("U", {}))


def resolve_config(config: Mapping[str, Any], default_config: U) -> U:
    """Overlay ``config`` on a copy of ``default_config``.

    Keys the defaults do not know about are rejected so that a misspelt
    option fails loudly instead of being dropped.
    """
    unknown = sorted(set(config) - set(default_config))
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    _config = default_config.copy()
    _config.update(config)
    return _config
