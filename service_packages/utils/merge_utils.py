"""
Merge utilities for layered configuration.

Default configuration declared by packages is recessive: settings that are
already present always shadow the defaults, recursively for nested mappings.
"""

from typing import Any, Dict, Mapping


def copy_settings(value: Any) -> Any:
    """
    Copy a settings tree by value.

    Mappings and lists are copied recursively, any other object is shared.
    """
    if isinstance(value, Mapping):
        return {key: copy_settings(item) for key, item in value.items()}
    if isinstance(value, list):
        return [copy_settings(item) for item in value]
    return value


def merge_recessive(defaults: Mapping[str, Any], settings: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge settings on top of defaults, recursing into nested mappings.

    For every key of settings, the setting wins unless both values are
    mappings, in which case they are merged the same way. Keys only present
    in defaults are adopted wholesale. Lists are leaves and never merged
    element-wise. Neither argument is mutated.

    Args:
        defaults: Lower-priority layer
        settings: Higher-priority layer

    Returns:
        A new merged dictionary
    """
    merged = copy_settings(defaults)

    for key, value in settings.items():
        current = merged.get(key)
        if key in merged and isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_recessive(current, value)
        else:
            merged[key] = copy_settings(value)

    return merged
