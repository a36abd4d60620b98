"""
Utility helpers for service packages.
"""

from .merge_utils import copy_settings, merge_recessive

__all__ = [
    'copy_settings',
    'merge_recessive'
]
