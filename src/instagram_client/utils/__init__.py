"""Utility modules for Instagram Client."""

from .sanitizer import (
    mask_sensitive_data,
    mask_params,
    add_sensitive_keys,
)

__all__ = [
    'mask_sensitive_data',
    'mask_params',
    'add_sensitive_keys',
]
