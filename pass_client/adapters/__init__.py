"""Format adapters between entity models and wire documents."""

from .json_adapter import JsonAdapter

__all__ = ["JsonAdapter"]
