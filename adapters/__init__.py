"""
Adapters package - External service connections.
Push delivery through the Expo push service.
"""

from adapters import push_adapter

__all__ = [
    "push_adapter",
]
