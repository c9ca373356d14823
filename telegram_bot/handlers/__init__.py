"""
Handlers package
"""

from .commands import router, parse_command_text

__all__ = [
    "router",
    "parse_command_text"
]
