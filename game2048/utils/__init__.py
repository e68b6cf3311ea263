from __future__ import annotations

from .console import GameConsole, console
from .pretty_errors import install_pretty_errors

__all__ = ["GameConsole", "console", "install_pretty_errors"]
