"""Frontend interfaces for the Game of Life."""

from .console import ConsoleRenderer, render
from .cli import LifeCLI

__all__ = ["ConsoleRenderer", "render", "LifeCLI"]
