"""Greeting helper."""

from __future__ import annotations

from typing import Optional

from rich.console import Console

console = Console()


def greet(first_name: Optional[str] = None) -> str:
    """Print ``Hello <first_name>!``, or ``Hello!`` without a name."""
    message = f"Hello {first_name}!" if first_name else "Hello!"
    console.print(message, markup=False, highlight=False)
    return message
