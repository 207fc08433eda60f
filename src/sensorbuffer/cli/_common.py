"""Shared CLI helpers."""

from typing import Dict, List, Optional

import typer
from rich.console import Console

console = Console()
err_console = Console(stderr=True)


def parse_properties(values: Optional[List[str]]) -> Dict[str, str]:
    """Parse repeated ``key=value`` options into a dict.

    Later occurrences of a key win. Only the first ``=`` separates key and
    value, so values may contain ``=``.

    Raises:
        typer.BadParameter: If an entry has no ``=`` or an empty key.
    """
    properties: Dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(
                f"expected key=value, got '{item}'", param_hint="--property"
            )
        properties[key] = value
    return properties
