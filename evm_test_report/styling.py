"""Semantic styling of report text.

Renderers only pick a role for a piece of text; the role decides the
decoration. Styles never change the characters that get printed, so a console
without colour support shows exactly the same report.
"""

from collections.abc import Mapping
from typing import Literal, TypeAlias

from rich.text import Text

Role: TypeAlias = Literal[
    "success",
    "revert",
    "failure",
    "name",
    "heading",
    "label",
    "pc",
    "decoded",
    "error",
    "passed",
    "failed",
    "percent",
    "elapsed",
    "header_name",
    "header_return_data",
    "header_gas",
    "header_status",
]

ROLE_STYLES: Mapping[Role, str] = {
    "success": "green",
    "revert": "red",
    "failure": "red",
    "name": "bold cyan",
    "heading": "cyan",
    "label": "yellow",
    "pc": "yellow",
    "decoded": "cyan",
    "error": "red",
    "passed": "green",
    "failed": "red",
    "percent": "yellow",
    "elapsed": "magenta",
    "header_name": "magenta",
    "header_return_data": "yellow",
    "header_gas": "cyan",
    "header_status": "blue",
}

# Tree connectors grouping a record's sub-items
BRANCH = "├─"
LAST = "╰─"
PIPE = "│ "


def style(text: object, role: Role) -> Text:
    """Return ``text`` decorated for ``role``."""
    return Text(str(text), style=ROLE_STYLES[role])


def connector(is_last: bool, *, continuing: str = BRANCH) -> str:
    """Pick the tree connector for an item."""
    return LAST if is_last else continuing
