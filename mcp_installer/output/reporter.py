"""
Status Reporter

Renders operator-facing status lines with a fixed style per message kind.
"""

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from rich.console import Console
from rich.markup import escape


class MessageKind(str, Enum):
    """Kinds of status lines."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    HEADING = "heading"
    DETAIL = "detail"


# kind -> (rich style, icon)
STYLES: Mapping[MessageKind, Tuple[str, str]] = MappingProxyType({
    MessageKind.INFO: ("cyan", ""),
    MessageKind.SUCCESS: ("bright_green", "✅"),
    MessageKind.WARNING: ("yellow", "⚠️"),
    MessageKind.ERROR: ("bright_red", "❌"),
    MessageKind.HEADING: ("bold bright_cyan", ""),
    MessageKind.DETAIL: ("dim", ""),
})


def render(
    kind: MessageKind,
    text: str,
    icon: Optional[str] = None,
    indent: int = 0,
) -> str:
    """
    Format a status line as rich markup.

    Pure: the same arguments always yield the same string.

    Args:
        kind: Message kind
        text: Message text (markup is escaped)
        icon: Icon to use instead of the kind's own ("" for none)
        indent: Leading spaces before the styled text

    Returns:
        Rich markup string
    """
    style, default_icon = STYLES[MessageKind(kind)]
    icon = default_icon if icon is None else icon
    body = escape(text)
    if icon:
        body = f"{icon} {body}"
    return f"{' ' * indent}[{style}]{body}[/{style}]"


class Reporter:
    """Writes rendered status lines to the operator's console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def emit(self, kind: MessageKind, text: str, **options) -> None:
        self.console.print(render(kind, text, **options))

    def info(self, text: str) -> None:
        self.emit(MessageKind.INFO, text)

    def success(self, text: str) -> None:
        self.emit(MessageKind.SUCCESS, text)

    def warning(self, text: str) -> None:
        self.emit(MessageKind.WARNING, text)

    def error(self, text: str) -> None:
        self.emit(MessageKind.ERROR, text)

    def heading(self, text: str) -> None:
        self.emit(MessageKind.HEADING, text)

    def blank(self) -> None:
        self.console.print()

    def hint(self, text: str) -> None:
        """Print a remediation hint."""
        self.emit(MessageKind.WARNING, text, icon="💡")

    def link(self, url: str) -> None:
        self.emit(MessageKind.INFO, url, icon="🔗", indent=3)

    def details(self, lines: Iterable[str]) -> None:
        """Print indented detail lines (e.g. captured diagnostic output)."""
        for line in lines:
            self.emit(MessageKind.DETAIL, line, indent=3)

    def next_steps(self, title: str, steps: Iterable[str]) -> None:
        """Print a numbered list of follow-up actions."""
        self.info(f"📋 {title}")
        for number, step in enumerate(steps, start=1):
            self.emit(MessageKind.INFO, f"{number}. {step}", indent=3)
