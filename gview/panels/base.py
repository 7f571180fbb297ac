"""Common panel interface shared by every screen region."""

from __future__ import annotations

from ..messages import NO_ACTION, Message
from ..render import Canvas, Rect
from ..ui_theme import UITheme


class Panel:
    """A screen region that reacts to keys and broadcast messages.

    ``handle_input`` turns a key into a message to originate;
    ``handle_message`` answers a broadcast message with a reply. Both return
    ``NO_ACTION`` when there is nothing to say.
    """

    def __init__(self) -> None:
        self.focused = False

    def on_focus(self) -> None:
        self.focused = True

    def on_blur(self) -> None:
        self.focused = False

    def handle_input(self, key: str) -> Message:
        return NO_ACTION

    def handle_message(self, message: Message) -> Message:
        return NO_ACTION

    def render(self, canvas: Canvas, rect: Rect, theme: UITheme) -> None:
        raise NotImplementedError

    def border_style(self, theme: UITheme) -> str:
        return theme.border_focused if self.focused else theme.border_unfocused

    def text_style(self, theme: UITheme) -> str:
        return "" if self.focused else theme.text_unfocused


class ModalPanel(Panel):
    """Overlay panel that consumes all input while open."""

    WIDTH_PERCENT = 80
    HEIGHT_PERCENT = 80

    def __init__(self) -> None:
        super().__init__()
        self.is_open = False

    def modal_rect(self, screen: Rect) -> Rect:
        return screen.centered(self.WIDTH_PERCENT, self.HEIGHT_PERCENT)


def scroll_to_show(top: int, selected: int, visible_rows: int) -> int:
    """Return a new first visible row so ``selected`` stays on screen."""
    if visible_rows <= 0:
        return 0
    if selected < top:
        return selected
    if selected >= top + visible_rows:
        return selected - visible_rows + 1
    return max(0, top)
