"""The window, its event loop and switching between views."""

from __future__ import annotations

import argparse
import sys
from typing import Any, Iterable

import pygame

from .battlefield_view import DEFAULT_FIELD_PATH, BattlefieldView
from .constants import ViewID
from .tmx import TmxError
from .view import View

WINDOW_TITLE = "Battle Simulator"
DEFAULT_FONT_PATH = "Frontend/Fonts/CallOfOpsDuty.otf"
FONT_SIZE = 24
FRAME_RATE = 60


class ViewManager:
    """Runs the event loop and hands events to the view being shown."""

    def __init__(self, window: pygame.Surface, views: Iterable[View], font: Any = None) -> None:
        self.window = window
        self.font = font
        self.views: dict[ViewID, View] = {view.state: view for view in views}
        if not self.views:
            raise ValueError("at least one view is required")
        self.current_view = next(iter(self.views.values()))
        self.is_open = True

    def run(self) -> None:
        """Handle events and redraw until the window is closed."""
        clock = pygame.time.Clock()
        while self.is_open:
            for event in pygame.event.get():
                self.handle_event(event)
            self.window.fill((0, 0, 0))
            self.current_view.draw_components(self.window)
            pygame.display.flip()
            clock.tick(FRAME_RATE)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.is_open = False
        view = self.current_view
        new_state = view.handle_event(event, view.state)
        if new_state != view.state:
            self.switch_view(new_state)

    def switch_view(self, new_state: ViewID) -> None:
        try:
            self.current_view = self.views[new_state]
        except KeyError:
            raise ValueError(f"no view loaded for {new_state!r}") from None


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="battlesim", description=WINDOW_TITLE)
    parser.add_argument("--map", default=str(DEFAULT_FIELD_PATH), help="TMX map to play on")
    parser.add_argument("--font", default=DEFAULT_FONT_PATH, help="font file")
    parser.add_argument("--width", type=int, help="window width (default: desktop width)")
    parser.add_argument("--height", type=int, help="window height (default: desktop height)")
    args = parser.parse_args(argv)

    pygame.init()
    try:
        width, height = args.width, args.height
        if width is None or height is None:
            desktop_w, desktop_h = pygame.display.get_desktop_sizes()[0]
            width = desktop_w if width is None else width
            height = desktop_h if height is None else height
        window = pygame.display.set_mode((width, height))
        pygame.display.set_caption(WINDOW_TITLE)

        try:
            font = pygame.font.Font(args.font, FONT_SIZE)
        except (OSError, pygame.error):
            print("Failed to load font", file=sys.stderr)
            return 1

        win_w, win_h = window.get_size()
        try:
            view = BattlefieldView(font, ViewID.URBANFIELD, win_w, win_h, args.map)
        except TmxError as exc:
            print(exc, file=sys.stderr)
            return 1

        ViewManager(window, [view], font).run()
        return 0
    finally:
        pygame.quit()