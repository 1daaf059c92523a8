"""The screens the simulator can show."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import pygame

from .constants import ViewID


class View(ABC):
    """A screen that reacts to events and draws itself onto a surface."""

    def __init__(self, font: Any, state: ViewID, width: int, height: int) -> None:
        self.font = font
        self.state = state
        self.width = width
        self.height = height

    @abstractmethod
    def handle_event(self, event: pygame.event.Event, curr_state: ViewID) -> ViewID:
        """React to ``event`` and return the view that should be shown next."""

    @abstractmethod
    def draw_components(self, surface: pygame.Surface) -> None:
        """Draw the whole view onto ``surface``."""