"""Responsive layout decisions based on viewport width."""

from typing import Protocol

# Material breakpoints, in pixels
BREAKPOINTS: dict[str, int] = {
    "xs": 0,
    "sm": 600,
    "md": 960,
    "lg": 1280,
    "xl": 1920,
}


class ResponsiveLayout(Protocol):
    """Answers whether the compact (mobile) rendering applies."""

    def is_mobile(self, breakpoint: str = "sm") -> bool:
        ...


class ViewportLayout:
    """Layout for a fixed viewport width."""

    def __init__(self, width: int):
        self.width = width

    def is_mobile(self, breakpoint: str = "sm") -> bool:
        """True when the viewport is narrower than the breakpoint."""
        if breakpoint not in BREAKPOINTS:
            raise ValueError(f"Unknown breakpoint: {breakpoint}")
        return self.width < BREAKPOINTS[breakpoint]
