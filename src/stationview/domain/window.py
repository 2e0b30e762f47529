from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

HoursInput = Union[str, int, float, None]


@dataclass(frozen=True)
class WindowSpec:
    """A window request: a named preset, a custom duration in hours, or neither.

    An empty spec (no preset, no hours) asks for the last resolved window to be
    applied again.
    """

    preset: Optional[str] = None
    hours: HoursInput = None
    custom: bool = False

    def __post_init__(self) -> None:
        if self.preset is not None and self.custom:
            raise ValueError("a window is either a preset or a custom duration, not both")

    @classmethod
    def of_preset(cls, name: str) -> "WindowSpec":
        return cls(preset=name)

    @classmethod
    def of_hours(cls, hours: HoursInput) -> "WindowSpec":
        # hours may be None/"" for a cancelled prompt; custom keeps that distinct from "last"
        return cls(hours=hours, custom=True)

    @classmethod
    def last(cls) -> "WindowSpec":
        return cls()

    @property
    def is_preset(self) -> bool:
        return self.preset is not None
