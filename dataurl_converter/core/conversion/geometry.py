"""Resize and crop geometry."""

import math
from typing import NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict

from dataurl_converter.models.conversion import FitMode


class Rect(NamedTuple):
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        """Pillow-style ``(left, upper, right, lower)`` box."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


class Geometry(BaseModel):
    """Output size plus the source rectangle sampled into it."""

    model_config = ConfigDict(frozen=True)

    width: int
    height: int
    sx: int
    sy: int
    s_width: int
    s_height: int

    @property
    def source_rect(self) -> Rect:
        return Rect(self.sx, self.sy, self.s_width, self.s_height)

    @property
    def output_rect(self) -> Rect:
        return Rect(0, 0, self.width, self.height)


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; pixel sizes round .5 upward
    return math.floor(value + 0.5)


def compute_resize(
    src_width: int,
    src_height: int,
    max_width: Optional[int] = None,
    max_height: Optional[int] = None,
    fit: Union[FitMode, str] = FitMode.CONTAIN,
) -> Geometry:
    """Compute output dimensions and the source region to sample.

    ``contain`` scales the whole source to fit inside the bounds and never
    upscales. ``cover`` outputs exactly the bounds and samples the largest
    centered source region with the bounds' aspect ratio. Unset bounds
    default to the source dimensions.

    Sizes round to nearest; crop offsets floor, so the sampled region always
    stays inside the source.
    """
    target_width = max_width if max_width is not None else src_width
    target_height = max_height if max_height is not None else src_height

    if FitMode(fit) is FitMode.CONTAIN:
        scale = min(target_width / src_width, target_height / src_height, 1)
        return Geometry(
            width=max(1, _round_half_up(src_width * scale)),
            height=max(1, _round_half_up(src_height * scale)),
            sx=0,
            sy=0,
            s_width=src_width,
            s_height=src_height,
        )

    source_aspect = src_width / src_height
    target_aspect = target_width / target_height
    s_width, s_height = src_width, src_height
    if source_aspect > target_aspect:
        # Source is wider, crop horizontally
        s_width = min(src_width, max(1, _round_half_up(src_height * target_aspect)))
    else:
        # Source is taller, crop vertically
        s_height = min(src_height, max(1, _round_half_up(src_width / target_aspect)))

    return Geometry(
        width=target_width,
        height=target_height,
        sx=(src_width - s_width) // 2,
        sy=(src_height - s_height) // 2,
        s_width=s_width,
        s_height=s_height,
    )
