"""
Which keys exist, and the plain-data description of the shell skin.

Nothing here touches a geometry engine: patches and braces name anchors, and the stitcher turns
them into solids later. That keeps the patch table testable on its own.
"""
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Tuple, Union

from .config import ConfigurationError, ShapeConfig
from .posts import Post


@dataclass(frozen=True)
class KeySite:
    column: int
    row: int


@dataclass(frozen=True)
class ThumbSite:
    slot: str


@dataclass(frozen=True)
class LeftSite:
    """
    A point beside column 0, pushed out to make room for the left wall.
    """
    row: int
    direction: int  # 1 for the top edge of the key, -1 for the bottom edge


Site = Union[KeySite, ThumbSite, LeftSite]


class WallOffset(NamedTuple):
    level: int  # 1, 2 or 3, see walls.wall_locate
    dx: float
    dy: float


class Anchor(NamedTuple):
    site: Site
    post: Post
    nudge: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    wall: Optional[WallOffset] = None


class Patch(NamedTuple):
    """
    A piece of skin hulled from an ordered run of anchors.

    mode is "triangles" for the hulls of every three consecutive anchors, "hull" for one hull of
    all of them and "bottom" for a hull closed against the floor.
    """
    anchors: Tuple[Anchor, ...]
    mode: str = "triangles"


class Brace(NamedTuple):
    """
    One wall panel swept from two anchors down to the floor.
    """
    anchor1: Anchor
    dx1: float
    dy1: float
    anchor2: Anchor
    dx2: float
    dy2: float

    @property
    def is_corner(self) -> bool:
        return self.anchor1 == self.anchor2


def key(column: int, row: int, post: Post, nudge=(0.0, 0.0, 0.0), wall: Optional[WallOffset] = None) -> Anchor:
    return Anchor(KeySite(column, row), post, tuple(nudge), wall)


def thumb(slot: str, post: Post, nudge=(0.0, 0.0, 0.0), wall: Optional[WallOffset] = None) -> Anchor:
    return Anchor(ThumbSite(slot), post, tuple(nudge), wall)


def left(row: int, direction: int, post: Post, wall: Optional[WallOffset] = None) -> Anchor:
    return Anchor(LeftSite(row, direction), post, (0.0, 0.0, 0.0), wall)


def triangles(*anchors: Anchor) -> Patch:
    return Patch(tuple(anchors), "triangles")


def hull(*anchors: Anchor) -> Patch:
    return Patch(tuple(anchors), "hull")


def bottom_hull(*anchors: Anchor) -> Patch:
    return Patch(tuple(anchors), "bottom")


def key_brace(x1: int, y1: int, dx1: float, dy1: float, post1: Post,
              x2: int, y2: int, dx2: float, dy2: float, post2: Post) -> Brace:
    return Brace(key(x1, y1, post1), dx1, dy1, key(x2, y2, post2), dx2, dy2)


class Topology:
    """
    Key existence for a configuration.

    Column 0 is the inner column when `inner_column` is set; it stops two rows short. Main columns
    reach `cornerrow`, and the last row only exists below the columns named in `lastrow_columns`
    (plus every column from the fifth main one on when `extra_row` is set).
    """

    def __init__(self, config: ShapeConfig):
        self.config = config

    @property
    def innercol_offset(self) -> int:
        return self.config.innercol_offset

    def bottom_row(self, column: int) -> int:
        config = self.config
        if config.inner_column and column == 0:
            return config.nrows - 3
        main_column = column - config.innercol_offset
        if main_column in config.lastrow_columns or (config.extra_row and main_column >= 4):
            return config.lastrow
        return config.cornerrow

    def column_rows(self, column: int) -> range:
        return range(self.bottom_row(column) + 1)

    def has_key(self, column: int, row: int) -> bool:
        return 0 <= column < self.config.ncols and 0 <= row <= self.bottom_row(column)

    def keys(self) -> Iterator[KeySite]:
        for column in range(self.config.ncols):
            for row in self.column_rows(column):
                yield KeySite(column, row)

    def is_inner(self, column: int) -> bool:
        return self.config.inner_column and column == 0

    def is_extra_row(self, column: int, row: int) -> bool:
        return (
            self.config.extra_row
            and row == self.config.lastrow
            and column - self.config.innercol_offset >= 4
        )

    def validate(self):
        config = self.config
        io = config.innercol_offset

        for column in range(config.ncols - 1):
            step = abs(self.bottom_row(column) - self.bottom_row(column + 1))
            if step > 1:
                raise ConfigurationError(
                    "columns {} and {} end {} rows apart; neighbouring columns may differ by one row at most".format(
                        column, column + 1, step
                    )
                )

        if config.has_thumb:
            if config.ncols < io + 4:
                raise ConfigurationError("the {} thumb cluster needs at least {} columns".format(config.thumb_style, io + 4))
            expected = {
                io: config.cornerrow,
                io + 1: config.cornerrow,
                io + 2: config.lastrow,
                io + 3: config.lastrow,
            }
            for column, row in expected.items():
                if self.bottom_row(column) != row:
                    raise ConfigurationError(
                        "the {} thumb cluster attaches below column {} at row {}, but that column ends at row {}".format(
                            config.thumb_style, column, row, self.bottom_row(column)
                        )
                    )

        if config.pinky_15u:
            bottom = self.bottom_row(config.lastcol)
            if not 0 <= config.first_15u_row <= config.last_15u_row <= bottom:
                raise ConfigurationError(
                    "1.5u rows {}..{} do not fit column {} (rows 0..{})".format(
                        config.first_15u_row, config.last_15u_row, config.lastcol, bottom
                    )
                )
