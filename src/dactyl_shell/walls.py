"""
Case walls.

Each wall panel is a `Brace` between two anchors, pushed outward by (dx, dy) and swept down to the
floor by the stitcher. The left wall stands off column 0 and is bridged back to it with hulls.
"""
import logging
from typing import List, Union

from .config import ShapeConfig
from .posts import BL, BR, MINI_BR, MINI_TL, THUMB_BR, THUMB_TL, THUMB_TR, TL, TR, WEB, WIDE_BR, WIDE_TR
from .topology import Anchor, Brace, Patch, Topology, WallOffset, bottom_hull, hull, key, key_brace, left, thumb

WallItem = Union[Brace, Patch]


def wall_locate1(config: ShapeConfig, dx, dy):
    logging.debug("wall_locate1()")
    return [dx * config.wall_thickness, dy * config.wall_thickness, -1]


def wall_locate2(config: ShapeConfig, dx, dy):
    logging.debug("wall_locate2()")
    return [dx * config.wall_x_offset, dy * config.wall_y_offset, -config.wall_z_offset]


def wall_locate3(config: ShapeConfig, dx, dy):
    logging.debug("wall_locate3()")
    return [
        dx * (config.wall_x_offset + config.wall_thickness),
        dy * (config.wall_y_offset + config.wall_thickness),
        -config.wall_z_offset,
    ]


WALL_LOCATES = {1: wall_locate1, 2: wall_locate2, 3: wall_locate3}


def wall_locate(config: ShapeConfig, offset: WallOffset):
    return WALL_LOCATES[offset.level](config, offset.dx, offset.dy)


def _walled(anchor: Anchor, level: int, dx, dy) -> Anchor:
    return anchor._replace(wall=WallOffset(level, dx, dy))


################
## Case Walls ##
################


def back_wall(config: ShapeConfig) -> List[WallItem]:
    logging.debug("back_wall()")
    braces = [key_brace(0, 0, 0, 1, TL, 0, 0, 0, 1, TR)]
    for x in range(1, config.ncols):
        braces.append(key_brace(x, 0, 0, 1, TL, x, 0, 0, 1, TR))
        braces.append(key_brace(x, 0, 0, 1, TL, x - 1, 0, 0, 1, TR))

    # back left corner, bent towards the left wall
    braces.append(Brace(key(0, 0, TL), 0, 1, left(0, 1, WEB), -0.6, 1))
    braces.append(Brace(left(0, 1, WEB), -0.6, 1, left(0, 1, WEB), -1, 0))
    return braces


def right_wall(config: ShapeConfig) -> List[WallItem]:
    logging.debug("right_wall()")
    lastcol = config.lastcol
    bottom = Topology(config).bottom_row(lastcol)

    braces = [key_brace(lastcol, 0, 0, 1, TR, lastcol, 0, 1, 0, TR)]
    braces.append(key_brace(lastcol, 0, 1, 0, TR, lastcol, 0, 1, 0, BR))
    for y in range(1, bottom + 1):
        braces.append(key_brace(lastcol, y - 1, 1, 0, BR, lastcol, y, 1, 0, TR))
        braces.append(key_brace(lastcol, y, 1, 0, TR, lastcol, y, 1, 0, BR))
    braces.append(key_brace(lastcol, bottom, 0, -1, BR, lastcol, bottom, 1, 0, BR))
    return braces


def pinky_right_wall(config: ShapeConfig) -> List[WallItem]:
    """
    Right wall for a 1.5u outer column: rows first_15u_row..last_15u_row are walled from their
    widened posts, the rest from their plain ones.
    """
    logging.debug("pinky_right_wall()")
    lastcol = config.lastcol
    first = config.first_15u_row
    last = config.last_15u_row
    bottom = Topology(config).bottom_row(lastcol)
    braces = []

    if first == 0:
        braces.append(key_brace(lastcol, 0, 0, 1, TR, lastcol, 0, 0, 1, WIDE_TR))
        braces.append(key_brace(lastcol, 0, 0, 1, WIDE_TR, lastcol, 0, 1, 0, WIDE_TR))
    else:
        braces.append(key_brace(lastcol, 0, 0, 1, TR, lastcol, 0, 1, 0, TR))

    if last == bottom:
        braces.append(key_brace(lastcol, bottom, 0, -1, BR, lastcol, bottom, 0, -1, WIDE_BR))
        braces.append(key_brace(lastcol, bottom, 0, -1, WIDE_BR, lastcol, bottom, 1, 0, WIDE_BR))
    else:
        braces.append(key_brace(lastcol, bottom, 0, -1, BR, lastcol, bottom, 1, 0, BR))

    # plain rows above the wide ones
    for y in range(first - 1):
        braces.append(key_brace(lastcol, y, 1, 0, TR, lastcol, y, 1, 0, BR))
        braces.append(key_brace(lastcol, y, 1, 0, BR, lastcol, y + 1, 1, 0, TR))
    if first >= 1:
        braces.append(key_brace(lastcol, first - 1, 1, 0, TR, lastcol, first, 1, 0, WIDE_TR))

    # wide rows
    for y in range(first, last + 1):
        braces.append(key_brace(lastcol, y, 1, 0, WIDE_TR, lastcol, y, 1, 0, WIDE_BR))
    for y in range(first, last):
        braces.append(key_brace(lastcol, y + 1, 1, 0, WIDE_TR, lastcol, y, 1, 0, WIDE_BR))

    # plain rows below the wide ones
    if last <= bottom - 1:
        braces.append(key_brace(lastcol, last, 1, 0, WIDE_BR, lastcol, last + 1, 1, 0, BR))
    for y in range(last + 1, bottom):
        braces.append(key_brace(lastcol, y, 1, 0, BR, lastcol, y + 1, 1, 0, TR))
        braces.append(key_brace(lastcol, y + 1, 1, 0, TR, lastcol, y + 1, 1, 0, BR))

    return braces


def left_wall(config: ShapeConfig) -> List[WallItem]:
    logging.debug("left_wall()")
    bottom = Topology(config).bottom_row(0)
    items = []

    for y in range(bottom + 1):
        items.append(Brace(left(y, 1, WEB), -1, 0, left(y, -1, WEB), -1, 0))
        items.append(hull(
            key(0, y, TL),
            left(y, 1, WEB),
            key(0, y, BL),
            left(y, -1, WEB),
        ))

    for y in range(1, bottom + 1):
        items.append(Brace(left(y - 1, -1, WEB), -1, 0, left(y, 1, WEB), -1, 0))
        items.append(hull(
            key(0, y - 1, BL),
            left(y - 1, -1, WEB),
            key(0, y, TL),
            left(y, 1, WEB),
        ))

    return items


def front_wall(config: ShapeConfig) -> List[WallItem]:
    """
    Walk the bottom key of every column from the thumb cluster (or column 0) to the right wall.
    """
    logging.debug("front_wall()")
    topology = Topology(config)
    start = config.innercol_offset + 3 if config.has_thumb else 0
    braces = []
    for x in range(start, config.ncols):
        y = topology.bottom_row(x)
        if x > start:
            braces.append(key_brace(x - 1, topology.bottom_row(x - 1), 0, -1, BR, x, y, 0, -1, BL))
        braces.append(key_brace(x, y, 0, -1, BL, x, y, 0, -1, BR))
    return braces


def front_left_corner(config: ShapeConfig) -> List[WallItem]:
    """
    Close the front left corner when no thumb cluster takes its place.
    """
    logging.debug("front_left_corner()")
    bottom = Topology(config).bottom_row(0)
    corner = left(bottom, -1, WEB)
    return [
        Brace(corner, -1, 0, corner, 0, -1),
        Brace(corner, 0, -1, key(0, bottom, BL), 0, -1),
    ]


#################
## Thumb Walls ##
#################


def default_thumb_walls(config: ShapeConfig) -> List[WallItem]:
    logging.debug("default_thumb_walls()")
    io = config.innercol_offset
    return [
        Brace(thumb("mr", BR), 0, -1, thumb("tr", THUMB_BR), 0, -1),
        Brace(thumb("mr", BR), 0, -1, thumb("mr", BL), 0, -1),
        Brace(thumb("br", BR), 0, -1, thumb("br", BL), 0, -1),
        Brace(thumb("ml", TR), -0.3, 1, thumb("ml", TL), 0, 1),
        Brace(thumb("bl", TR), 0, 1, thumb("bl", TL), 0, 1),
        Brace(thumb("br", TL), -1, 0, thumb("br", BL), -1, 0),
        Brace(thumb("bl", TL), -1, 0, thumb("bl", BL), -1, 0),
        # corners
        Brace(thumb("br", BL), -1, 0, thumb("br", BL), 0, -1),
        Brace(thumb("bl", TL), -1, 0, thumb("bl", TL), 0, 1),
        # tweeners
        Brace(thumb("mr", BL), 0, -1, thumb("br", BR), 0, -1),
        Brace(thumb("ml", TL), 0, 1, thumb("bl", TR), 0, 1),
        Brace(thumb("bl", BL), -1, 0, thumb("br", TL), -1, 0),
        Brace(thumb("tr", THUMB_BR), 0, -1, key(io + 3, config.lastrow, BL), 0, -1),
    ]


def mini_thumb_walls(config: ShapeConfig) -> List[WallItem]:
    logging.debug("mini_thumb_walls()")
    io = config.innercol_offset
    return [
        Brace(thumb("mr", BR), 0, -1, thumb("tr", MINI_BR), 0, -1),
        Brace(thumb("mr", BR), 0, -1, thumb("mr", BL), 0, -1),
        Brace(thumb("br", BR), 0, -1, thumb("br", BL), 0, -1),
        Brace(thumb("bl", TR), 0, 1, thumb("bl", TL), 0, 1),
        Brace(thumb("br", TL), -1, 0, thumb("br", BL), -1, 0),
        Brace(thumb("bl", TL), -1, 0, thumb("bl", BL), -1, 0),
        # corners
        Brace(thumb("br", BL), -1, 0, thumb("br", BL), 0, -1),
        Brace(thumb("bl", TL), -1, 0, thumb("bl", TL), 0, 1),
        # tweeners
        Brace(thumb("mr", BL), 0, -1, thumb("br", BR), 0, -1),
        Brace(thumb("bl", BL), -1, 0, thumb("br", TL), -1, 0),
        Brace(thumb("tr", MINI_BR), 0, -1, key(io + 3, config.lastrow, BL), 0, -1),
    ]


def carbonfet_thumb_walls(config: ShapeConfig) -> List[WallItem]:
    logging.debug("carbonfet_thumb_walls()")
    io = config.innercol_offset
    return [
        Brace(thumb("mr", BR), 0, -1, thumb("tr", BR), 0, -1),
        Brace(thumb("mr", BR), 0, -1, thumb("mr", BL), 0, -1.15),
        Brace(thumb("br", BR), 0, -1, thumb("br", BL), 0, -1),
        Brace(thumb("bl", THUMB_TR), -0.3, 1, thumb("bl", THUMB_TL), 0, 1),
        Brace(thumb("br", TL), -1, 0, thumb("br", BL), -1, 0),
        Brace(thumb("bl", THUMB_TL), -1, 0, thumb("bl", BL), -1, 0),
        # corners
        Brace(thumb("br", BL), -1, 0, thumb("br", BL), 0, -1),
        Brace(thumb("bl", THUMB_TL), -1, 0, thumb("bl", THUMB_TL), 0, 1),
        # tweeners
        Brace(thumb("mr", BL), 0, -1.15, thumb("br", BR), 0, -1),
        Brace(thumb("bl", BL), -1, 0, thumb("br", TL), -1, 0),
        Brace(thumb("tr", BR), 0, -1, key(io + 3, config.lastrow, BL), 0, -1),
    ]


def _thumb_junction(config: ShapeConfig, wall_anchor: Anchor, hub: Anchor, drop_corner=False) -> List[WallItem]:
    """
    Join the foot of the left wall to the thumb cluster's back wall and to column 0.
    """
    bottom = Topology(config).bottom_row(0)
    corner = left(bottom, -1, WEB)
    dx, dy = -0.3, 1

    corner_hull = [corner, _walled(corner, 1, -1, 0), key(0, bottom, BL)]
    if drop_corner:
        corner_hull.append(key(0, bottom, BL, wall=WallOffset(1, 0, 0)))
    corner_hull.append(hub)

    return [
        bottom_hull(
            _walled(corner, 2, -1, 0),
            _walled(corner, 3, -1, 0),
            _walled(wall_anchor, 2, dx, dy),
            _walled(wall_anchor, 3, dx, dy),
        ),
        hull(
            _walled(corner, 2, -1, 0),
            _walled(corner, 3, -1, 0),
            _walled(wall_anchor, 2, dx, dy),
            _walled(wall_anchor, 3, dx, dy),
            hub,
        ),
        hull(
            corner,
            _walled(corner, 1, -1, 0),
            _walled(corner, 2, -1, 0),
            _walled(corner, 3, -1, 0),
            hub,
        ),
        hull(*corner_hull),
        hull(
            wall_anchor,
            _walled(wall_anchor, 1, dx, dy),
            _walled(wall_anchor, 2, dx, dy),
            _walled(wall_anchor, 3, dx, dy),
            hub,
        ),
    ]


def default_thumb_junction(config: ShapeConfig) -> List[WallItem]:
    logging.debug("default_thumb_junction()")
    return _thumb_junction(config, thumb("ml", TR), thumb("tl", THUMB_TL), drop_corner=True)


def mini_thumb_junction(config: ShapeConfig) -> List[WallItem]:
    logging.debug("mini_thumb_junction()")
    return _thumb_junction(config, thumb("bl", TR), thumb("tl", TL))


def carbonfet_thumb_junction(config: ShapeConfig) -> List[WallItem]:
    logging.debug("carbonfet_thumb_junction()")
    return _thumb_junction(config, thumb("bl", THUMB_TR), thumb("ml", THUMB_TL))


def _inner_thumb_junction(config: ShapeConfig, hub: Anchor) -> List[WallItem]:
    """
    Fill the step between the short inner column and the first main column above the thumb.
    """
    topology = Topology(config)
    inner_bottom = topology.bottom_row(0)
    main_bottom = topology.bottom_row(1)
    return [
        hull(key(0, inner_bottom, BL), key(0, inner_bottom, BR), key(1, main_bottom, BL)),
        hull(key(0, inner_bottom, BL), key(1, main_bottom, BL), hub),
    ]


def default_inner_thumb_junction(config: ShapeConfig) -> List[WallItem]:
    logging.debug("default_inner_thumb_junction()")
    return _inner_thumb_junction(config, thumb("tl", THUMB_TL))


def mini_inner_thumb_junction(config: ShapeConfig) -> List[WallItem]:
    logging.debug("mini_inner_thumb_junction()")
    return _inner_thumb_junction(config, thumb("tl", MINI_TL))


def carbonfet_inner_thumb_junction(config: ShapeConfig) -> List[WallItem]:
    logging.debug("carbonfet_inner_thumb_junction()")
    return _inner_thumb_junction(config, thumb("ml", THUMB_TL))
