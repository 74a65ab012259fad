"""
Skin patches between key mounts.

The key well is stitched from adjacency: a strip between every two neighbouring keys in a row or a
column, a diagonal patch in every full 2x2 block, and a corner fill where a block lacks one of its
bottom keys. The thumb clusters and the 1.5u outer column are irregular and are listed by hand.
"""
import logging
from typing import List

from .config import ShapeConfig
from .posts import (BL, BR, MINI_BL, MINI_BR, MINI_TL, MINI_TR, THUMB_BL, THUMB_BR, THUMB_TL, THUMB_TR, TL, TR,
                    WIDE_BR, WIDE_TR)
from .topology import Patch, Topology, key, thumb, triangles


####################
## Web Connectors ##
####################


def _grid_patches(topology: Topology):
    """
    Yield (columns, rows, patch) for every adjacency patch of the key well.
    """
    config = topology.config
    has_key = topology.has_key

    # row connections
    for column in range(config.ncols - 1):
        for row in range(config.nrows):
            if has_key(column, row) and has_key(column + 1, row):
                yield (column, column + 1), (row,), triangles(
                    key(column + 1, row, TL),
                    key(column, row, TR),
                    key(column + 1, row, BL),
                    key(column, row, BR),
                )

    # column connections
    for column in range(config.ncols):
        for row in range(config.nrows - 1):
            if has_key(column, row) and has_key(column, row + 1):
                yield (column,), (row, row + 1), triangles(
                    key(column, row, BL),
                    key(column, row, BR),
                    key(column, row + 1, TL),
                    key(column, row + 1, TR),
                )

    # diagonal connections
    for column in range(config.ncols - 1):
        for row in range(config.nrows - 1):
            if not (has_key(column, row) and has_key(column + 1, row)):
                continue
            below_left = has_key(column, row + 1)
            below_right = has_key(column + 1, row + 1)
            if below_left and below_right:
                yield (column, column + 1), (row, row + 1), triangles(
                    key(column, row, BR),
                    key(column, row + 1, TR),
                    key(column + 1, row, BL),
                    key(column + 1, row + 1, TL),
                )
            elif below_left:
                # the right column is shorter
                yield (column, column + 1), (row, row + 1), triangles(
                    key(column, row, BR),
                    key(column + 1, row, BL),
                    key(column, row + 1, TR),
                    key(column, row + 1, BR),
                )
            elif below_right:
                # the left column is shorter
                yield (column, column + 1), (row, row + 1), triangles(
                    key(column + 1, row, BL),
                    key(column, row, BR),
                    key(column + 1, row + 1, TL),
                    key(column + 1, row + 1, BL),
                )


def _grid_group(topology: Topology, columns, rows) -> str:
    if any(topology.is_inner(column) for column in columns):
        return "inner_column"
    if any(topology.is_extra_row(column, row) for column in columns for row in rows):
        return "extra_row"
    return "main_grid"


def _grid_connectors(config: ShapeConfig, group: str) -> List[Patch]:
    topology = Topology(config)
    patches = []
    for columns, rows, patch in _grid_patches(topology):
        if _grid_group(topology, columns, rows) == group:
            patches.append(patch)
    return patches


def connectors(config: ShapeConfig) -> List[Patch]:
    logging.debug("connectors()")
    return _grid_connectors(config, "main_grid")


def inner_connectors(config: ShapeConfig) -> List[Patch]:
    logging.debug("inner_connectors()")
    return _grid_connectors(config, "inner_column")


def extra_connectors(config: ShapeConfig) -> List[Patch]:
    logging.debug("extra_connectors()")
    return _grid_connectors(config, "extra_row")


def pinky_connectors(config: ShapeConfig) -> List[Patch]:
    """
    Fill the widened right half of the 1.5u outer column.
    """
    logging.debug("pinky_connectors()")
    lastcol = config.lastcol
    first = config.first_15u_row
    last = config.last_15u_row
    bottom = Topology(config).bottom_row(lastcol)
    patches = []

    # row connections
    for row in range(first, last + 1):
        patches.append(triangles(
            key(lastcol, row, TR),
            key(lastcol, row, WIDE_TR),
            key(lastcol, row, BR),
            key(lastcol, row, WIDE_BR),
        ))
    if last != bottom:
        patches.append(triangles(
            key(lastcol, last + 1, TR),
            key(lastcol, last, WIDE_BR),
            key(lastcol, last + 1, BR),
        ))
    if first != 0:
        patches.append(triangles(
            key(lastcol, first - 1, TR),
            key(lastcol, first, WIDE_TR),
            key(lastcol, first - 1, BR),
        ))

    # column connections
    for row in range(first, last):
        patches.append(triangles(
            key(lastcol, row, BR),
            key(lastcol, row, WIDE_BR),
            key(lastcol, row + 1, TR),
            key(lastcol, row + 1, WIDE_TR),
        ))
    if last != bottom:
        patches.append(triangles(
            key(lastcol, last, BR),
            key(lastcol, last, WIDE_BR),
            key(lastcol, last + 1, TR),
        ))
    if first != 0:
        patches.append(triangles(
            key(lastcol, first - 1, BR),
            key(lastcol, first, WIDE_TR),
            key(lastcol, first, TR),
        ))

    return patches


############
## Thumbs ##
############


def default_thumb_connectors(config: ShapeConfig) -> List[Patch]:
    logging.debug("default_thumb_connectors()")
    io = config.innercol_offset
    cornerrow = config.cornerrow
    lastrow = config.lastrow
    return [
        triangles(  # top two
            thumb("tl", THUMB_TR),
            thumb("tl", BR, nudge=(-0.33, -0.25, 0)),
            thumb("tr", THUMB_TL),
            thumb("tr", THUMB_BL),
        ),
        triangles(  # bottom two on the right
            thumb("br", TR),
            thumb("br", BR),
            thumb("mr", TL),
            thumb("mr", BL),
        ),
        triangles(  # bottom two on the left
            thumb("bl", TR),
            thumb("bl", BR),
            thumb("ml", TL),
            thumb("ml", BL),
        ),
        triangles(  # centers of the bottom four
            thumb("br", TL),
            thumb("bl", BL),
            thumb("br", TR),
            thumb("bl", BR),
            thumb("mr", TL),
            thumb("ml", BL),
            thumb("mr", TR),
            thumb("ml", BR),
        ),
        triangles(  # top two to the middle two, starting on the left
            thumb("tl", THUMB_TL),
            thumb("ml", TR),
            thumb("tl", BL, nudge=(0.25, 0.1, 0)),
            thumb("ml", BR),
            thumb("tl", BR, nudge=(-0.33, -0.25, 0)),
            thumb("mr", TR),
            thumb("tr", THUMB_BL),
            thumb("mr", BR),
            thumb("tr", THUMB_BR),
        ),
        triangles(  # top two to the main keyboard, starting on the left
            thumb("tl", THUMB_TL),
            key(io, cornerrow, BL),
            thumb("tl", THUMB_TR),
            key(io, cornerrow, BR),
            thumb("tr", THUMB_TL),
            key(io + 1, cornerrow, BL),
            thumb("tr", THUMB_TR),
            key(io + 1, cornerrow, BR),
            key(io + 2, lastrow, BL),
        ),
        triangles(
            thumb("tr", THUMB_TR),
            key(io + 2, lastrow, BL),
            thumb("tr", THUMB_BR),
            key(io + 2, lastrow, BR),
            key(io + 3, lastrow, BL),
        ),
    ]


def mini_thumb_connectors(config: ShapeConfig) -> List[Patch]:
    logging.debug("mini_thumb_connectors()")
    io = config.innercol_offset
    cornerrow = config.cornerrow
    lastrow = config.lastrow
    return [
        triangles(  # top two
            thumb("tl", TR),
            thumb("tl", BR),
            thumb("tr", MINI_TL),
            thumb("tr", MINI_BL),
        ),
        triangles(  # bottom two
            thumb("br", TR),
            thumb("br", BR),
            thumb("mr", TL),
            thumb("mr", BL),
        ),
        triangles(
            thumb("mr", TR),
            thumb("mr", BR),
            thumb("tr", MINI_BR),
        ),
        triangles(  # between top row and bottom row
            thumb("br", TL),
            thumb("bl", BL),
            thumb("br", TR),
            thumb("bl", BR),
            thumb("mr", TL),
            thumb("tl", BL),
            thumb("mr", TR),
            thumb("tl", BR),
            thumb("tr", BL),
            thumb("mr", TR),
            thumb("tr", BR),
        ),
        triangles(  # top two to the middle two, starting on the left
            thumb("tl", TL),
            thumb("bl", TR),
            thumb("tl", BL),
            thumb("bl", BR),
            thumb("mr", TR),
            thumb("tl", BL),
            thumb("tl", BR),
            thumb("mr", TR),
        ),
        triangles(  # top two to the main keyboard, starting on the left
            thumb("tl", TL),
            key(io, cornerrow, BL),
            thumb("tl", TR),
            key(io, cornerrow, BR),
            thumb("tr", MINI_TL),
            key(io + 1, cornerrow, BL),
            thumb("tr", MINI_TR),
            key(io + 1, cornerrow, BR),
            key(io + 2, lastrow, BL),
        ),
        triangles(
            thumb("tr", MINI_TR),
            key(io + 2, lastrow, BL),
            thumb("tr", MINI_BR),
            key(io + 2, lastrow, BR),
            key(io + 3, lastrow, BL),
        ),
    ]


def carbonfet_thumb_connectors(config: ShapeConfig) -> List[Patch]:
    logging.debug("carbonfet_thumb_connectors()")
    io = config.innercol_offset
    cornerrow = config.cornerrow
    lastrow = config.lastrow
    return [
        triangles(  # top two
            thumb("tl", TL),
            thumb("tl", BL),
            thumb("ml", THUMB_TR),
            thumb("ml", BR),
        ),
        triangles(
            thumb("ml", THUMB_TL),
            thumb("ml", BL),
            thumb("bl", THUMB_TR),
            thumb("bl", BR),
        ),
        triangles(  # bottom two
            thumb("br", TR),
            thumb("br", BR),
            thumb("mr", TL),
            thumb("mr", BL),
        ),
        triangles(
            thumb("mr", TR),
            thumb("mr", BR),
            thumb("tr", TL),
            thumb("tr", BL),
        ),
        triangles(
            thumb("tr", BR),
            thumb("tr", BL),
            thumb("mr", BR),
        ),
        triangles(  # between top row and bottom row
            thumb("br", TL),
            thumb("bl", BL),
            thumb("br", TR),
            thumb("bl", BR),
            thumb("mr", TL),
            thumb("ml", BL),
            thumb("mr", TR),
            thumb("ml", BR),
            thumb("tr", TL),
            thumb("tl", BL),
            thumb("tr", TR),
            thumb("tl", BR),
        ),
        triangles(  # top two to the main keyboard, starting on the left
            thumb("ml", THUMB_TL),
            key(io, cornerrow, BL),
            thumb("ml", THUMB_TR),
            key(io, cornerrow, BR),
            thumb("tl", TL),
            key(io + 1, cornerrow, BL),
            thumb("tl", TR),
            key(io + 1, cornerrow, BR),
            key(io + 2, lastrow, BL),
        ),
        triangles(
            thumb("tl", TR),
            key(io + 2, lastrow, BL),
            thumb("tl", BR),
            key(io + 2, lastrow, BR),
            key(io + 3, lastrow, BL),
        ),
        triangles(
            thumb("tl", BR),
            key(io + 3, lastrow, BL),
            thumb("tr", TR),
            thumb("tr", BR),
        ),
    ]


THUMB_CONNECTORS = {
    "DEFAULT": default_thumb_connectors,
    "MINI": mini_thumb_connectors,
    "CARBONFET": carbonfet_thumb_connectors,
}
