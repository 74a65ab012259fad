import logging
import math
from typing import Any, Callable, NamedTuple

import numpy as np

from . import curvature
from .config import ShapeConfig
from .engines.engine import GeometryEngine


#########################
## Placement Functions ##
#########################


def rotate_around_x(position, angle):
    t_matrix = np.array(
        [
            [1, 0, 0],
            [0, math.cos(angle), -math.sin(angle)],
            [0, math.sin(angle), math.cos(angle)],
        ]
    )
    return np.matmul(t_matrix, position)


def rotate_around_y(position, angle):
    t_matrix = np.array(
        [
            [math.cos(angle), 0, math.sin(angle)],
            [0, 1, 0],
            [-math.sin(angle), 0, math.cos(angle)],
        ]
    )
    return np.matmul(t_matrix, position)


def rotate_around_z(position, angle):
    t_matrix = np.array(
        [
            [math.cos(angle), -math.sin(angle), 0],
            [math.sin(angle), math.cos(angle), 0],
            [0, 0, 1],
        ]
    )
    return np.matmul(t_matrix, position)


class Transformer(NamedTuple):
    """
    The rigid operations a placement is composed of. Angles are in radians.

    Placements are written once against this interface and run either on points or on shapes.
    """
    translate: Callable[[Any, Any], Any]
    rotate_x: Callable[[Any, float], Any]
    rotate_y: Callable[[Any, float], Any]
    rotate_z: Callable[[Any, float], Any]


def _translate_point(position, vector):
    return np.add(position, vector)


def point_transformer() -> Transformer:
    return Transformer(_translate_point, rotate_around_x, rotate_around_y, rotate_around_z)


def shape_transformer(engine: GeometryEngine) -> Transformer:
    return Transformer(
        engine.translate,
        lambda shape, angle: engine.rotate(shape, [math.degrees(angle), 0, 0]),
        lambda shape, angle: engine.rotate(shape, [0, math.degrees(angle), 0]),
        lambda shape, angle: engine.rotate(shape, [0, 0, math.degrees(angle)]),
    )


def apply_key_geometry(config: ShapeConfig, target, transform: Transformer, column: int, row: int):
    """
    Move `target` from key-local coordinates onto the key well at (column, row).

    `config.column_style` selects the curvature model; every style ends with the global tenting
    rotation and the vertical offset.
    """
    logging.debug("apply_key_geometry()")

    row_radius = curvature.row_radius(config)
    column_angle = curvature.column_angle(config, column)
    row_angle = curvature.row_angle(config, row)
    column_offset = config.column_offsets[column]

    if config.column_style == "orthographic":
        column_radius = curvature.column_radius(config)
        column_z_delta = column_radius * (1 - math.cos(column_angle))
        target = transform.translate(target, [0, 0, -row_radius])
        target = transform.rotate_x(target, row_angle)
        target = transform.translate(target, [0, 0, row_radius])
        target = transform.rotate_y(target, column_angle)
        target = transform.translate(
            target, [-(column - config.centercol) * curvature.column_x_delta(config), 0, column_z_delta]
        )
        target = transform.translate(target, column_offset)

    elif config.column_style == "fixed":
        fixed_z = config.fixed_z[column]
        target = transform.rotate_y(target, config.fixed_angles[column])
        target = transform.translate(target, [config.fixed_x[column], 0, fixed_z])
        target = transform.translate(target, [0, 0, -(row_radius + fixed_z)])
        target = transform.rotate_x(target, row_angle)
        target = transform.translate(target, [0, 0, row_radius + fixed_z])
        target = transform.rotate_y(target, config.fixed_tenting)
        target = transform.translate(target, [0, column_offset[1], 0])

    else:
        column_radius = curvature.column_radius(config)
        target = transform.translate(target, [curvature.offset_for_column(config, column, row), 0, -row_radius])
        target = transform.rotate_x(target, row_angle)
        target = transform.translate(target, [0, 0, row_radius])
        target = transform.translate(target, [0, 0, -column_radius])
        target = transform.rotate_y(target, column_angle)
        target = transform.translate(target, [0, 0, column_radius])
        target = transform.translate(target, column_offset)

    target = transform.rotate_y(target, config.tenting_angle)
    target = transform.translate(target, [0, 0, config.keyboard_z_offset])

    return target


def key_place(config: ShapeConfig, engine: GeometryEngine, shape, column: int, row: int):
    logging.debug("key_place()")
    return apply_key_geometry(config, shape, shape_transformer(engine), column, row)


def key_position(config: ShapeConfig, position, column: int, row: int) -> np.ndarray:
    logging.debug("key_position()")
    return apply_key_geometry(config, np.asarray(position, dtype=float), point_transformer(), column, row)


def left_key_position(config: ShapeConfig, row: int, direction: int) -> np.ndarray:
    """
    Anchor of the left wall beside the top (direction 1) or bottom (direction -1) edge of column 0.
    """
    logging.debug("left_key_position()")
    pos = key_position(config, [-config.mount_width * 0.5, direction * config.mount_height * 0.5, 0], 0, row)
    return pos - np.array([config.left_wall_x_offset, 0, config.left_wall_z_offset])


def left_key_place(config: ShapeConfig, engine: GeometryEngine, shape, row: int, direction: int):
    logging.debug("left_key_place()")
    return engine.translate(shape, left_key_position(config, row, direction))
