"""
Row and column curvature of the key well.

Keys in a column sit on a circle of `row_radius` around an axis parallel to x, and columns sit on a
circle of `column_radius` around an axis parallel to y. The radii are chosen so that neighbouring key
caps just clear each other at their tops.
"""
import math

from .config import ShapeConfig


def cap_top_height(config: ShapeConfig) -> float:
    return config.plate_thickness + config.sa_profile_key_height


def row_radius(config: ShapeConfig) -> float:
    return ((config.mount_height + config.extra_height) / 2) / math.sin(config.alpha / 2) + cap_top_height(config)


def column_radius(config: ShapeConfig) -> float:
    return ((config.mount_width + config.extra_width) / 2) / math.sin(config.beta / 2) + cap_top_height(config)


def column_x_delta(config: ShapeConfig) -> float:
    """
    Horizontal spacing between columns for the orthographic style.
    """
    return -1 - column_radius(config) * math.sin(config.beta)


def column_angle(config: ShapeConfig, column: int) -> float:
    return config.beta * (config.centercol - column)


def row_angle(config: ShapeConfig, row: int) -> float:
    return config.alpha * (config.centerrow - row)


def offset_for_column(config: ShapeConfig, column: int, row: int) -> float:
    """
    Sideways shift of 1.5u keys in the outer column.
    """
    if config.pinky_15u and column == config.lastcol and config.first_15u_row <= row <= config.last_15u_row:
        return 4.7625
    return 0.0
