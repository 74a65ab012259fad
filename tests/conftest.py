import math
from pathlib import Path
from typing import Sequence

import numpy as np
import pytest
from scipy.spatial import ConvexHull
from scipy.spatial.transform import Rotation

from dactyl_shell.config import load_config
from dactyl_shell.engines.engine import FLOOR_Z, GeometryEngine, GeometryExporter


class _PointCloudExporter(GeometryExporter[np.ndarray]):

    @staticmethod
    def file_type() -> str:
        return ".xyz"

    @staticmethod
    def export_geometry(shape: np.ndarray, path: Path):
        np.savetxt(path, shape)


class PointCloudEngine(GeometryEngine[np.ndarray]):
    """
    A solid is the (n, 3) array of its vertices.

    Booleans other than union keep the first operand, so only placement and hull
    extents are meaningful.
    """

    @staticmethod
    def box(width: float, height: float, depth: float) -> np.ndarray:
        half = np.array([width, height, depth]) / 2
        return np.array([[x, y, z] for x in (-1, 1) for y in (-1, 1) for z in (-1, 1)]) * half

    @staticmethod
    def _ring(radius_bottom, radius_top, height, segments):
        angles = np.linspace(0, 2 * math.pi, segments, endpoint=False)
        bottom = np.column_stack([radius_bottom * np.cos(angles), radius_bottom * np.sin(angles), np.full(segments, -height / 2)])
        top = np.column_stack([radius_top * np.cos(angles), radius_top * np.sin(angles), np.full(segments, height / 2)])
        return np.vstack([bottom, top])

    @staticmethod
    def cylinder(radius: float, height: float, segments: int = 100) -> np.ndarray:
        return PointCloudEngine._ring(radius, radius, height, segments)

    @staticmethod
    def sphere(radius: float, segments: int = 100) -> np.ndarray:
        return PointCloudEngine.box(2 * radius, 2 * radius, 2 * radius)

    @staticmethod
    def cone(radius_bottom: float, radius_top: float, height: float, segments: int = 100) -> np.ndarray:
        return PointCloudEngine._ring(radius_bottom, radius_top, height, segments)

    @staticmethod
    def rotate(shape: np.ndarray, euler_degrees) -> np.ndarray:
        return Rotation.from_euler("xyz", [float(angle) for angle in euler_degrees], degrees=True).apply(shape)

    @staticmethod
    def translate(shape: np.ndarray, vector) -> np.ndarray:
        return shape + np.asarray(vector, dtype=float)

    @staticmethod
    def mirror(shape: np.ndarray, vector) -> np.ndarray:
        normal = np.asarray(vector, dtype=float)
        normal = normal / np.linalg.norm(normal)
        return shape - 2 * np.outer(shape @ normal, normal)

    @staticmethod
    def union(shapes: Sequence[np.ndarray]) -> np.ndarray:
        if not len(shapes):
            raise ValueError("shapes cannot be empty")
        return np.vstack(shapes)

    @staticmethod
    def difference(initial_shape: np.ndarray, subtractions: Sequence[np.ndarray]) -> np.ndarray:
        return initial_shape.copy()

    @staticmethod
    def intersect(shapes: Sequence[np.ndarray]) -> np.ndarray:
        if not len(shapes):
            raise ValueError("shapes cannot be empty")
        return shapes[0].copy()

    @staticmethod
    def convex_hull(shapes: Sequence[np.ndarray]) -> np.ndarray:
        if not len(shapes):
            raise ValueError("shapes cannot be empty")
        points = np.vstack(shapes)
        return points[ConvexHull(points).vertices]

    @staticmethod
    def bottom_hull(shapes: Sequence[np.ndarray], height: float = 0.001) -> np.ndarray:
        points = np.vstack(shapes)
        floor = points.copy()
        floor[:, 2] = FLOOR_Z
        top = points.copy()
        top[:, 2] = FLOOR_Z + height
        return PointCloudEngine.convex_hull([points, floor, top])

    @staticmethod
    def floor_plate(shape: np.ndarray, thickness: float) -> np.ndarray:
        footprint = shape[shape[:, 2] <= 0].copy()
        footprint[:, 2] = 0
        lower = footprint.copy()
        lower[:, 2] = -thickness
        return np.vstack([footprint, lower])

    @staticmethod
    def exporters():
        return [_PointCloudExporter]


@pytest.fixture
def engine():
    return PointCloudEngine()


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def no_thumb_config(config):
    return config.replace(thumb_style="NONE")


@pytest.fixture(params=["DEFAULT", "MINI", "CARBONFET"])
def thumb_style(request):
    return request.param


@pytest.fixture(params=["standard", "orthographic", "fixed"])
def column_style(request):
    return request.param


@pytest.fixture
def small_config(config):
    """
    2 x 2 grid with no optional features, pivoting on key (0, 0).
    """
    return config.replace(
        nrows=2,
        ncols=2,
        centercol=0,
        centerrow_offset=2,
        alpha=math.radians(15),
        beta=math.radians(5),
        tenting_angle=0,
        inner_column=False,
        extra_row=False,
        pinky_15u=False,
        thumb_style="NONE",
        lastrow_columns=[0, 1],
        column_offsets=[[0, 0, 0], [0, 0, 0]],
    )
