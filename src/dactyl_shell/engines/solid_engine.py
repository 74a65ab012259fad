import logging
import sys
if sys.version_info[:2] > (3, 8):
    from collections.abc import Iterable
else:
    from typing import Iterable
from pathlib import Path
from typing import Sequence

from solid2 import cube, cylinder, difference, hull, intersection, linear_extrude, mirror, projection, rotate, scad_render, sphere, translate, union

from .engine import FLOOR_Z, GeometryEngine, GeometryExporter


def _vector(values) -> list:
    return [float(value) for value in values]


class _SolidScadExporter(GeometryExporter):
    """
    Exporter that writes OpenSCAD source
    """

    @staticmethod
    def file_type() -> str:
        return ".scad"

    @staticmethod
    def export_geometry(shape, path: Path):
        logging.info("Exporting to %s", path)
        with open(path, mode="wt", encoding="utf-8") as fid:
            fid.write(scad_render(shape))


class SolidEngine(GeometryEngine):
    """
    OpenSCAD geometry engine, built on SolidPython2
    """

    @staticmethod
    def box(width: float, height: float, depth: float):
        return cube([width, height, depth], center=True)

    @staticmethod
    def cylinder(radius: float, height: float, segments: int = 100):
        return cylinder(r=radius, h=height, center=True, _fn=segments)

    @staticmethod
    def sphere(radius: float, segments: int = 100):
        return sphere(r=radius, _fn=segments)

    @staticmethod
    def cone(radius_bottom: float, radius_top: float, height: float, segments: int = 100):
        return cylinder(r1=radius_bottom, r2=radius_top, h=height, center=True, _fn=segments)

    @staticmethod
    def rotate(shape, euler_degrees):
        return rotate(_vector(euler_degrees))(shape)

    @staticmethod
    def translate(shape, vector):
        return translate(_vector(vector))(shape)

    @staticmethod
    def mirror(shape, vector):
        return mirror(_vector(vector))(shape)

    @staticmethod
    def union(shapes: Sequence):
        logging.debug("union()")
        if not shapes:
            raise ValueError("shapes cannot be empty")
        return union()(*shapes)

    @staticmethod
    def difference(initial_shape, subtractions: Sequence):
        logging.debug("difference()")
        if not subtractions:
            return initial_shape
        return difference()(initial_shape, *subtractions)

    @staticmethod
    def intersect(shapes: Sequence):
        logging.debug("intersect()")
        if not shapes:
            raise ValueError("shapes cannot be empty")
        return intersection()(*shapes)

    @staticmethod
    def convex_hull(shapes: Sequence):
        if not shapes:
            raise ValueError("shapes cannot be empty")
        return hull()(*shapes)

    @staticmethod
    def bottom_hull(shapes: Sequence, height: float = 0.001):
        logging.debug("bottom_hull()")
        if not shapes:
            raise ValueError("shapes cannot be empty")
        footprint = linear_extrude(height=height, center=True)(projection()(union()(*shapes)))
        footprint = translate([0, 0, height / 2 + FLOOR_Z])(footprint)
        return hull()(*shapes, footprint)

    @staticmethod
    def floor_plate(shape, thickness: float):
        logging.debug("floor_plate()")
        plate = linear_extrude(height=thickness)(projection()(shape))
        return translate([0, 0, -thickness])(plate)

    @staticmethod
    def exporters() -> Iterable[GeometryExporter]:
        return [_SolidScadExporter]
