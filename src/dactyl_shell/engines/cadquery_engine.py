from functools import reduce
import logging
import sys
if sys.version_info[:2] > (3, 8):
    from collections.abc import Iterable
else:
    from typing import Iterable
from pathlib import Path
from typing import Sequence

import cadquery as cq
from cadquery import Edge, Face, Shape, Shell, Solid, Vector, Wire, exporters
from scipy.spatial import ConvexHull as sphull

from .engine import FLOOR_Z, GeometryEngine, GeometryExporter


def _vector(values) -> Vector:
    return Vector(*(float(value) for value in values))


class _CadQueryStepExporter(GeometryExporter[Shape]):
    """
    Exporter for cadquery that can export STEP files
    """

    @staticmethod
    def file_type() -> str:
        return ".step"

    @staticmethod
    def export_geometry(shape: Shape, path: Path):
        logging.info("Exporting to %s", path)
        exporters.export(shape, str(path), exportType=exporters.ExportTypes.STEP)


class _CadQueryStlExporter(GeometryExporter[Shape]):
    """
    Exporter for cadquery that can export STL files
    """

    @staticmethod
    def file_type() -> str:
        return ".stl"

    @staticmethod
    def export_geometry(shape: Shape, path: Path):
        logging.info("Exporting to %s", path)
        exporters.export(shape, str(path), exportType=exporters.ExportTypes.STL)


class CadQueryEngine(GeometryEngine[Shape]):
    """
    CadQuery geometry engine
    """

    @staticmethod
    def box(width: float, height: float, depth: float) -> Shape:
        return Solid.makeBox(width, height, depth, pnt=Vector(-width / 2, -height / 2, -depth / 2))

    @staticmethod
    def cylinder(radius: float, height: float, _segments: int = 100) -> Shape:
        return Solid.makeCylinder(radius, height, pnt=Vector(0, 0, -height / 2))

    @staticmethod
    def sphere(radius: float, _segments: int = 100) -> Shape:
        return Solid.makeSphere(radius)

    @staticmethod
    def cone(radius_bottom: float, radius_top: float, height: float, _segments: int = 100) -> Shape:
        return Solid.makeCone(radius_bottom, radius_top, height, pnt=Vector(0, 0, -height / 2))

    @staticmethod
    def rotate(shape: Shape, euler_degrees) -> Shape:
        origin = (0, 0, 0)
        shape = shape.rotate(startVector=origin, endVector=(1, 0, 0), angleDegrees=float(euler_degrees[0]))
        shape = shape.rotate(startVector=origin, endVector=(0, 1, 0), angleDegrees=float(euler_degrees[1]))
        shape = shape.rotate(startVector=origin, endVector=(0, 0, 1), angleDegrees=float(euler_degrees[2]))
        return shape

    @staticmethod
    def translate(shape: Shape, vector) -> Shape:
        return shape.translate(_vector(vector))

    @staticmethod
    def mirror(shape: Shape, vector) -> Shape:
        return shape.mirror(_vector(vector))

    @staticmethod
    def union(shapes: Sequence[Shape]) -> Shape:
        logging.debug("union()")
        if not shapes:
            raise ValueError("shapes cannot be empty")

        if len(shapes) == 1:
            return shapes[0].copy()
        return reduce(lambda x, y: x.fuse(y), shapes)

    @staticmethod
    def difference(initial_shape: Shape, subtractions: Sequence[Shape]) -> Shape:
        logging.debug("difference()")
        if not subtractions:
            return initial_shape.copy()
        return reduce(lambda initial, to_remove: initial.cut(to_remove), subtractions, initial_shape)

    @staticmethod
    def intersect(shapes: Sequence[Shape]) -> Shape:
        logging.debug("intersect()")
        if not shapes:
            raise ValueError("shapes cannot be empty")

        if len(shapes) == 1:
            return shapes[0].copy()
        return reduce(lambda x, y: x.intersect(y), shapes)

    @staticmethod
    def convex_hull(shapes: Sequence[Shape]) -> Shape:
        if not shapes:
            raise ValueError("shapes cannot be empty")

        vertices = []
        for shape in shapes:
            vertices.extend(v.toTuple() for v in shape.Vertices())

        return CadQueryEngine._hull_from_points(vertices)

    @staticmethod
    def _face_from_points(points):
        edges = []
        num_pnts = len(points)
        for i in range(len(points)):
            p1 = points[i]
            p2 = points[(i + 1) % num_pnts]
            edges.append(Edge.makeLine(Vector(*p1), Vector(*p2)))

        return Face.makeFromWires(Wire.assembleEdges(edges))

    @staticmethod
    def _hull_from_points(points):
        hull_calc = sphull(points)

        faces = []
        for face_items in hull_calc.simplices:
            fpnts = [points[item] for item in face_items]
            faces.append(CadQueryEngine._face_from_points(fpnts))

        return Solid.makeSolid(Shell.makeShell(faces))

    @staticmethod
    def bottom_hull(shapes: Sequence[Shape], height: float = 0.001) -> Shape:
        logging.debug("bottom_hull()")
        if not shapes:
            raise ValueError("shapes cannot be empty")

        vertices = []
        for shape in shapes:
            for vert in shape.Vertices():
                x, y, z = vert.toTuple()
                vertices.append((x, y, z))
                vertices.append((x, y, FLOOR_Z))
                vertices.append((x, y, FLOOR_Z + height))

        return CadQueryEngine._hull_from_points(vertices)

    @staticmethod
    def floor_plate(shape: Shape, thickness: float) -> Shape:
        logging.debug("floor_plate()")
        section = cq.Workplane("XY").add(shape).section(0.01)
        plates = []
        for face in section.faces().vals():
            outline = Solid.extrudeLinear(face.outerWire(), [], Vector(0, 0, thickness))
            plates.append(outline.translate(Vector(0, 0, -thickness)))

        if not plates:
            raise ValueError("shape does not reach the floor")
        return CadQueryEngine.union(plates)

    @staticmethod
    def exporters() -> Iterable[GeometryExporter[Shape]]:
        return [_CadQueryStepExporter, _CadQueryStlExporter]
