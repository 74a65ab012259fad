from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, Sequence, TypeVar
import sys
if sys.version_info[:2] > (3, 8):
    from collections.abc import Iterable
else:
    from typing import Iterable

from numpy import ndarray

TGeometry = TypeVar("TGeometry")

# Height the case walls are swept down to before the floor block cuts them off.
FLOOR_Z = -10


class GeometryExporter(ABC, Generic[TGeometry]):
    """
    Writes one finished shell part to disk in a single file format.
    """

    @staticmethod
    @abstractmethod
    def file_type() -> str:
        """
        Suffix appended to the part name, including the dot.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def export_geometry(shape: TGeometry, path: Path):
        raise NotImplementedError


class GeometryEngine(ABC, Generic[TGeometry]):
    """
    The CSG operations the shell is built from.

    Lengths are millimeters and angles are degrees. Operations never modify their arguments.
    Boxes, cylinders and cones are centred on the origin so a key mount can be placed by its centre.
    """

    ################
    ## Primitives ##
    ################

    @staticmethod
    @abstractmethod
    def box(width: float, height: float, depth: float) -> TGeometry:
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def cylinder(radius: float, height: float, segments: int = 100) -> TGeometry:
        """
        Upright cylinder along z. Engines with exact curves may ignore `segments`.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def sphere(radius: float, segments: int = 100) -> TGeometry:
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def cone(radius_bottom: float, radius_top: float, height: float, segments: int = 100) -> TGeometry:
        """
        Truncated cone along z, used for tapered screw inserts.
        """
        raise NotImplementedError

    ################
    ## Transforms ##
    ################

    @staticmethod
    @abstractmethod
    def rotate(shape: TGeometry, euler_degrees: ndarray) -> TGeometry:
        """
        Rotate about x, then y, then z.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def translate(shape: TGeometry, vector: ndarray) -> TGeometry:
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def mirror(shape: TGeometry, vector: ndarray) -> TGeometry:
        """
        Reflect across the plane through the origin whose normal is `vector`.
        """
        raise NotImplementedError

    ##############
    ## Booleans ##
    ##############

    @staticmethod
    @abstractmethod
    def union(shapes: Sequence[TGeometry]) -> TGeometry:
        """
        Raises ValueError for an empty sequence.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def difference(initial_shape: TGeometry, subtractions: Sequence[TGeometry]) -> TGeometry:
        """
        `initial_shape` minus every subtraction; with none, `initial_shape` unchanged.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def intersect(shapes: Sequence[TGeometry]) -> TGeometry:
        raise NotImplementedError

    ###########
    ## Hulls ##
    ###########

    @staticmethod
    @abstractmethod
    def convex_hull(shapes: Sequence[TGeometry]) -> TGeometry:
        """
        One convex solid enclosing all shapes. Raises ValueError for an empty sequence.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def bottom_hull(shapes: Sequence[TGeometry], height: float = 0.001) -> TGeometry:
        """
        Hull the shapes together with a `height` thick slab of their outline at FLOOR_Z.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def floor_plate(shape: TGeometry, thickness: float) -> TGeometry:
        """
        Extrude the footprint of `shape` on z = 0 downward by `thickness`.
        """
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def exporters() -> Iterable[GeometryExporter[TGeometry]]:
        raise NotImplementedError
