import logging

from .engine import FLOOR_Z, GeometryEngine, GeometryExporter

ENGINES = ('solid', 'cadquery')


def get_engine(name: str) -> GeometryEngine:
    """
    Build the geometry engine named by the ENGINE setting.

    Engine modules are imported on demand so that only the selected backend needs to be installed.
    """
    logging.info("Using engine %s", name)
    if name == 'cadquery':
        from .cadquery_engine import CadQueryEngine
        return CadQueryEngine()
    if name == 'solid':
        from .solid_engine import SolidEngine
        return SolidEngine()
    raise ValueError("unknown engine {!r}, expected one of {}".format(name, ENGINES))
