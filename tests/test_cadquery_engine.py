import pytest

cq = pytest.importorskip("cadquery")

from dactyl_shell.engines.engine import FLOOR_Z  # noqa: E402


@pytest.fixture
def cq_engine():
    from dactyl_shell.engines import get_engine
    return get_engine("cadquery")


def test_box_is_centred(cq_engine):
    box = cq_engine.box(2, 4, 6)
    bounds = box.BoundingBox()
    assert (bounds.xmin, bounds.ymin, bounds.zmin) == pytest.approx((-1, -2, -3), abs=1e-3)
    assert (bounds.xmax, bounds.ymax, bounds.zmax) == pytest.approx((1, 2, 3), abs=1e-3)


def test_convex_hull_spans_inputs(cq_engine):
    first = cq_engine.box(1, 1, 1)
    second = cq_engine.translate(cq_engine.box(1, 1, 1), (10, 0, 0))
    bounds = cq_engine.convex_hull([first, second]).BoundingBox()
    assert bounds.xmin == pytest.approx(-0.5, abs=1e-3)
    assert bounds.xmax == pytest.approx(10.5, abs=1e-3)


def test_bottom_hull_reaches_floor(cq_engine):
    shape = cq_engine.translate(cq_engine.box(1, 1, 1), (0, 0, 20))
    bounds = cq_engine.bottom_hull([shape]).BoundingBox()
    assert bounds.zmin == pytest.approx(FLOOR_Z, abs=1e-3)
    assert bounds.zmax == pytest.approx(20.5, abs=1e-3)


def test_exporters(cq_engine):
    assert [exporter.file_type() for exporter in cq_engine.exporters()] == [".step", ".stl"]
