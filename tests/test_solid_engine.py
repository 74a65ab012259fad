import pytest

from solid2 import scad_render

from dactyl_shell import model
from dactyl_shell.engines import get_engine
from dactyl_shell.engines.solid_engine import SolidEngine


@pytest.fixture
def solid_engine():
    return get_engine("solid")


def test_get_engine(solid_engine):
    assert isinstance(solid_engine, SolidEngine)
    with pytest.raises(ValueError, match="engine"):
        get_engine("blender")


def test_primitives_are_centred(solid_engine):
    box = scad_render(solid_engine.box(1, 2, 3))
    cylinder = scad_render(solid_engine.cylinder(1, 2, 30))
    assert "cube" in box and "true" in box
    assert "cylinder" in cylinder and "true" in cylinder


def test_bottom_hull_projects_to_floor(solid_engine):
    shape = solid_engine.bottom_hull([solid_engine.translate(solid_engine.box(1, 1, 1), [0, 0, 20])])
    text = scad_render(shape)
    assert "hull" in text
    assert "projection" in text
    assert "linear_extrude" in text


def test_empty_union_is_an_error(solid_engine):
    with pytest.raises(ValueError):
        solid_engine.union([])


@pytest.mark.parametrize("thumb_style", ["DEFAULT", "MINI", "CARBONFET", "NONE"])
def test_model_side_renders(config, solid_engine, thumb_style):
    config = config.replace(thumb_style=thumb_style)
    text = scad_render(model.model_side(config, solid_engine, "left"))
    assert "hull" in text
    assert "mirror" in text
    assert "difference" in text


def test_exports_scad(no_thumb_config, solid_engine, tmp_path):
    paths = model.run(no_thumb_config, solid_engine, tmp_path)
    assert {path.suffix for path in paths} == {".scad"}
    assert "hull" in paths[0].read_text(encoding="utf-8")
