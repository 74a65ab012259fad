import numpy as np
import pytest

from dactyl_shell.engines.engine import FLOOR_Z
from dactyl_shell.patch_table import build_patch_table, skin_items, wall_items
from dactyl_shell.posts import TL, TR, WEB
from dactyl_shell.stitcher import Placer, Stitcher
from dactyl_shell.topology import KeySite, LeftSite, Patch, ThumbSite, WallOffset, key, left, thumb
from dactyl_shell.walls import wall_locate2, wall_locate3


@pytest.fixture
def stitcher(config, engine):
    return Stitcher(Placer(config, engine))


def _anchors(table):
    for item in skin_items(table):
        yield from item.anchors
    for brace in wall_items(table):
        yield brace.anchor1
        yield brace.anchor2


def test_anchor_shape_is_centred_on_anchor_point(config, engine, thumb_style):
    config = config.replace(thumb_style=thumb_style)
    stitcher = Stitcher(Placer(config, engine))
    for anchor in set(_anchors(build_patch_table(config))):
        np.testing.assert_allclose(
            stitcher.anchor_shape(anchor).mean(axis=0), stitcher.anchor_point(anchor), atol=1e-9
        )


def test_walls_reach_the_floor(config, engine, thumb_style):
    config = config.replace(thumb_style=thumb_style)
    stitcher = Stitcher(Placer(config, engine))
    for brace in wall_items(build_patch_table(config)):
        shape = stitcher.wall_brace(brace)
        assert shape[:, 2].min() <= FLOOR_Z + 1e-6


def test_wall_levels_step_down(stitcher, config):
    brace = wall_items(build_patch_table(config))[0]
    points = stitcher.brace_points(brace)
    assert points.shape == (8, 3)
    np.testing.assert_allclose(points[0], stitcher.anchor_point(brace.anchor1))
    np.testing.assert_allclose(points[4], stitcher.anchor_point(brace.anchor2))


def test_left_wall_offsets_are_translations(stitcher, config):
    anchor = left(2, 1, WEB)
    base = stitcher.anchor_point(anchor)
    walled = stitcher.anchor_point(anchor._replace(wall=WallOffset(2, -1, 0)))
    np.testing.assert_allclose(walled - base, wall_locate2(config, -1, 0))
    walled = stitcher.anchor_point(anchor._replace(wall=WallOffset(3, -1, 0)))
    np.testing.assert_allclose(walled - base, wall_locate3(config, -1, 0))
    assert walled[2] == pytest.approx(base[2] - config.wall_z_offset)


def test_triangle_hulls_cover_every_anchor(stitcher):
    anchors = (key(2, 1, TR), key(3, 1, TL), key(2, 2, TR), key(3, 2, TL))
    shape = stitcher.render_patch(Patch(anchors, "triangles"))
    for anchor in anchors:
        point = stitcher.anchor_point(anchor)
        assert np.min(np.linalg.norm(shape - point, axis=1)) < stitcher.config.web_thickness


def test_bottom_patch_reaches_the_floor(stitcher, config):
    patch = Patch((thumb("bl", TL), thumb("ml", TR), key(0, config.cornerrow - 1, TL)), "bottom")
    assert stitcher.render_patch(patch)[:, 2].min() <= FLOOR_Z + 1e-6


def test_unknown_patch_mode(stitcher):
    with pytest.raises(ValueError, match="mode"):
        stitcher.render_patch(Patch((key(0, 0, TL),) * 3, "loft"))


def test_placer_positions_every_site_kind(config, engine):
    placer = Placer(config, engine)
    for site in (KeySite(1, 1), ThumbSite("tr"), LeftSite(0, -1)):
        point = placer.position(site, [0, 0, 0])
        placed = placer.place(site, np.zeros((1, 3)))
        np.testing.assert_allclose(placed[0], point, atol=1e-9)


def test_placer_rejects_unknown_site(config, engine):
    with pytest.raises(TypeError):
        Placer(config, engine).position("tr", [0, 0, 0])
