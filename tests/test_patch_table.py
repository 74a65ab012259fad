import itertools
from collections import Counter

import pytest

from dactyl_shell import patch_table
from dactyl_shell.config import ConfigurationError
from dactyl_shell.patch_table import (FEATURE_GROUPS, GROUP_BUILDERS, active_features, build_patch_table, check_closure,
                                      edge_coverage, required_groups, skin_items, wall_items)
from dactyl_shell.patch_table import is_key_mount
from dactyl_shell.posts import BL, BR, TL
from dactyl_shell.topology import Brace, Patch, Topology, key, triangles


CLOSED_LAYOUTS = {
    "default": {},
    "rectangular": {"inner_column": False, "lastrow_columns": list(range(7))},
    "short_rows": {"inner_column": False},
    "single_long_column": {"inner_column": False, "lastrow_columns": [3]},
    "inner_column_long": {"lastrow_columns": [1, 2, 3, 4, 5]},
    "extra_row": {"extra_row": True},
    "extra_row_no_inner": {"inner_column": False, "extra_row": True},
    "wide_pinky": {"pinky_15u": True, "first_15u_row": 0, "last_15u_row": 4},
    "wide_pinky_middle": {"pinky_15u": True, "first_15u_row": 1, "last_15u_row": 3},
    "wide_pinky_extra_row": {"pinky_15u": True, "extra_row": True, "first_15u_row": 0, "last_15u_row": 5},
    "four_rows": {"nrows": 4},
    "five_rows": {"nrows": 5, "ncols": 6},
}


@pytest.mark.parametrize("layout", sorted(CLOSED_LAYOUTS))
def test_shell_closes_without_thumb(no_thumb_config, layout):
    config = no_thumb_config.replace(**CLOSED_LAYOUTS[layout])
    coverage = edge_coverage(build_patch_table(config), Topology(config))

    assert coverage.non_manifold == []
    for edge in coverage.boundary:
        assert coverage.walls[edge] == 1
    for edge in coverage.walls:
        assert coverage.faces[edge] == 1
    assert set(coverage.endpoints.values()) == {2}

    check_closure(config)


def test_missing_wall_is_reported(no_thumb_config):
    table = build_patch_table(no_thumb_config)
    table["right_wall"] = [brace for i, brace in enumerate(table["right_wall"]) if i != 1]
    coverage = edge_coverage(table, Topology(no_thumb_config))
    assert any(coverage.walls[edge] == 0 for edge in coverage.boundary)


def test_check_closure_rejects_open_shell(no_thumb_config, monkeypatch):
    monkeypatch.setitem(GROUP_BUILDERS, "front_wall", lambda config: [])
    with pytest.raises(ConfigurationError, match="not closed"):
        check_closure(no_thumb_config)


THUMB_LAYOUTS = {
    "default": {},
    "no_inner_column": {"inner_column": False},
    "long_front_row": {"lastrow_columns": [2, 3, 4]},
    "extra_row": {"extra_row": True},
    "wide_pinky": {"pinky_15u": True, "first_15u_row": 0, "last_15u_row": 4},
}


def _key_mount_triangles(table):
    for patch in skin_items(table):
        if patch.mode == "bottom":
            continue
        for triangle in patch_table._triangles(patch):
            if any(is_key_mount(vertex) for vertex in triangle):
                yield frozenset(triangle)


@pytest.mark.parametrize("layout", sorted(THUMB_LAYOUTS))
def test_thumb_cluster_does_not_refill_key_well(config, thumb_style, layout):
    variant = config.replace(thumb_style=thumb_style, **THUMB_LAYOUTS[layout])
    owners = Counter(_key_mount_triangles(build_patch_table(variant)))
    assert [triangle for triangle, count in owners.items() if count > 1] == []


@pytest.mark.parametrize("layout", sorted(THUMB_LAYOUTS))
def test_key_well_closes_around_thumb(config, thumb_style, layout):
    variant = config.replace(thumb_style=thumb_style, **THUMB_LAYOUTS[layout])
    coverage = edge_coverage(build_patch_table(variant), Topology(variant))

    key_edges = [edge for edge in coverage.faces if all(is_key_mount(vertex) for vertex in edge)]
    assert key_edges
    for edge in key_edges:
        assert coverage.faces[edge] <= 2
        if coverage.faces[edge] == 1:
            assert coverage.walls[edge] == 1

    check_closure(variant)


def test_check_closure_reports_overlap_under_thumb(config, monkeypatch):
    io = config.innercol_offset
    step = triangles(
        key(io + 1, config.cornerrow, BR),
        key(io + 2, config.lastrow, TL),
        key(io + 2, config.lastrow, BL),
    )
    builder = GROUP_BUILDERS["default_thumb_connectors"]
    monkeypatch.setitem(GROUP_BUILDERS, "default_thumb_connectors", lambda config: builder(config) + [step])
    with pytest.raises(ConfigurationError, match="shared by 3 faces"):
        check_closure(config)


def test_every_feature_combination_is_registered(config):
    for inner, extra, wide, style in itertools.product(
            (False, True), (False, True), (False, True), ("DEFAULT", "MINI", "CARBONFET", "NONE")):
        variant = config.replace(inner_column=inner, extra_row=extra, pinky_15u=wide, thumb_style=style)
        for feature in active_features(variant):
            assert feature in FEATURE_GROUPS
        for group in required_groups(variant):
            assert group in GROUP_BUILDERS


def test_unregistered_feature_is_a_configuration_error(config, monkeypatch):
    monkeypatch.delitem(FEATURE_GROUPS, "thumb:MINI")
    with pytest.raises(ConfigurationError, match="thumb:MINI"):
        config.replace(thumb_style="MINI")


def test_unregistered_group_is_a_configuration_error(config, monkeypatch):
    monkeypatch.delitem(GROUP_BUILDERS, "carbonfet_thumb_walls")
    with pytest.raises(ConfigurationError, match="carbonfet_thumb_walls"):
        config.replace(thumb_style="CARBONFET")


def test_active_features(config):
    assert active_features(config) == ["base", "inner_column", "standard_pinky", "thumb:DEFAULT",
                                       "inner_column+thumb:DEFAULT"]
    assert active_features(config.replace(thumb_style="NONE", inner_column=False, lastrow_columns=[2, 3])) == [
        "base", "standard_pinky", "no_thumb"]


def test_table_follows_group_order(config):
    table = build_patch_table(config)
    assert list(table) == required_groups(config)


def test_items_are_split_by_kind(thumb_style, config):
    table = build_patch_table(config.replace(thumb_style=thumb_style))
    skin = skin_items(table)
    walls = wall_items(table)
    assert skin and walls
    assert all(isinstance(item, Patch) for item in skin)
    assert all(isinstance(item, Brace) for item in walls)
    for patch in skin:
        assert patch.mode in ("triangles", "hull", "bottom")
        if patch.mode == "triangles":
            assert len(patch.anchors) >= 3


def test_grid_groups_partition_patches(config):
    config = config.replace(extra_row=True)
    table = build_patch_table(config)
    inner_sites = {anchor.site.column for patch in table["inner_column"] for anchor in patch.anchors}
    assert 0 in inner_sites
    for patch in table["main_grid"]:
        assert all(anchor.site.column != 0 for anchor in patch.anchors)
    for patch in table["extra_row"]:
        assert any(anchor.site.row == config.lastrow for anchor in patch.anchors)


def test_table_is_deterministic(config):
    assert build_patch_table(config) == build_patch_table(config)
    assert patch_table.build_patch_table(config.replace(thumb_style="MINI")) != build_patch_table(config)
