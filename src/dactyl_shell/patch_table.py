"""
Which skin and wall groups a configuration is built from.

Each configuration maps to a set of features, each feature to a fixed list of group names and each
group name to the function producing it. A feature or group missing from either table is a
configuration error, raised before any geometry is made.
"""
import logging
from collections import Counter
from itertools import chain
from typing import Dict, FrozenSet, List, NamedTuple, Tuple

from . import connectors, walls
from .config import ConfigurationError, ShapeConfig
from .posts import BL, BR, TL, TR
from .topology import Anchor, Brace, KeySite, Patch, Topology, key


FEATURE_GROUPS = {
    "base": ("main_grid", "back_wall", "left_wall", "front_wall"),
    "inner_column": ("inner_column",),
    "extra_row": ("extra_row",),
    "standard_pinky": ("right_wall",),
    "wide_pinky": ("wide_pinky", "pinky_right_wall"),
    "no_thumb": ("front_left_corner",),
    "thumb:DEFAULT": ("default_thumb_connectors", "default_thumb_walls", "default_thumb_junction"),
    "thumb:MINI": ("mini_thumb_connectors", "mini_thumb_walls", "mini_thumb_junction"),
    "thumb:CARBONFET": ("carbonfet_thumb_connectors", "carbonfet_thumb_walls", "carbonfet_thumb_junction"),
    "inner_column+thumb:DEFAULT": ("default_inner_thumb_junction",),
    "inner_column+thumb:MINI": ("mini_inner_thumb_junction",),
    "inner_column+thumb:CARBONFET": ("carbonfet_inner_thumb_junction",),
}

GROUP_BUILDERS = {
    "main_grid": connectors.connectors,
    "inner_column": connectors.inner_connectors,
    "extra_row": connectors.extra_connectors,
    "wide_pinky": connectors.pinky_connectors,
    "back_wall": walls.back_wall,
    "left_wall": walls.left_wall,
    "front_wall": walls.front_wall,
    "right_wall": walls.right_wall,
    "pinky_right_wall": walls.pinky_right_wall,
    "front_left_corner": walls.front_left_corner,
    "default_thumb_connectors": connectors.default_thumb_connectors,
    "default_thumb_walls": walls.default_thumb_walls,
    "default_thumb_junction": walls.default_thumb_junction,
    "default_inner_thumb_junction": walls.default_inner_thumb_junction,
    "mini_thumb_connectors": connectors.mini_thumb_connectors,
    "mini_thumb_walls": walls.mini_thumb_walls,
    "mini_thumb_junction": walls.mini_thumb_junction,
    "mini_inner_thumb_junction": walls.mini_inner_thumb_junction,
    "carbonfet_thumb_connectors": connectors.carbonfet_thumb_connectors,
    "carbonfet_thumb_walls": walls.carbonfet_thumb_walls,
    "carbonfet_thumb_junction": walls.carbonfet_thumb_junction,
    "carbonfet_inner_thumb_junction": walls.carbonfet_inner_thumb_junction,
}


def active_features(config: ShapeConfig) -> List[str]:
    features = ["base"]
    if config.inner_column:
        features.append("inner_column")
    if config.extra_row:
        features.append("extra_row")
    features.append("wide_pinky" if config.pinky_15u else "standard_pinky")
    if config.has_thumb:
        features.append("thumb:{}".format(config.thumb_style))
        if config.inner_column:
            features.append("inner_column+thumb:{}".format(config.thumb_style))
    else:
        features.append("no_thumb")
    return features


def required_groups(config: ShapeConfig) -> List[str]:
    groups = []
    for feature in active_features(config):
        if feature not in FEATURE_GROUPS:
            raise ConfigurationError("no patch groups registered for feature {!r}".format(feature))
        for group in FEATURE_GROUPS[feature]:
            if group not in GROUP_BUILDERS:
                raise ConfigurationError("patch group {!r} of feature {!r} has no builder".format(group, feature))
            groups.append(group)
    return groups


def build_patch_table(config: ShapeConfig) -> Dict[str, list]:
    logging.debug("build_patch_table()")
    return {group: GROUP_BUILDERS[group](config) for group in required_groups(config)}


def skin_items(table: Dict[str, list]) -> List[Patch]:
    return [item for item in chain.from_iterable(table.values()) if isinstance(item, Patch)]


def wall_items(table: Dict[str, list]) -> List[Brace]:
    return [item for item in chain.from_iterable(table.values()) if isinstance(item, Brace)]


#############
## Closure ##
#############

Vertex = Tuple
Edge = FrozenSet[Vertex]


class EdgeCoverage(NamedTuple):
    faces: Counter  # skin faces sharing each edge
    walls: Counter  # wall panels standing on each edge
    endpoints: Counter  # wall panels meeting at each (vertex, dx, dy)

    @property
    def boundary(self) -> List[Edge]:
        return [edge for edge, count in self.faces.items() if count == 1]

    @property
    def non_manifold(self) -> List[Edge]:
        return [edge for edge, count in self.faces.items() if count > 2]


def _vertex(anchor: Anchor) -> Vertex:
    return (anchor.site, anchor.post, anchor.nudge, anchor.wall)


def _edge(a: Vertex, b: Vertex) -> Edge:
    return frozenset((a, b))


def is_key_mount(vertex: Vertex) -> bool:
    site, _post, _nudge, wall = vertex
    return isinstance(site, KeySite) and wall is None


def _triangles(patch: Patch):
    vertices = [_vertex(anchor) for anchor in patch.anchors]
    for i in range(len(vertices) - 2):
        window = vertices[i:i + 3]
        if len(set(window)) == 3:
            yield window


def edge_coverage(table: Dict[str, list], topology: Topology) -> EdgeCoverage:
    """
    Count how the key plates, skin patches and walls share edges.

    A closed shell has no edge shared by more than two faces, a wall standing on every edge used by
    one face only, and every wall endpoint shared by exactly two wall panels.
    """
    logging.debug("edge_coverage()")
    faces = Counter()
    for site in topology.keys():
        corners = [_vertex(key(site.column, site.row, post)) for post in (TL, TR, BR, BL)]
        for i, corner in enumerate(corners):
            faces[_edge(corner, corners[(i + 1) % 4])] += 1

    for patch in skin_items(table):
        if patch.mode == "bottom":
            continue
        for a, b, c in _triangles(patch):
            faces[_edge(a, b)] += 1
            faces[_edge(b, c)] += 1
            faces[_edge(c, a)] += 1

    wall_edges = Counter()
    endpoints = Counter()
    for brace in wall_items(table):
        first = _vertex(brace.anchor1)
        second = _vertex(brace.anchor2)
        endpoints[(first, brace.dx1, brace.dy1)] += 1
        endpoints[(second, brace.dx2, brace.dy2)] += 1
        if not brace.is_corner:
            wall_edges[_edge(first, second)] += 1

    return EdgeCoverage(faces, wall_edges, endpoints)


def check_closure(config: ShapeConfig):
    """
    Raise ConfigurationError when the key well and its walls do not form a closed shell.

    A thumb cluster is stitched from overlapping hulls, so with one only the edges and wall ends
    between two key mounts are checked.
    """
    coverage = edge_coverage(build_patch_table(config), Topology(config))
    if config.has_thumb:
        logging.info("Checking closure between key mounts only for the %s thumb cluster", config.thumb_style)

    def checked(*vertices) -> bool:
        return not config.has_thumb or all(is_key_mount(vertex) for vertex in vertices)

    problems = []
    for edge in filter(lambda edge: checked(*edge), coverage.non_manifold):
        problems.append("edge {} is shared by {} faces".format(_describe(edge), coverage.faces[edge]))
    for edge in filter(lambda edge: checked(*edge), coverage.boundary):
        if coverage.walls[edge] != 1:
            problems.append("open edge {} has {} walls".format(_describe(edge), coverage.walls[edge]))
    for edge in filter(lambda edge: checked(*edge), coverage.walls):
        if coverage.faces[edge] != 1:
            problems.append("wall on {} stands on {} faces".format(_describe(edge), coverage.faces[edge]))
    for endpoint, count in coverage.endpoints.items():
        if count != 2 and checked(endpoint[0]):
            problems.append("wall end {} meets {} walls".format(endpoint, count))

    if problems:
        raise ConfigurationError("shell is not closed: " + "; ".join(problems))


def _describe(edge: Edge) -> str:
    return " - ".join(sorted("{}.{}".format(site, post.name) for site, post, _nudge, _wall in edge))
