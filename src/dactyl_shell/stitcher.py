"""
Turn patch and brace descriptions into solids.
"""
import logging
from typing import List, Sequence

import numpy as np

from .config import ShapeConfig
from .engines.engine import GeometryEngine
from .placement import key_place, key_position, left_key_place, left_key_position, shape_transformer
from .posts import post_point, web_post
from .thumbs import apply_thumb_geometry, thumb_cluster, thumb_position
from .topology import Anchor, Brace, KeySite, LeftSite, Patch, Site, ThumbSite, WallOffset
from .walls import wall_locate


class Placer:
    """
    Places shapes and points at any site of one configuration.
    """

    def __init__(self, config: ShapeConfig, engine: GeometryEngine):
        self.config = config
        self.engine = engine

    def place(self, site: Site, shape):
        if isinstance(site, KeySite):
            return key_place(self.config, self.engine, shape, site.column, site.row)
        if isinstance(site, ThumbSite):
            slot = thumb_cluster(self.config).slot(site.slot)
            return apply_thumb_geometry(self.config, shape, shape_transformer(self.engine), slot)
        if isinstance(site, LeftSite):
            return left_key_place(self.config, self.engine, shape, site.row, site.direction)
        raise TypeError("unknown site {!r}".format(site))

    def position(self, site: Site, point) -> np.ndarray:
        if isinstance(site, KeySite):
            return key_position(self.config, point, site.column, site.row)
        if isinstance(site, ThumbSite):
            return thumb_position(self.config, point, thumb_cluster(self.config).slot(site.slot))
        if isinstance(site, LeftSite):
            return left_key_position(self.config, site.row, site.direction) + np.asarray(point, dtype=float)
        raise TypeError("unknown site {!r}".format(site))


class Stitcher:
    """
    Renders anchors as placed web posts and hulls them into skin and walls.
    """

    def __init__(self, placer: Placer):
        self.placer = placer
        self.config = placer.config
        self.engine = placer.engine
        self._web_post = web_post(self.config, self.engine)

    def _local_offset(self, anchor: Anchor) -> np.ndarray:
        offset = anchor.post.offset(self.config) + np.asarray(anchor.nudge, dtype=float)
        if anchor.wall is not None:
            offset = offset + np.asarray(wall_locate(self.config, anchor.wall), dtype=float)
        return offset

    def anchor_shape(self, anchor: Anchor):
        post = self.engine.translate(self._web_post, self._local_offset(anchor))
        return self.placer.place(anchor.site, post)

    def anchor_point(self, anchor: Anchor) -> np.ndarray:
        """
        World position of the centre of the anchor's post.
        """
        local = post_point(self.config, anchor.post) + np.asarray(anchor.nudge, dtype=float)
        if anchor.wall is not None:
            local = local + np.asarray(wall_locate(self.config, anchor.wall), dtype=float)
        return self.placer.position(anchor.site, local)

    def triangle_hulls(self, shapes: Sequence):
        hulls = []
        for i in range(len(shapes) - 2):
            hulls.append(self.engine.convex_hull(shapes[i: (i + 3)]))

        return self.engine.union(hulls)

    def render_patch(self, patch: Patch):
        shapes = [self.anchor_shape(anchor) for anchor in patch.anchors]
        if patch.mode == "triangles":
            return self.triangle_hulls(shapes)
        if patch.mode == "hull":
            return self.engine.convex_hull(shapes)
        if patch.mode == "bottom":
            return self.engine.bottom_hull(shapes)
        raise ValueError("unknown patch mode {!r}".format(patch.mode))

    @staticmethod
    def _brace_anchors(brace: Brace):
        first = [brace.anchor1] + [
            brace.anchor1._replace(wall=WallOffset(level, brace.dx1, brace.dy1)) for level in (1, 2, 3)
        ]
        second = [brace.anchor2] + [
            brace.anchor2._replace(wall=WallOffset(level, brace.dx2, brace.dy2)) for level in (1, 2, 3)
        ]
        return first, second

    def wall_brace(self, brace: Brace):
        logging.debug("wall_brace()")
        first, second = self._brace_anchors(brace)
        first = [self.anchor_shape(anchor) for anchor in first]
        second = [self.anchor_shape(anchor) for anchor in second]

        shape1 = self.engine.convex_hull(first + second)
        shape2 = self.engine.bottom_hull(first[2:] + second[2:])
        return self.engine.union([shape1, shape2])

    def brace_points(self, brace: Brace) -> np.ndarray:
        """
        World points of a brace: the two posts, each followed by its three wall offsets.
        """
        first, second = self._brace_anchors(brace)
        return np.array([self.anchor_point(anchor) for anchor in first + second])

    def render(self, item):
        if isinstance(item, Brace):
            return self.wall_brace(item)
        return self.render_patch(item)

    def render_all(self, items) -> List:
        return [self.render(item) for item in items]
