"""
Thumb cluster layouts.

Every slot of a cluster is rotated about x, y then z, moved to the shared thumb origin and then by
its own offset. Clusters differ only in their slot tables; the patches joining them to the key well
live in `connectors` and `walls`.
"""
import logging
import math
from typing import NamedTuple, Optional, Tuple

import numpy as np

from .config import ShapeConfig
from .placement import Transformer, key_position, point_transformer


class ThumbSlot(NamedTuple):
    name: str
    rotation: Tuple[float, float, float]  # degrees about x, y, z
    offset: Tuple[float, float, float]
    size: float = 1  # key units
    plate_rotation: float = 0  # degrees about z
    extension: Optional[str] = None  # "double" or "half" plate extension for 1.5u keys


class ThumbCluster(NamedTuple):
    name: str
    slots: Tuple[ThumbSlot, ...]

    def slot(self, name: str) -> ThumbSlot:
        for slot in self.slots:
            if slot.name == name:
                return slot
        raise KeyError("{} thumb cluster has no slot {!r}".format(self.name, name))


DEFAULT = ThumbCluster("DEFAULT", (
    ThumbSlot("tr", (10, -23, 10), (-12, -16, 3), 1.5, 90, "double"),
    ThumbSlot("tl", (10, -23, 10), (-32, -15, -2), 1.5, 90, "half"),
    ThumbSlot("mr", (-6, -34, 48), (-29, -40, -13)),
    ThumbSlot("ml", (6, -34, 40), (-51, -25, -12)),
    ThumbSlot("br", (-16, -33, 54), (-37.8, -55.3, -25.3)),
    ThumbSlot("bl", (-4, -35, 52), (-56.3, -43.3, -23.5)),
))

MINI = ThumbCluster("MINI", (
    ThumbSlot("tr", (14, -15, 10), (-15, -10, 5)),
    ThumbSlot("tl", (10, -23, 25), (-35, -16, -2)),
    ThumbSlot("mr", (10, -23, 25), (-23, -34, -6)),
    ThumbSlot("br", (6, -34, 35), (-39, -43, -16)),
    ThumbSlot("bl", (6, -32, 35), (-51, -25, -11.5)),
))

CARBONFET = ThumbCluster("CARBONFET", (
    ThumbSlot("tl", (10, -24, 10), (-13, -9.8, 4)),
    ThumbSlot("tr", (6, -24, 10), (-7.5, -29.5, 0)),
    ThumbSlot("ml", (8, -31, 14), (-30.5, -17, -6), 1.5, 0, "half"),
    ThumbSlot("mr", (4, -31, 14), (-22.2, -41, -10.3)),
    ThumbSlot("br", (2, -37, 18), (-37, -46.4, -22)),
    ThumbSlot("bl", (6, -37, 18), (-47, -23, -19), 1.5, 0, "half"),
))

THUMB_CLUSTERS = {cluster.name: cluster for cluster in (DEFAULT, MINI, CARBONFET)}


def thumb_cluster(config: ShapeConfig) -> ThumbCluster:
    return THUMB_CLUSTERS[config.thumb_style]


def thumborigin(config: ShapeConfig) -> np.ndarray:
    logging.debug("thumborigin()")
    origin = key_position(
        config, [config.mount_width / 2, -(config.mount_height / 2), 0], config.innercol_offset + 1, config.cornerrow
    )
    return origin + np.array(config.thumb_offsets, dtype=float)


def apply_thumb_geometry(config: ShapeConfig, target, transform: Transformer, slot: ThumbSlot):
    logging.debug("apply_thumb_geometry()")
    rot_x, rot_y, rot_z = slot.rotation
    target = transform.rotate_x(target, math.radians(rot_x))
    target = transform.rotate_y(target, math.radians(rot_y))
    target = transform.rotate_z(target, math.radians(rot_z))
    target = transform.translate(target, thumborigin(config))
    target = transform.translate(target, slot.offset)
    return target


def thumb_position(config: ShapeConfig, position, slot: ThumbSlot) -> np.ndarray:
    return apply_thumb_geometry(config, np.asarray(position, dtype=float), point_transformer(), slot)
