import logging
from typing import NamedTuple

import numpy as np

from .config import ShapeConfig
from .engines.engine import GeometryEngine


class Post(NamedTuple):
    """
    A corner of a key mount footprint.

    The offset from the mount centre is `sign * (mount_size / divisor) - sign * post_adj` on each of
    x and y; a zero sign gives the centre post.
    """
    name: str
    x_sign: int
    y_sign: int
    x_divisor: float = 1.95
    y_divisor: float = 1.95

    def offset(self, config: ShapeConfig) -> np.ndarray:
        x = self.x_sign * (config.mount_width / self.x_divisor - config.post_adj)
        y = self.y_sign * (config.mount_height / self.y_divisor - config.post_adj)
        return np.array([x, y, 0.0])


WEB = Post("web", 0, 0)

TL = Post("tl", -1, 1)
TR = Post("tr", 1, 1)
BL = Post("bl", -1, -1)
BR = Post("br", 1, -1)

# 1.5u keys in the outer column
WIDE_TR = Post("wide_tr", 1, 1, 1.2, 2)
WIDE_BR = Post("wide_br", 1, -1, 1.2, 2)

# 1.5u thumb keys
THUMB_TL = Post("thumb_tl", -1, 1, 2, 1.1)
THUMB_TR = Post("thumb_tr", 1, 1, 2, 1.1)
THUMB_BL = Post("thumb_bl", -1, -1, 2, 1.1)
THUMB_BR = Post("thumb_br", 1, -1, 2, 1.1)

# compact thumb cluster
MINI_TL = Post("mini_tl", -1, 1, 2, 2)
MINI_TR = Post("mini_tr", 1, 1, 2, 2)
MINI_BL = Post("mini_bl", -1, -1, 2, 2)
MINI_BR = Post("mini_br", 1, -1, 2, 2)


def web_post_z(config: ShapeConfig) -> float:
    return config.plate_thickness - (config.web_thickness / 2)


def post_point(config: ShapeConfig, post: Post) -> np.ndarray:
    """
    Local coordinates of the centre of the post's stand-in solid.
    """
    return post.offset(config) + np.array([0.0, 0.0, web_post_z(config)])


def web_post(config: ShapeConfig, engine: GeometryEngine):
    logging.debug("web_post()")
    post = engine.box(config.post_size, config.post_size, config.web_thickness)
    post = engine.translate(post, (0, 0, web_post_z(config)))
    return post
