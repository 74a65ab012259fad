"""
Shell assembly: key mounts, skin, walls, screw inserts and the floor plate.
"""
import logging
import pathlib
from typing import List, Optional

import numpy as np

from .config import ShapeConfig
from .engines.engine import GeometryEngine
from .patch_table import build_patch_table, check_closure, skin_items, wall_items
from .placement import key_place, key_position, left_key_position, shape_transformer
from .stitcher import Placer, Stitcher
from .thumbs import ThumbSlot, apply_thumb_geometry, thumb_cluster
from .topology import Topology
from .walls import wall_locate2, wall_locate3


################
## Key Mounts ##
################


def single_plate(config: ShapeConfig, engine: GeometryEngine):
    logging.debug("single_plate()")
    keyswitch_width = config.keyswitch_width
    keyswitch_height = config.keyswitch_height
    plate_thickness = config.plate_thickness

    top_wall = engine.box(keyswitch_width + 3, 1.5, plate_thickness + 0.5)
    top_wall = engine.translate(top_wall, (0, (1.5 / 2) + (keyswitch_height / 2), (plate_thickness / 2) - 0.25))

    left_wall = engine.box(1.8, keyswitch_height + 3, plate_thickness + 0.5)
    left_wall = engine.translate(left_wall, ((1.8 / 2) + (keyswitch_width / 2), 0, (plate_thickness / 2) - 0.25))

    plate_half = [top_wall, left_wall]
    if config.create_side_nubs:
        side_nub = engine.cylinder(1, 2.75, 30)
        side_nub = engine.rotate(side_nub, (90, 0, 0))
        side_nub = engine.translate(side_nub, (keyswitch_width / 2, 0, 1))
        nub_cube = engine.box(1.5, 2.75, config.side_nub_thickness)
        nub_cube = engine.translate(nub_cube, ((1.5 / 2) + (keyswitch_width / 2), 0, config.side_nub_thickness / 2))
        side_nub = engine.convex_hull([side_nub, nub_cube])
        plate_half.append(engine.translate(side_nub, (0, 0, plate_thickness - config.side_nub_thickness)))
    plate_half = engine.union(plate_half)

    plate = engine.union([plate_half, engine.mirror(engine.mirror(plate_half, (1, 0, 0)), (0, 1, 0))])

    # retention tab notches
    hole_thickness = plate_thickness + 0.5 - config.retention_tab_thickness
    top_nub = engine.box(5, 5, hole_thickness)
    top_nub = engine.translate(top_nub, (keyswitch_width / 2.5, 0, (hole_thickness / 2) - 0.5))
    top_nub_pair = engine.union([top_nub, engine.mirror(engine.mirror(top_nub, (1, 0, 0)), (0, 1, 0))])

    return engine.difference(plate, [engine.rotate(top_nub_pair, (0, 0, 90))])


def larger_plate_half(config: ShapeConfig, engine: GeometryEngine):
    """
    Web extending a thumb mount along y, towards the far edge of a 1.5u cap.
    """
    logging.debug("larger_plate_half()")
    plate_height = (config.sa_double_length - config.mount_height) / 3
    top_plate = engine.box(config.mount_width, plate_height, config.web_thickness)
    return engine.translate(
        top_plate, (0, (plate_height + config.mount_height) / 2, config.plate_thickness - (config.web_thickness / 2))
    )


def larger_plate(config: ShapeConfig, engine: GeometryEngine):
    logging.debug("larger_plate()")
    top_plate = larger_plate_half(config, engine)
    return engine.union([top_plate, engine.mirror(top_plate, (0, 1, 0))])


def sa_cap(config: ShapeConfig, engine: GeometryEngine, size: float = 1):
    if size == 1:
        bl2 = 18.5 / 2
        bw2 = 18.5 / 2
        m = 17 / 2
        pl2 = 6
        pw2 = 6

    elif size == 2:
        bl2 = config.sa_length
        bw2 = config.sa_length / 2
        m = 0
        pl2 = 16
        pw2 = 6

    elif size == 1.5:
        bl2 = config.sa_length / 2
        bw2 = 27.94 / 2
        m = 0
        pl2 = 6
        pw2 = 11

    else:
        raise ValueError("no SA cap of size {}".format(size))

    k1 = engine.box(bw2 * 2, bl2 * 2, 0.1)
    k1 = engine.translate(k1, (0, 0, 0.05))
    k2 = engine.box(pw2 * 2, pl2 * 2, 0.1)
    k2 = engine.translate(k2, (0, 0, 12.0))
    if m > 0:
        m1 = engine.box(m * 2, m * 2, 0.1)
        m1 = engine.translate(m1, (0, 0, 6.0))
        key_cap = engine.convex_hull([k1, k2, m1])
    else:
        key_cap = engine.convex_hull([k1, k2])

    return engine.translate(key_cap, (0, 0, 5 + config.plate_thickness))


def key_holes(config: ShapeConfig, engine: GeometryEngine):
    logging.debug("key_holes()")
    plate = single_plate(config, engine)
    holes = [key_place(config, engine, plate, site.column, site.row) for site in Topology(config).keys()]
    return engine.union(holes)


def caps(config: ShapeConfig, engine: GeometryEngine):
    logging.debug("caps()")
    shapes = []
    for site in Topology(config).keys():
        wide = (
            config.pinky_15u
            and site.column == config.lastcol
            and config.first_15u_row <= site.row <= config.last_15u_row
        )
        shapes.append(key_place(config, engine, sa_cap(config, engine, 1.5 if wide else 1), site.column, site.row))
    return engine.union(shapes)


def _thumb_place(config: ShapeConfig, engine: GeometryEngine, shape, slot: ThumbSlot):
    return apply_thumb_geometry(config, shape, shape_transformer(engine), slot)


def thumb(config: ShapeConfig, engine: GeometryEngine):
    logging.debug("thumb()")
    plate = single_plate(config, engine)
    extensions = {
        "double": larger_plate(config, engine),
        "half": larger_plate_half(config, engine),
    }
    shapes = []
    for slot in thumb_cluster(config).slots:
        shapes.append(_thumb_place(config, engine, engine.rotate(plate, (0, 0, slot.plate_rotation)), slot))
        if slot.extension is not None:
            shapes.append(_thumb_place(config, engine, extensions[slot.extension], slot))
    return engine.union(shapes)


def thumbcaps(config: ShapeConfig, engine: GeometryEngine):
    logging.debug("thumbcaps()")
    shapes = []
    for slot in thumb_cluster(config).slots:
        cap = sa_cap(config, engine, slot.size)
        if slot.size > 1:
            cap = engine.rotate(cap, (0, 0, 90))
        shapes.append(_thumb_place(config, engine, cap, slot))
    return engine.union(shapes)


###################
## Screw Inserts ##
###################

# (bottom left, top middle, bottom middle) offsets by (thumb_style, inner_column)
THUMB_SCREW_OFFSETS = {
    ("DEFAULT", True): ((5, -6, 0), (9.5, -4.5, 0), (8, -1, 0)),
    ("DEFAULT", False): ((-11.7, -8, 0), (9.5, -4.5, 0), (8, -1, 0)),
    ("MINI", True): ((14, 8, 0), (9.5, -4.5, 0), (-1, -7, 0)),
    ("MINI", False): ((-1, 4.2, 0), (9.5, -4.5, 0), (-1, -7, 0)),
    ("CARBONFET", True): ((9, 4, 0), (9.5, -4.5, 0), (13, -7, 0)),
    ("CARBONFET", False): ((-7.7, 2, 0), (9.5, -4.5, 0), (13, -7, 0)),
}

# (top right, bottom right) offsets by (pinky_15u, extra_row)
PINKY_SCREW_OFFSETS = {
    (True, True): ((1, 7, 0), (7, 14, 0)),
    (True, False): ((1, 7, 0), (6.5, 15.5, 0)),
    (False, True): ((-3.5, 6.5, 0), (-3.5, -6.5, 0)),
    (False, False): ((-4, 6.5, 0), (-6, 13, 0)),
}

TOP_LEFT_SCREW_OFFSET = (8, 10.5, 0)


def screw_insert_locations(config: ShapeConfig):
    """
    (column, row, offset) of every screw insert, in a fixed order.
    """
    io = config.innercol_offset
    thumb_style = config.thumb_style if config.has_thumb else "DEFAULT"
    bottom_left, top_middle, bottom_middle = THUMB_SCREW_OFFSETS[(thumb_style, config.inner_column)]
    top_right, bottom_right = PINKY_SCREW_OFFSETS[(config.pinky_15u, config.extra_row)]
    return [
        (0, 0, TOP_LEFT_SCREW_OFFSET),
        (0, config.lastrow, bottom_left),
        (config.lastcol, config.lastrow, bottom_right),
        (config.lastcol, 0, top_right),
        (io + 2, 0, top_middle),
        (io + 1, config.lastrow, bottom_middle),
    ]


def screw_insert_position(config: ShapeConfig, column: int, row: int) -> np.ndarray:
    shift_right = column == config.lastcol
    shift_left = column == 0
    shift_up = (not (shift_right or shift_left)) and (row == 0)
    shift_down = (not (shift_right or shift_left)) and (row >= config.lastrow)

    if shift_up:
        return key_position(
            config, np.array(wall_locate2(config, 0, 1)) + np.array([0, config.mount_height / 2, 0]), column, row
        )
    if shift_down:
        return key_position(
            config, np.array(wall_locate2(config, 0, -2.5)) - np.array([0, config.mount_height / 2, 0]), column, row
        )
    if shift_left:
        return left_key_position(config, row, 0) + np.array(wall_locate3(config, -1, 0))
    return key_position(
        config, np.array(wall_locate2(config, 1, 0)) + np.array([config.mount_width / 2, 0, 0]), column, row
    )


def screw_insert_shape(engine: GeometryEngine, bottom_radius: float, top_radius: float, height: float):
    logging.debug("screw_insert_shape()")
    if bottom_radius == top_radius:
        return engine.cylinder(bottom_radius, height, 30)
    return engine.cone(bottom_radius, top_radius, height, 30)


def screw_insert_all_shapes(config: ShapeConfig, engine: GeometryEngine, bottom_radius, top_radius, height) -> List:
    logging.debug("screw_insert_all_shapes()")
    shape = screw_insert_shape(engine, bottom_radius, top_radius, height)
    shapes = []
    for column, row, offset in screw_insert_locations(config):
        position = screw_insert_position(config, column, row)
        shapes.append(engine.translate(shape, np.array(offset) + np.array([position[0], position[1], height / 2])))
    return shapes


def screw_insert_holes(config: ShapeConfig, engine: GeometryEngine) -> List:
    return screw_insert_all_shapes(
        config, engine, config.screw_insert_bottom_radius, config.screw_insert_top_radius, config.screw_insert_height
    )


def screw_insert_outers(config: ShapeConfig, engine: GeometryEngine) -> List:
    return screw_insert_all_shapes(
        config,
        engine,
        config.screw_insert_bottom_radius + config.screw_insert_wall,
        config.screw_insert_top_radius + config.screw_insert_wall,
        config.screw_insert_height + 1,
    )


def screw_insert_screw_holes(config: ShapeConfig, engine: GeometryEngine) -> List:
    return screw_insert_all_shapes(config, engine, config.screw_hole_radius, config.screw_hole_radius, 350)


################
## USB Holder ##
################

HOLDER_OFFSETS = {4: -3.5, 5: 0.0}
NOTCH_OFFSETS = {4: 3.35, 5: 0.15, 6: -5.07}


def holder_offset(config: ShapeConfig) -> float:
    if config.nrows == 6:
        return 3.2 if config.inner_column else 2.2
    return HOLDER_OFFSETS.get(config.nrows, 0.0)


def notch_offset(config: ShapeConfig) -> float:
    return NOTCH_OFFSETS.get(config.nrows, 0.0)


def usb_holder_position(config: ShapeConfig) -> np.ndarray:
    reference = key_position(
        config, np.array(wall_locate2(config, 0, -1)) - np.array([0, config.mount_height / 2, 0]), 0, 0
    )
    return np.array([18.8 + holder_offset(config) + reference[0], 18.7 + reference[1], 1.3 + 2])


def usb_holder_cutouts(config: ShapeConfig, engine: GeometryEngine) -> List:
    logging.debug("usb_holder_cutouts()")
    position = usb_holder_position(config)
    notch = notch_offset(config)

    space = engine.translate(engine.box(28.666, 30, 12.4), position + np.array([-1.5, -config.wall_thickness, 2.9]))
    holder_notch = engine.translate(engine.box(31.366, 1.3, 12.4), position + np.array([-1.5, 4.4 + notch, 2.9]))
    trrs_notch = engine.translate(engine.box(8.4, 2.4, 19.8), position + np.array([-10.33, 3.6 + notch, 6.6]))
    return [space, holder_notch, trrs_notch]


##############
## Assembly ##
##############


def _mirror_left(engine: GeometryEngine, shape, side: str):
    if side == "left":
        return engine.mirror(shape, (1, 0, 0))
    return shape


def model_side(config: ShapeConfig, engine: GeometryEngine, side: str = "right"):
    logging.debug("model_side()")
    stitcher = Stitcher(Placer(config, engine))
    table = build_patch_table(config)

    body = [key_holes(config, engine)]
    if config.has_thumb:
        body.append(thumb(config, engine))
    body.extend(stitcher.render_all(skin_items(table)))
    shape = engine.union(body)

    walls_shape = engine.union(stitcher.render_all(wall_items(table)) + screw_insert_outers(config, engine))
    if config.usb_holder:
        walls_shape = engine.difference(walls_shape, usb_holder_cutouts(config, engine))
    walls_shape = engine.difference(walls_shape, [engine.union(screw_insert_holes(config, engine))])
    shape = engine.union([shape, walls_shape])

    block = engine.box(350, 350, 40)
    block = engine.translate(block, (0, 0, -20))
    shape = engine.difference(shape, [block])

    if config.show_caps:
        shape = engine.union([shape, caps(config, engine)])
        if config.has_thumb:
            shape = engine.union([shape, thumbcaps(config, engine)])

    return _mirror_left(engine, shape, side)


def baseplate(config: ShapeConfig, engine: GeometryEngine, side: str = "right", shell=None):
    """
    Floor plate under the shell footprint, with the screw through-holes cut.

    `shell` is the right-hand shell; it is built when not given.
    """
    logging.debug("baseplate()")
    if shell is None:
        shell = model_side(config, engine, "right")

    plate = engine.floor_plate(shell, config.base_thickness)
    tool = engine.translate(engine.union(screw_insert_screw_holes(config, engine)), (0, 0, -10))
    plate = engine.difference(plate, [tool])
    return _mirror_left(engine, plate, side)


def export_shape(engine: GeometryEngine, shape, output_dir: pathlib.Path, name: str) -> List[pathlib.Path]:
    paths = []
    for exporter in engine.exporters():
        path = output_dir / (name + exporter.file_type())
        exporter.export_geometry(shape, path)
        paths.append(path)
    return paths


def default_output_dir(config: ShapeConfig) -> pathlib.Path:
    if config.save_dir in ('', None, '.'):
        return pathlib.Path("things")
    return pathlib.Path("things") / config.save_dir


def run(config: ShapeConfig, engine: GeometryEngine, output_dir: Optional[pathlib.Path] = None) -> List[pathlib.Path]:
    check_closure(config)

    if output_dir is None:
        output_dir = default_output_dir(config)
    output_dir.mkdir(parents=True, exist_ok=True)

    right = model_side(config, engine, "right")
    if config.symmetry == "asymmetric":
        left = model_side(config, engine, "left")
    else:
        left = engine.mirror(right, (1, 0, 0))
    right_plate = baseplate(config, engine, "right", shell=right)
    left_plate = engine.mirror(right_plate, (1, 0, 0))

    paths = []
    paths += export_shape(engine, right, output_dir, config.config_name + "_right")
    paths += export_shape(engine, left, output_dir, config.config_name + "_left")
    paths += export_shape(engine, right_plate, output_dir, config.config_name + "_right_plate")
    paths += export_shape(engine, left_plate, output_dir, config.config_name + "_left_plate")
    return paths
