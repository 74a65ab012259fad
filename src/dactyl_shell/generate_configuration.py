import argparse
import json
import logging
import math
import pathlib
import sys
from typing import Optional


def deg2rad(degrees: float) -> float:
    return degrees * math.pi / 180


shape_config = {
    'ENGINE': 'solid',  # 'solid' = OpenSCAD via SolidPython2, 'cadquery' = STEP/STL via CadQuery

    ######################
    ## Shape parameters ##
    ######################

    'show_caps': False,

    'nrows': 6,  # key rows
    'ncols': 7,  # key columns, including the inner column

    'alpha': math.pi / 12.0,  # curvature of the columns
    'beta': math.pi / 36.0,  # curvature of the rows
    'centercol': 4,  # controls left_right tilt / tenting (higher number is more tenting)
    'centerrow_offset': 3,  # rows from max, controls front_back tilt
    'tenting_angle': math.pi / 4.0,  # or, change this for more precise tenting control

    'pinky_15u': False,  # the outer column uses 1.5u keys
    'first_15u_row': 0,  # first row with a 1.5u key on the outer column
    'last_15u_row': 4,  # last row with a 1.5u key on the outer column

    'extra_row': False,  # adds an extra bottom row to the outer columns
    'inner_column': True,  # adds an extra inner column (two less rows than nrows)
    'lastrow_columns': [2, 3],  # columns (counted from the first main column) that reach the last row

    'thumb_style': 'DEFAULT',  # 'DEFAULT', 'MINI', 'CARBONFET' or 'NONE'

    'column_style': 'standard',  # 'standard', 'orthographic' or 'fixed'

    # per column, including the inner column
    'column_offsets': [
        [0, -2, 0],
        [0, -2, 0],
        [0, 0, 0],
        [0, 2.82, -4.5],
        [0, 0, 0],
        [0, -12, 5.64],
        [0, -12, 5.64],
    ],

    'thumb_offsets': [6, -3, 7],
    'keyboard_z_offset': 40,  # controls overall height

    'extra_width': 3,  # extra space between the base of keys
    'extra_height': 1,

    'wall_z_offset': 10,  # length of the first downward_sloping part of the wall
    'wall_x_offset': 10,  # offset in the x direction for the first downward_sloping part of the wall
    'wall_y_offset': 8,  # offset in the y direction for the first downward_sloping part of the wall
    'wall_thickness': 2,

    'left_wall_x_offset': 16,
    'left_wall_z_offset': 0,

    ## Settings for column_style == 'fixed'
    ## The defaults roughly match Maltron settings
    ## http://patentimages.storage.googleapis.com/EP0219944A2/imgf0002.png
    ## fixed_z overrides the z portion of the column offsets above.
    'fixed_angles': [deg2rad(10), deg2rad(10), 0, 0, 0, deg2rad(-15), deg2rad(-15)],
    'fixed_x': [-41.5, -22.5, 0, 20.3, 41.4, 65.5, 89.6],  # relative to the middle finger
    'fixed_z': [12.1, 8.3, 0, 5, 10.7, 14.5, 17.5],
    'fixed_tenting': deg2rad(0),

    #################
    ## Switch Hole ##
    #################

    'keyswitch_height': 14.15,
    'keyswitch_width': 14.15,
    'sa_profile_key_height': 12.7,
    'sa_length': 18.25,
    'sa_double_length': 37.5,
    'plate_thickness': 4,
    'side_nub_thickness': 4,
    'retention_tab_thickness': 1.5,
    'create_side_nubs': False,  # Cherry MX and Gateron switches can use side nubs

    ####################
    ## Web Connectors ##
    ####################

    'web_thickness': 4.5,
    'post_size': 0.1,

    ###################
    ## Screw Inserts ##
    ###################

    'screw_insert_height': 6,
    'screw_insert_bottom_radius': 4.0 / 2,
    'screw_insert_top_radius': 3.9 / 2,
    'screw_insert_wall': 1.65,
    'screw_hole_radius': 1.7,

    ################
    ## Controller ##
    ################

    'usb_holder': True,  # cut the USB holder and TRRS notch into the back wall

    'base_thickness': 3.0,

    'symmetry': 'symmetric',  # 'symmetric' exports a mirrored right half as the left half

    'save_dir': '.',
    'config_name': 'DM',
}


class GenerateConfigAction(argparse.Action):
    """
    Write the default configuration to the given file and exit.
    """

    def __init__(self, option_strings, dest: str, **kwargs):
        kwargs.update({
            'type': pathlib.Path,
            'metavar': 'PATH',
            'help': "Write the default configuration to PATH and exit.",
        })
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser: argparse.ArgumentParser, namespace: argparse.Namespace, values: pathlib.Path, _option_string: Optional[str] = None):
        write_config(values)
        parser.exit()


def write_config(path: pathlib.Path, config: Optional[dict] = None):
    logging.info("Writing configuration to %s", path)
    with open(path, mode="wt", encoding="utf-8") as fid:
        json.dump(shape_config if config is None else config, fid, indent=4)
        fid.write("\n")


if __name__ == '__main__':
    write_config(pathlib.Path(sys.argv[1]) if len(sys.argv) > 1 else pathlib.Path("run_config.json"))
