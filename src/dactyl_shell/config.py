import dataclasses
import json
import logging
import pathlib
from dataclasses import dataclass
from typing import Optional, Tuple

from .engines import ENGINES
from .generate_configuration import shape_config

COLUMN_STYLES = ('standard', 'orthographic', 'fixed')
SYMMETRIES = ('symmetric', 'asymmetric')
NO_THUMB = 'NONE'

Vector = Tuple[float, float, float]


class ConfigurationError(ValueError):
    """
    Raised when a configuration cannot produce a valid shell.
    """


@dataclass(frozen=True)
class ShapeConfig:
    """
    Read-only shape parameters for one generation run.

    Build it with `load_config`; values are validated once and never change afterwards.
    Angles are in radians, lengths in millimeters.
    """

    ENGINE: str
    show_caps: bool

    nrows: int
    ncols: int
    alpha: float
    beta: float
    centercol: int
    centerrow_offset: int
    tenting_angle: float

    pinky_15u: bool
    first_15u_row: int
    last_15u_row: int
    extra_row: bool
    inner_column: bool
    lastrow_columns: Tuple[int, ...]
    thumb_style: str
    column_style: str

    column_offsets: Tuple[Vector, ...]
    thumb_offsets: Vector
    keyboard_z_offset: float
    extra_width: float
    extra_height: float

    wall_z_offset: float
    wall_x_offset: float
    wall_y_offset: float
    wall_thickness: float
    left_wall_x_offset: float
    left_wall_z_offset: float

    fixed_angles: Tuple[float, ...]
    fixed_x: Tuple[float, ...]
    fixed_z: Tuple[float, ...]
    fixed_tenting: float

    keyswitch_height: float
    keyswitch_width: float
    sa_profile_key_height: float
    sa_length: float
    sa_double_length: float
    plate_thickness: float
    side_nub_thickness: float
    retention_tab_thickness: float
    create_side_nubs: bool

    web_thickness: float
    post_size: float

    screw_insert_height: float
    screw_insert_bottom_radius: float
    screw_insert_top_radius: float
    screw_insert_wall: float
    screw_hole_radius: float

    usb_holder: bool
    base_thickness: float
    symmetry: str
    save_dir: str
    config_name: str

    @classmethod
    def from_dict(cls, values: dict) -> "ShapeConfig":
        names = {field.name for field in dataclasses.fields(cls)}
        for key in sorted(set(values) - names):
            logging.warning("Ignoring unknown configuration key %s", key)

        kwargs = {}
        for name in names:
            if name not in values:
                raise ConfigurationError("missing configuration key {}".format(name))
            kwargs[name] = _freeze(values[name])
        return cls(**kwargs)

    def replace(self, **changes) -> "ShapeConfig":
        config = dataclasses.replace(self, **{key: _freeze(value) for key, value in changes.items()})
        config.validate()
        return config

    ####################
    ## Derived values ##
    ####################

    @property
    def lastrow(self) -> int:
        return self.nrows - 1

    @property
    def cornerrow(self) -> int:
        return self.nrows - 2

    @property
    def lastcol(self) -> int:
        return self.ncols - 1

    @property
    def centerrow(self) -> int:
        return self.nrows - self.centerrow_offset

    @property
    def innercol_offset(self) -> int:
        return 1 if self.inner_column else 0

    @property
    def mount_width(self) -> float:
        return self.keyswitch_width + 3.2

    @property
    def mount_height(self) -> float:
        return self.keyswitch_height + 2.7

    @property
    def post_adj(self) -> float:
        return self.post_size / 2

    @property
    def has_thumb(self) -> bool:
        return self.thumb_style != NO_THUMB

    def validate(self):
        """
        Reject configurations that would index past a table or leave the shell open.
        """
        from .patch_table import required_groups
        from .thumbs import THUMB_CLUSTERS
        from .topology import Topology

        if self.ENGINE not in ENGINES:
            raise ConfigurationError("unknown ENGINE {!r}, expected one of {}".format(self.ENGINE, ENGINES))
        if self.column_style not in COLUMN_STYLES:
            raise ConfigurationError("unknown column_style {!r}, expected one of {}".format(self.column_style, COLUMN_STYLES))
        if self.symmetry not in SYMMETRIES:
            raise ConfigurationError("unknown symmetry {!r}, expected one of {}".format(self.symmetry, SYMMETRIES))
        if self.thumb_style != NO_THUMB and self.thumb_style not in THUMB_CLUSTERS:
            raise ConfigurationError(
                "unknown thumb_style {!r}, expected one of {}".format(self.thumb_style, (*THUMB_CLUSTERS, NO_THUMB))
            )
        if self.nrows < 2:
            raise ConfigurationError("nrows must be at least 2")
        if self.ncols < 1:
            raise ConfigurationError("ncols must be at least 1")
        if self.inner_column and self.nrows < 3:
            raise ConfigurationError("an inner column needs nrows of at least 3")
        if self.inner_column and self.ncols < 2:
            raise ConfigurationError("an inner column needs at least one main column")
        main_columns = self.ncols - self.innercol_offset
        for column in self.lastrow_columns:
            if not 0 <= column < main_columns:
                raise ConfigurationError(
                    "lastrow_columns entry {} is outside the {} main columns".format(column, main_columns)
                )

        if len(self.column_offsets) < self.ncols:
            raise ConfigurationError(
                "column_offsets has {} entries but there are {} columns".format(len(self.column_offsets), self.ncols)
            )
        if self.column_style == 'fixed':
            for name in ('fixed_angles', 'fixed_x', 'fixed_z'):
                if len(getattr(self, name)) < self.ncols:
                    raise ConfigurationError(
                        "{} has {} entries but there are {} columns".format(name, len(getattr(self, name)), self.ncols)
                    )

        Topology(self).validate()
        required_groups(self)


def _freeze(value):
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def load_config(path: Optional[pathlib.Path] = None, **overrides) -> ShapeConfig:
    """
    Overlay a JSON configuration file and keyword overrides on the defaults.
    """
    values = dict(shape_config)
    if path is None:
        logging.info("NO CONFIGURATION SPECIFIED, USING DEFAULT CONFIGURATION")
    else:
        logging.info("Loading configuration from %s", path)
        with open(path, mode="rt", encoding="utf-8") as fid:
            values.update(json.load(fid))
    values.update(overrides)

    config = ShapeConfig.from_dict(values)
    config.validate()
    return config
