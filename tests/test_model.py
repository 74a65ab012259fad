import numpy as np
import pytest

from dactyl_shell import model


def test_screw_insert_locations(config):
    locations = model.screw_insert_locations(config)
    assert [(column, row) for column, row, _offset in locations] == [
        (0, 0), (0, config.lastrow), (config.lastcol, config.lastrow), (config.lastcol, 0), (3, 0), (2, config.lastrow),
    ]
    assert locations[0][2] == model.TOP_LEFT_SCREW_OFFSET
    assert locations[1][2] == (5, -6, 0)
    assert locations[3][2] == (-4, 6.5, 0)


def test_screw_inserts_without_thumb_use_default_offsets(config):
    default = model.screw_insert_locations(config)
    no_thumb = model.screw_insert_locations(config.replace(thumb_style="NONE"))
    assert default == no_thumb


@pytest.mark.parametrize("pinky_15u,extra_row", [(False, False), (False, True), (True, False), (True, True)])
def test_pinky_screw_offsets(config, pinky_15u, extra_row):
    variant = config.replace(pinky_15u=pinky_15u, extra_row=extra_row)
    locations = model.screw_insert_locations(variant)
    top_right, bottom_right = model.PINKY_SCREW_OFFSETS[(pinky_15u, extra_row)]
    assert locations[2][2] == bottom_right
    assert locations[3][2] == top_right


def test_screw_inserts_stand_on_the_floor(config, engine):
    for shape in model.screw_insert_holes(config, engine):
        assert shape[:, 2].min() == pytest.approx(0)
        assert shape[:, 2].max() == pytest.approx(config.screw_insert_height)
    for shape in model.screw_insert_outers(config, engine):
        assert shape[:, 2].max() == pytest.approx(config.screw_insert_height + 1)


@pytest.mark.parametrize("nrows,inner_column,expected", [
    (4, True, -3.5),
    (5, True, 0.0),
    (6, True, 3.2),
    (6, False, 2.2),
])
def test_holder_offset(config, nrows, inner_column, expected):
    assert model.holder_offset(config.replace(nrows=nrows, inner_column=inner_column)) == expected


def test_usb_cutouts_sit_behind_first_keys(config, engine):
    space, notch, trrs = model.usb_holder_cutouts(config, engine)
    position = model.usb_holder_position(config)
    np.testing.assert_allclose(space.mean(axis=0), position + [-1.5, -config.wall_thickness, 2.9])
    np.testing.assert_allclose(notch.mean(axis=0), position + [-1.5, 4.4 + model.notch_offset(config), 2.9])
    np.testing.assert_allclose(trrs.mean(axis=0), position + [-10.33, 3.6 + model.notch_offset(config), 6.6])


def test_single_plate_extent(config, engine):
    plate = model.single_plate(config, engine)
    half_width = config.keyswitch_width / 2 + 1.8
    assert plate[:, 0].max() == pytest.approx(half_width)
    assert plate[:, 0].min() == pytest.approx(-half_width)
    assert plate[:, 2].max() == pytest.approx(config.plate_thickness)


def test_single_plate_side_nubs(config, engine):
    plain = model.single_plate(config, engine)
    nubbed = model.single_plate(config.replace(create_side_nubs=True), engine)
    assert len(nubbed) > len(plain)


@pytest.mark.parametrize("size", [1, 1.5, 2])
def test_sa_cap_sits_above_plate(config, engine, size):
    cap = model.sa_cap(config, engine, size)
    assert cap[:, 2].min() == pytest.approx(5 + config.plate_thickness)
    assert cap[:, 2].max() == pytest.approx(5 + config.plate_thickness + 12.05)


def test_sa_cap_rejects_unknown_size(config, engine):
    with pytest.raises(ValueError):
        model.sa_cap(config, engine, 3)


def test_left_side_is_mirrored(no_thumb_config, engine):
    right = model.model_side(no_thumb_config, engine, "right")
    left = model.model_side(no_thumb_config, engine, "left")
    np.testing.assert_allclose(left, right * [-1, 1, 1], atol=1e-9)


def test_model_side_with_caps(config, engine):
    bare = model.model_side(config, engine)
    capped = model.model_side(config.replace(show_caps=True), engine)
    assert len(capped) > len(bare)


def test_baseplate_lies_below_the_floor(no_thumb_config, engine):
    plate = model.baseplate(no_thumb_config, engine)
    assert plate[:, 2].max() == pytest.approx(0)
    assert plate[:, 2].min() == pytest.approx(-no_thumb_config.base_thickness)


@pytest.mark.parametrize("save_dir,expected", [(".", "things"), ("", "things"), ("v2", "things/v2")])
def test_default_output_dir(config, save_dir, expected):
    assert model.default_output_dir(config.replace(save_dir=save_dir)).as_posix() == expected


@pytest.mark.parametrize("symmetry", ["symmetric", "asymmetric"])
def test_run_writes_every_part(no_thumb_config, engine, tmp_path, symmetry):
    config = no_thumb_config.replace(symmetry=symmetry, config_name="TEST")
    paths = model.run(config, engine, tmp_path / "out")
    assert [path.name for path in paths] == [
        "TEST_right.xyz", "TEST_left.xyz", "TEST_right_plate.xyz", "TEST_left_plate.xyz",
    ]
    for path in paths:
        assert path.exists()
