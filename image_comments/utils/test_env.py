import image_comments.utils.i18n  # noqa:F401

import pytest
from easydict import EasyDict as edict

from .env import load_cfg_from_env


def test_load_cfg_from_env():
    input_dict = {"IMGCOMMENT_a": 2, "IMGCOMMENT_eoq__trabson": 3, "OTHER_b": 1}
    loaded = load_cfg_from_env(edict(), input_dict)
    assert loaded.a == 2
    assert loaded.eoq.trabson == 3
    assert "b" not in loaded and "OTHER_b" not in loaded


def test_env_strings_follow_default_types():
    cfg = edict(
        render=edict(point_radius=5, label_scale=0.4, point_color=(255, 0, 0)),
        annotation=edict(clamp_coordinates=False, default_mode="point"),
    )
    env = {
        "IMGCOMMENT_render__point_radius": "8",
        "IMGCOMMENT_render__label_scale": "0.5",
        "IMGCOMMENT_render__point_color": "0, 255, 0",
        "IMGCOMMENT_annotation__clamp_coordinates": "true",
        "IMGCOMMENT_annotation__default_mode": "box",
    }
    loaded = load_cfg_from_env(cfg, env)
    assert loaded.render.point_radius == 8
    assert loaded.render.label_scale == 0.5
    assert loaded.render.point_color == (0, 255, 0)
    assert loaded.annotation.clamp_coordinates is True
    assert loaded.annotation.default_mode == "box"


def test_bad_env_value_names_the_variable():
    cfg = edict(render=edict(point_radius=5))
    env = {"IMGCOMMENT_render__point_radius": "5.5"}

    with pytest.raises(ValueError, match="IMGCOMMENT_render__point_radius"):
        load_cfg_from_env(cfg, env)
    assert cfg.render.point_radius == 5
