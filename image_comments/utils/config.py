import os

from easydict import EasyDict as edict

from .env import load_cfg_from_env


def get_default_config() -> edict:
    cfg = edict()

    cfg.annotation = edict()
    cfg.annotation.default_mode = "point"
    # Coordinates outside the image are kept as captured unless clamped
    cfg.annotation.clamp_coordinates = False
    cfg.annotation.discard_degenerate_boxes = False

    # Colors are RGB
    cfg.render = edict()
    cfg.render.point_radius = 5
    cfg.render.box_thickness = 1
    cfg.render.point_color = (255, 0, 0)
    cfg.render.box_color = (0, 0, 255)
    cfg.render.preview_color = (255, 0, 0)
    cfg.render.label_scale = 0.4

    return cfg


def load_config(env=None) -> edict:
    """Default config with environment overrides applied."""
    if env is None:
        env = os.environ
    return load_cfg_from_env(get_default_config(), env)
