from image_comments.utils.config import get_default_config, load_config


def test_defaults():
    cfg = get_default_config()
    assert cfg.annotation.default_mode == "point"
    assert cfg.annotation.clamp_coordinates is False
    assert cfg.annotation.discard_degenerate_boxes is False


def test_load_config_applies_env():
    cfg = load_config({"IMGCOMMENT_annotation__discard_degenerate_boxes": "1"})
    assert cfg.annotation.discard_degenerate_boxes is True
    # Defaults are rebuilt on every call
    assert get_default_config().annotation.discard_degenerate_boxes is False
