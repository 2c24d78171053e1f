import logging
from gettext import gettext as _
from typing import Dict

from easydict import EasyDict as edict

logger = logging.getLogger(__name__)

ENV_PREFIX = "IMGCOMMENT_"

_TRUE_STRINGS = {"1", "true", "yes", "on"}


def coerce_like(value, default):
    """Convert an environment string to the type of the value it replaces."""
    if not isinstance(value, str) or default is None or isinstance(default, str):
        return value
    if isinstance(default, bool):
        return value.strip().lower() in _TRUE_STRINGS
    if isinstance(default, (list, tuple)):
        return type(default)(
            coerce_like(part.strip(), item)
            for part, item in zip(value.split(","), default)
        )
    return type(default)(value)


def load_cfg_from_env(cfg: edict, env: Dict[str, str], prefix: str = ENV_PREFIX):
    for k, v in env.items():
        if k.startswith(prefix):
            cfgkey = k[len(prefix):].replace("__", ".")
            logger.warning(
                _(
                    "Changing configuration entry from environment variable: {k}={v}"
                ).format(
                    k=cfgkey, v=v
                )  # noqa:E501
            )  # noqa: E501
            *parts, last = cfgkey.split(".")
            this_cfg = cfg
            for part in parts:
                if this_cfg.get(part) is None:
                    this_cfg[part] = edict()
                this_cfg = this_cfg[part]
            default = this_cfg.get(last)
            try:
                this_cfg[last] = coerce_like(v, default)
            except ValueError as e:
                raise ValueError(
                    _(
                        "Invalid value {v!r} for environment variable {k}: expected {kind}"
                    ).format(v=v, k=k, kind=type(default).__name__)
                ) from e
    return cfg
