import importlib.util
import logging
from gettext import gettext as _
from pathlib import Path

logger = logging.getLogger(__name__)


def incrf(start: int = 1):
    """Endless counter yielding start, start + 1, ..."""
    value = start
    while True:
        yield value
        value += 1


def load_module(script_path: Path, module_name: str = "module"):
    logger.debug(
        _("Loading module {module_name} from {script_path}").format(
            module_name=module_name, script_path=script_path
        )
    )
    spec = importlib.util.spec_from_file_location(module_name, str(script_path))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
