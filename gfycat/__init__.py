import logging
from typing import TYPE_CHECKING

# NOTE:
#   DO NOT IMPORT ANYTHING NOT PROVIDED BY PYTHON STANDARD LIBRARY HERE TO AVOID "setup.py" INSTALL FAILURE

logging.captureWarnings(True)
LOGGER = logging.getLogger(__name__)

if TYPE_CHECKING:
    from typing import Any, Optional

    from gfycat.generator import Gfycat
    from gfycat.typedefs import AnySettingsContainer


def create(settings=None, **kwargs):
    # type: (Optional[AnySettingsContainer], Any) -> Gfycat
    """
    Shortcut to :func:`gfycat.generator.create` that loads the word lists and returns a ready name generator.
    """
    import gfycat.generator
    return gfycat.generator.create(settings, **kwargs)
