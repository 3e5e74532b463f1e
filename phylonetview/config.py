"""
Configuration for tree layout and rendering.

Module-level constants are the defaults used across the package. ViewerConfig
bundles the settings a host application usually wants to override, and can be
read from ``PHYLONETVIEW_*`` environment variables.
"""

import os
from dataclasses import dataclass

# Canvas
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_MARGIN = 0.0

# Used instead of a zero total depth when scaling the vertical axis
DEFAULT_DEPTH_FLOOR = 1.0

# Drawing
DEFAULT_NODE_RADIUS = 5.0
DEFAULT_LABEL_OFFSET = 10.0
DEFAULT_COLOR = "#000000"
DEFAULT_LABEL_COLOR = "#000000"
DEFAULT_FONT_FAMILY = "Arial"
DEFAULT_FONT_SIZE = 12
STROKE_WIDTH = 1

# Logging
LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ENV_PREFIX = "PHYLONETVIEW_"


@dataclass
class ViewerConfig:
    """Canvas and logging settings for a host application."""

    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    margin: float = DEFAULT_MARGIN
    log_level: str = LOG_LEVEL

    @classmethod
    def from_env(cls) -> "ViewerConfig":
        """
        Build a config from ``PHYLONETVIEW_WIDTH``, ``PHYLONETVIEW_HEIGHT``,
        ``PHYLONETVIEW_MARGIN`` and ``PHYLONETVIEW_LOG_LEVEL``, falling back to
        the defaults for unset variables.

        Raises:
            ValueError: If a numeric variable does not hold a number.
        """
        return cls(
            width=float(os.environ.get(ENV_PREFIX + "WIDTH", DEFAULT_WIDTH)),
            height=float(os.environ.get(ENV_PREFIX + "HEIGHT", DEFAULT_HEIGHT)),
            margin=float(os.environ.get(ENV_PREFIX + "MARGIN", DEFAULT_MARGIN)),
            log_level=os.environ.get(ENV_PREFIX + "LOG_LEVEL", LOG_LEVEL).upper(),
        )
