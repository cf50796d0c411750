"""
Exceptions raised by the HUD pointer package.
"""


class HudPointerError(Exception):
    """Base class for all hud_pointer errors."""


class MalformedLandmarksError(HudPointerError, ValueError):
    """Detector output is missing the palm-centre landmark or holds bad coordinates."""


class ConfigError(HudPointerError):
    """Configuration file is missing or holds invalid values."""


class FrameSourceError(HudPointerError, RuntimeError):
    """Camera or detector could not be started."""
