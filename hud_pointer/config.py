"""
Configuration management for the HUD pointer pipeline.
"""
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .types import AppMode

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"
CONFIG_ENV_VAR = "HUD_POINTER_CONFIG"


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int


@dataclass
class DetectorConfig:
    """MediaPipe gesture recognizer settings."""
    model_path: str
    num_hands: int
    min_detection_confidence: float
    min_tracking_confidence: float
    min_gesture_score: float


@dataclass
class SmoothingConfig:
    """Exponential smoothing of the control point."""
    alpha: float


@dataclass
class DebounceConfig:
    """Run-length debouncing of the gesture channel."""
    confidence_floor: float
    confirm_after: int


@dataclass
class ModesConfig:
    """Gesture labels that override the application mode."""
    overrides: Dict[str, AppMode] = field(default_factory=dict)


@dataclass
class LoopConfig:
    """Tick scheduling."""
    tick_hz: float


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    window_name: str
    show_landmarks: bool
    show_cursor: bool
    interaction_radius: float


@dataclass
class LoggingConfig:
    level: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    detector: DetectorConfig
    smoothing: SmoothingConfig
    debounce: DebounceConfig
    modes: ModesConfig
    loop: LoopConfig
    display: DisplayConfig
    logging: LoggingConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    The packaged defaults are always read first; a user file only needs the
    keys it changes.

    Args:
        path: Path to config file. If None, uses $HUD_POINTER_CONFIG when set,
            otherwise the packaged config.default.yaml

    Returns:
        Configuration object with all settings
    """
    data = _read_yaml(DEFAULT_CONFIG_PATH)

    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)

    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        data = _merge(data, _read_yaml(config_path))

    return _dict_to_config(data)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the CLI."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigError(f"Unknown log level: {level}")
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {config_path}")
    return data


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    try:
        cfg = _build(data)
    except KeyError as e:
        raise ConfigError(f"Missing config key: {e}") from e
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config value: {e}") from e

    _validate(cfg)
    return cfg


def _build(data: Dict[str, Any]) -> Cfg:
    camera_data = data['camera']
    if 'mirror' in camera_data:
        # Control points are always mirrored, so the preview must be too
        raise ValueError("camera.mirror is not configurable; the preview is always mirrored")
    camera = CameraConfig(
        index=int(camera_data['index']),
        width=int(camera_data['width']),
        height=int(camera_data['height']),
        fps=int(camera_data['fps'])
    )

    det_data = data['detector']
    detector = DetectorConfig(
        model_path=str(det_data['model_path']),
        num_hands=int(det_data['num_hands']),
        min_detection_confidence=float(det_data['min_detection_confidence']),
        min_tracking_confidence=float(det_data['min_tracking_confidence']),
        min_gesture_score=float(det_data['min_gesture_score'])
    )

    smoothing = SmoothingConfig(alpha=float(data['smoothing']['alpha']))

    debounce_data = data['debounce']
    debounce = DebounceConfig(
        confidence_floor=float(debounce_data['confidence_floor']),
        confirm_after=int(debounce_data['confirm_after'])
    )

    overrides = {}
    for label, mode_name in (data['modes'].get('overrides') or {}).items():
        try:
            overrides[str(label)] = AppMode[str(mode_name).upper()]
        except KeyError:
            raise ValueError(f"unknown mode {mode_name!r} for gesture {label!r}")
    modes = ModesConfig(overrides=overrides)

    loop = LoopConfig(tick_hz=float(data['loop']['tick_hz']))

    display_data = data['display']
    display = DisplayConfig(
        window_name=str(display_data['window_name']),
        show_landmarks=bool(display_data['show_landmarks']),
        show_cursor=bool(display_data['show_cursor']),
        interaction_radius=float(display_data['interaction_radius'])
    )

    log_config = LoggingConfig(level=str(data['logging']['level']))

    return Cfg(
        camera=camera,
        detector=detector,
        smoothing=smoothing,
        debounce=debounce,
        modes=modes,
        loop=loop,
        display=display,
        logging=log_config
    )


def _validate(cfg: Cfg) -> None:
    if not 0.0 < cfg.smoothing.alpha <= 1.0:
        raise ConfigError(f"smoothing.alpha must be in (0, 1], got {cfg.smoothing.alpha}")
    if not 0.0 <= cfg.debounce.confidence_floor < 1.0:
        raise ConfigError(
            f"debounce.confidence_floor must be in [0, 1), got {cfg.debounce.confidence_floor}"
        )
    if cfg.debounce.confirm_after < 0:
        raise ConfigError(f"debounce.confirm_after must be >= 0, got {cfg.debounce.confirm_after}")
    if cfg.loop.tick_hz <= 0:
        raise ConfigError(f"loop.tick_hz must be positive, got {cfg.loop.tick_hz}")
    if cfg.detector.num_hands != 1:
        raise ConfigError("detector.num_hands must be 1: exactly one hand is tracked")
