"""
Configuration management for the detection bridge.

Provides a layered configuration system with the following precedence
(highest to lowest):

    CLI arguments > Environment variables > YAML config file > Defaults

Design constraints:
    - The system MUST run with zero configuration (safe defaults only).
    - Missing or invalid values fail early and loudly.
    - No conversion logic or I/O beyond reading the config file belongs here.

Non-goals:
    - No dynamic reloading.
    - No parameter-server or remote configuration.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Project root resolution
# ---------------------------------------------------------------------------
# Resolved relative to this file's location: detection_bridge/config.py → repo root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent


def get_project_root() -> Path:
    """Return the resolved project root directory."""
    return _PROJECT_ROOT


# ---------------------------------------------------------------------------
# Configuration dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConverterConfig:
    """Message conversion parameters.

    Attributes:
        frame_id: Reference frame written into every message header.
        image_width: Source image width in pixels.
        image_height: Source image height in pixels.
    """

    frame_id: str = "camera_link"
    image_width: int = 640
    image_height: int = 480


@dataclass(frozen=True)
class DetectionConfig:
    """Parsing of raw detector rows.

    Attributes:
        confidence_threshold: Minimum confidence to accept a raw row.
        class_names: Class names indexed by class id.
    """

    confidence_threshold: float = 0.25
    class_names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class InputConfig:
    """Input source configuration.

    Attributes:
        source: Path to a JSON file of detector output.
    """

    source: str = "detections.json"


@dataclass(frozen=True)
class OutputConfig:
    """Output behavior configuration.

    Attributes:
        mode: Output mode(s). Supports multiple comma-separated values:
              'save_json', 'save_csv', 'save_image'.
              Example: "save_json,save_csv"
        save_path: Directory where output artifacts are written.
    """

    mode: str = "save_json"
    save_path: str = "output/"


@dataclass(frozen=True)
class VisualizationConfig:
    """Visualization rendering parameters.

    Attributes:
        box_color: BGR color tuple for bounding boxes.
        thickness: Line thickness in pixels.
        show_label: Whether to render the class name and score.
    """

    box_color: Tuple[int, int, int] = (0, 255, 0)
    thickness: int = 2
    show_label: bool = True


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration.

    Aggregates all sub-configurations into a single, frozen object.
    """

    converter: ConverterConfig = field(default_factory=ConverterConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

_VALID_OUTPUT_MODES = {"save_json", "save_csv", "save_image"}


def parse_modes(mode: str) -> set:
    """Split a comma-separated mode string into a set of mode names."""
    return {m.strip() for m in mode.split(",") if m.strip()}


def validate(config: AppConfig) -> None:
    """Validate configuration values. Raises ValueError on invalid state."""

    if not config.converter.frame_id:
        raise ValueError("converter.frame_id must be a non-empty string.")

    if config.converter.image_width <= 0 or config.converter.image_height <= 0:
        raise ValueError(
            f"converter image dimensions must be positive, got "
            f"{config.converter.image_width}x{config.converter.image_height}."
        )

    modes = parse_modes(config.output.mode)
    if not modes:
        raise ValueError("output.mode must name at least one output mode.")

    invalid_modes = modes - _VALID_OUTPUT_MODES
    if invalid_modes:
        raise ValueError(
            f"Invalid output.mode(s): {invalid_modes}. "
            f"Valid modes: {_VALID_OUTPUT_MODES}. "
            f"Use comma-separated values for multiple outputs."
        )

    if not (0.0 <= config.detection.confidence_threshold <= 1.0):
        raise ValueError(
            f"detection.confidence_threshold must be in [0.0, 1.0], "
            f"got {config.detection.confidence_threshold}."
        )

    if len(config.visualization.box_color) != 3:
        raise ValueError(
            f"visualization.box_color must be a (B, G, R) tuple, "
            f"got {config.visualization.box_color}."
        )

    if config.visualization.thickness <= 0:
        raise ValueError(
            f"visualization.thickness must be positive, "
            f"got {config.visualization.thickness}."
        )


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------

def _parse_tuple(value, expected_len: int, cast_type=float):
    """Convert a list from YAML into a tuple of the expected type and length."""
    if isinstance(value, (list, tuple)):
        if len(value) != expected_len:
            raise ValueError(
                f"Expected {expected_len} values, got {len(value)}: {value}"
            )
        return tuple(cast_type(v) for v in value)
    return value


def _parse_names(value) -> Tuple[str, ...]:
    """Accept class names as a YAML list or a comma-separated string."""
    if isinstance(value, str):
        return tuple(n.strip() for n in value.split(",") if n.strip())
    return tuple(str(n) for n in value)


def _build_converter_config(raw: dict) -> ConverterConfig:
    """Build ConverterConfig from a raw YAML dict."""
    kwargs = {}
    if "frame_id" in raw:
        kwargs["frame_id"] = str(raw["frame_id"])
    if "image_width" in raw:
        kwargs["image_width"] = int(raw["image_width"])
    if "image_height" in raw:
        kwargs["image_height"] = int(raw["image_height"])
    return ConverterConfig(**kwargs)


def _build_detection_config(raw: dict) -> DetectionConfig:
    """Build DetectionConfig from a raw YAML dict."""
    kwargs = {}
    if "confidence_threshold" in raw:
        kwargs["confidence_threshold"] = float(raw["confidence_threshold"])
    if "class_names" in raw:
        kwargs["class_names"] = _parse_names(raw["class_names"])
    return DetectionConfig(**kwargs)


def _build_input_config(raw: dict) -> InputConfig:
    """Build InputConfig from a raw YAML dict."""
    kwargs = {}
    if "source" in raw:
        kwargs["source"] = str(raw["source"])
    return InputConfig(**kwargs)


def _build_output_config(raw: dict) -> OutputConfig:
    """Build OutputConfig from a raw YAML dict."""
    kwargs = {}
    if "mode" in raw:
        kwargs["mode"] = str(raw["mode"]).lower()
    if "save_path" in raw:
        kwargs["save_path"] = str(raw["save_path"])
    return OutputConfig(**kwargs)


def _build_visualization_config(raw: dict) -> VisualizationConfig:
    """Build VisualizationConfig from a raw YAML dict."""
    kwargs = {}
    if "box_color" in raw:
        kwargs["box_color"] = _parse_tuple(raw["box_color"], 3, int)
    if "thickness" in raw:
        kwargs["thickness"] = int(raw["thickness"])
    if "show_label" in raw:
        kwargs["show_label"] = bool(raw["show_label"])
    return VisualizationConfig(**kwargs)


# ---------------------------------------------------------------------------
# Environment variable overrides
# ---------------------------------------------------------------------------

_ENV_PREFIX = "DETECTION_BRIDGE_"


def _apply_env_overrides(raw: dict) -> dict:
    """Apply environment variable overrides to the raw config dict.

    Environment variables follow the pattern:
        DETECTION_BRIDGE_CONVERTER_FRAME_ID=base_link
        DETECTION_BRIDGE_DETECTION_CONFIDENCE_THRESHOLD=0.5
    """
    env_map = {
        f"{_ENV_PREFIX}CONVERTER_FRAME_ID": ("converter", "frame_id"),
        f"{_ENV_PREFIX}CONVERTER_IMAGE_WIDTH": ("converter", "image_width"),
        f"{_ENV_PREFIX}CONVERTER_IMAGE_HEIGHT": ("converter", "image_height"),
        f"{_ENV_PREFIX}DETECTION_CONFIDENCE_THRESHOLD": ("detection", "confidence_threshold"),
        f"{_ENV_PREFIX}DETECTION_CLASS_NAMES": ("detection", "class_names"),
        f"{_ENV_PREFIX}INPUT_SOURCE": ("input", "source"),
        f"{_ENV_PREFIX}OUTPUT_MODE": ("output", "mode"),
        f"{_ENV_PREFIX}OUTPUT_SAVE_PATH": ("output", "save_path"),
    }

    for env_var, (section, key) in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            raw.setdefault(section, {})[key] = value
            logger.debug("Config override from env: %s=%s", env_var, value)

    return raw


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------

def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load and validate application configuration.

    Precedence (highest → lowest):
        Environment variables > YAML file > Hard-coded defaults

    Args:
        config_path: Path to a YAML configuration file. If None,
                     the system runs entirely on defaults.

    Returns:
        A validated, frozen AppConfig instance.

    Raises:
        FileNotFoundError: If config_path is provided but does not exist.
        ValueError: If any configuration value is invalid.
        yaml.YAMLError: If the YAML file is malformed.
    """
    raw: dict = {}

    # --- Layer 1: YAML file ---
    if config_path is not None:
        resolved = Path(config_path)
        if not resolved.is_absolute():
            resolved = _PROJECT_ROOT / resolved

        if not resolved.is_file():
            raise FileNotFoundError(
                f"Configuration file not found: {resolved}. "
                f"Provide a valid path or omit to use defaults."
            )

        logger.info("Loading config from: %s", resolved)
        with open(resolved, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    # --- Layer 2: Environment variable overrides ---
    raw = _apply_env_overrides(raw)

    # --- Build typed configs ---
    config = AppConfig(
        converter=_build_converter_config(raw.get("converter", {})),
        detection=_build_detection_config(raw.get("detection", {})),
        input=_build_input_config(raw.get("input", {})),
        output=_build_output_config(raw.get("output", {})),
        visualization=_build_visualization_config(raw.get("visualization", {})),
    )

    # --- Validate ---
    validate(config)

    logger.debug("Configuration loaded: %s", config)
    return config
