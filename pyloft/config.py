# Copyright (c) 2026 Kutay Demir.
# Licensed under the PolyForm Shield License 1.0.0. See LICENSE file for details.

"""
Centralized configuration management for pyloft.

This module contains the configurable constants used by the geometry
pipeline and the graph evaluator. Modify these values to tune tessellation
and evaluation behavior without changing core logic.
"""

import logging
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

# Default logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
DEFAULT_LOG_LEVEL = logging.INFO

# Log format string
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Enable file logging (set path to enable, None to disable)
LOG_FILE_PATH: Optional[str] = None


# ============================================================================
# GEOMETRY SETTINGS
# ============================================================================

@dataclass
class GeometryConfig:
    """Configuration for the procedural geometry pipeline."""

    # Tessellation
    DEFAULT_CIRCLE_SEGMENTS: int = 32
    SPINE_RING_SEGMENTS: int = 16
    SHELL_CYLINDER_SEGMENTS: int = 96

    # Spine rings never shrink below this radius
    MIN_SPINE_RADIUS: float = 0.1

    # Shell inner wall never shrinks below this radius
    MIN_SHELL_INNER_RADIUS: float = 0.1

    # Tip closing: last section area below this counts as collapsed
    TIP_AREA_THRESHOLD: float = 1e-3

    # Default hole sizing (fraction of outer boundary around its centroid)
    HOLE_SCALE_BASE: float = 0.40  # at t = 0
    HOLE_SCALE_TIP: float = 0.25   # at t = 1
    HOLE_SCALE_MIN: float = 0.2
    HOLE_SCALE_MAX: float = 0.6
    DEFAULT_HOLE_SCALE: float = 0.35

    # Star inner radius relative to the outer radius
    STAR_INNER_RATIO: float = 0.5

    # Numerical precision
    ZERO_THRESHOLD: float = 1e-12


# ============================================================================
# EVALUATION SETTINGS
# ============================================================================

@dataclass
class EvaluationConfig:
    """Configuration for graph editing and evaluation."""

    # Refuse a second connection into an input port that is already connected
    REJECT_DUPLICATE_CONNECTIONS: bool = True

    # Mirror every diagnostic into the log
    LOG_DIAGNOSTICS: bool = True

    # Graph document format version written by project_io
    DOCUMENT_VERSION: str = "1.0"


# ============================================================================
# SINGLETON INSTANCES
# ============================================================================

# Global configuration instances (modify these to change behavior)
geometry_config = GeometryConfig()
evaluation_config = EvaluationConfig()


# ============================================================================
# LOGGING SETUP FUNCTION
# ============================================================================

def setup_logging(level: int = DEFAULT_LOG_LEVEL,
                  log_file: Optional[str] = LOG_FILE_PATH) -> None:
    """
    Configure logging for the entire application.

    Args:
        level: Logging level (logging.DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
    """
    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True  # Override any existing configuration
    )

    # meshio is chatty about optional format plugins
    logging.getLogger('meshio').setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"pyloft logging initialized at level: {logging.getLevelName(level)}")
