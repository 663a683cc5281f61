"""
Process-wide defaults for Mat operations.

Operations read the current configuration at call time, so a change made
with set_default_config applies to every Mat afterwards.

Usage:
    from cv_mat.config import set_default_config

    set_default_config(connectivity=4, debug=True)
"""

import logging
from dataclasses import dataclass

from .cv_types import CV_16U, CV_32S, NormTypes

logger = logging.getLogger(__name__)

VALID_CONNECTIVITY = (4, 8)
VALID_LABEL_TYPES = (CV_32S, CV_16U)


@dataclass(frozen=True)
class MatConfig:
    """Defaults used when an operation is called without the matching option"""

    connectivity: int = 8
    labels_type: int = CV_32S
    norm_type: int = NormTypes.NORM_L2
    normalize_alpha: float = 1.0
    normalize_beta: float = 0.0
    debug: bool = False


_config = MatConfig()


def get_default_config() -> MatConfig:
    return _config


def set_default_config(
    connectivity: int = 8,
    labels_type: int = CV_32S,
    norm_type: int = NormTypes.NORM_L2,
    normalize_alpha: float = 1.0,
    normalize_beta: float = 0.0,
    debug: bool = False,
) -> MatConfig:
    """Set default configuration for all Mat operations"""
    global _config
    if connectivity not in VALID_CONNECTIVITY:
        raise ValueError(f"connectivity must be 4 or 8, got {connectivity}")
    if labels_type not in VALID_LABEL_TYPES:
        raise ValueError(f"labels_type must be CV_32S or CV_16U, got {labels_type}")
    if norm_type not in set(NormTypes):
        raise ValueError(f"unknown norm type {norm_type}")

    _config = MatConfig(
        connectivity=connectivity,
        labels_type=labels_type,
        norm_type=NormTypes(norm_type),
        normalize_alpha=float(normalize_alpha),
        normalize_beta=float(normalize_beta),
        debug=debug,
    )
    logging.getLogger("cv_mat").setLevel(logging.DEBUG if debug else logging.NOTSET)
    logger.debug("default config set to %s", _config)
    return _config


def reset_default_config() -> MatConfig:
    """Restore the built-in defaults"""
    return set_default_config()
