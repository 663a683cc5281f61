"""Option structs for Mat methods that take named options"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ConvertToOptions:
    type: Optional[int] = None
    alpha: float = 1.0
    beta: float = 0.0


@dataclass
class NormOptions:
    src2: Optional[Any] = None
    norm_type: Optional[int] = None
    mask: Optional[Any] = None


@dataclass
class NormalizeOptions:
    alpha: Optional[float] = None
    beta: Optional[float] = None
    norm_type: Optional[int] = None
    dtype: int = -1
    mask: Optional[Any] = None


def resolve_options(options_cls, options=None, overrides=None):
    """
    Build an options_cls instance from an instance, a dict, or nothing,
    with keyword overrides applied on top.

    Unknown option names raise TypeError.
    """
    overrides = overrides or {}
    if options is None:
        return options_cls(**overrides)
    if isinstance(options, options_cls):
        return dataclasses.replace(options, **overrides)
    if isinstance(options, dict):
        return options_cls(**{**options, **overrides})
    raise TypeError(
        f"expected {options_cls.__name__} or dict, got {type(options).__name__}"
    )
