"""
Element type codes and enum namespaces for cv-mat.

A Mat element type packs a depth and a channel count into one integer,
the same way OpenCV does:

    type = depth + ((channels - 1) << CV_CN_SHIFT)

Depth codes map one-to-one onto numpy dtypes, which is how buffers are
stored on the Python side.
"""

import re
from enum import IntEnum
from typing import NamedTuple

import cv2
import numpy as np

CV_CN_MAX = 512
CV_CN_SHIFT = 3
CV_DEPTH_MAX = 1 << CV_CN_SHIFT

CV_8U = cv2.CV_8U
CV_8S = cv2.CV_8S
CV_16U = cv2.CV_16U
CV_16S = cv2.CV_16S
CV_32S = cv2.CV_32S
CV_32F = cv2.CV_32F
CV_64F = cv2.CV_64F


def make_type(depth: int, channels: int = 1) -> int:
    """Pack a depth code and channel count into a type code"""
    return (depth & (CV_DEPTH_MAX - 1)) + ((channels - 1) << CV_CN_SHIFT)


def depth_of(mat_type: int) -> int:
    return mat_type & (CV_DEPTH_MAX - 1)


def channels_of(mat_type: int) -> int:
    return (mat_type >> CV_CN_SHIFT) + 1


CV_8UC1 = make_type(CV_8U, 1)
CV_8UC2 = make_type(CV_8U, 2)
CV_8UC3 = make_type(CV_8U, 3)
CV_8UC4 = make_type(CV_8U, 4)
CV_8SC1 = make_type(CV_8S, 1)
CV_8SC2 = make_type(CV_8S, 2)
CV_8SC3 = make_type(CV_8S, 3)
CV_8SC4 = make_type(CV_8S, 4)
CV_16UC1 = make_type(CV_16U, 1)
CV_16UC2 = make_type(CV_16U, 2)
CV_16UC3 = make_type(CV_16U, 3)
CV_16UC4 = make_type(CV_16U, 4)
CV_16SC1 = make_type(CV_16S, 1)
CV_16SC2 = make_type(CV_16S, 2)
CV_16SC3 = make_type(CV_16S, 3)
CV_16SC4 = make_type(CV_16S, 4)
CV_32SC1 = make_type(CV_32S, 1)
CV_32SC2 = make_type(CV_32S, 2)
CV_32SC3 = make_type(CV_32S, 3)
CV_32SC4 = make_type(CV_32S, 4)
CV_32FC1 = make_type(CV_32F, 1)
CV_32FC2 = make_type(CV_32F, 2)
CV_32FC3 = make_type(CV_32F, 3)
CV_32FC4 = make_type(CV_32F, 4)
CV_64FC1 = make_type(CV_64F, 1)
CV_64FC2 = make_type(CV_64F, 2)
CV_64FC3 = make_type(CV_64F, 3)
CV_64FC4 = make_type(CV_64F, 4)

DEPTH_TO_DTYPE = {
    CV_8U: np.dtype(np.uint8),
    CV_8S: np.dtype(np.int8),
    CV_16U: np.dtype(np.uint16),
    CV_16S: np.dtype(np.int16),
    CV_32S: np.dtype(np.int32),
    CV_32F: np.dtype(np.float32),
    CV_64F: np.dtype(np.float64),
}
DTYPE_TO_DEPTH = {dtype: depth for depth, dtype in DEPTH_TO_DTYPE.items()}

FLOAT_DEPTHS = (CV_32F, CV_64F)


class NormTypes(IntEnum):
    NORM_INF = cv2.NORM_INF
    NORM_L1 = cv2.NORM_L1
    NORM_L2 = cv2.NORM_L2
    NORM_L2SQR = cv2.NORM_L2SQR
    NORM_HAMMING = cv2.NORM_HAMMING
    NORM_HAMMING2 = cv2.NORM_HAMMING2
    NORM_RELATIVE = cv2.NORM_RELATIVE
    NORM_MINMAX = cv2.NORM_MINMAX


class ConnectedComponentsTypes(IntEnum):
    """Column indices of the stats matrix"""

    CC_STAT_LEFT = cv2.CC_STAT_LEFT
    CC_STAT_TOP = cv2.CC_STAT_TOP
    CC_STAT_WIDTH = cv2.CC_STAT_WIDTH
    CC_STAT_HEIGHT = cv2.CC_STAT_HEIGHT
    CC_STAT_AREA = cv2.CC_STAT_AREA


class ThresholdTypes(IntEnum):
    THRESH_BINARY = cv2.THRESH_BINARY
    THRESH_BINARY_INV = cv2.THRESH_BINARY_INV
    THRESH_TRUNC = cv2.THRESH_TRUNC
    THRESH_TOZERO = cv2.THRESH_TOZERO
    THRESH_TOZERO_INV = cv2.THRESH_TOZERO_INV
    THRESH_OTSU = cv2.THRESH_OTSU


class InterpolationFlags(IntEnum):
    INTER_NEAREST = cv2.INTER_NEAREST
    INTER_LINEAR = cv2.INTER_LINEAR
    INTER_CUBIC = cv2.INTER_CUBIC
    INTER_AREA = cv2.INTER_AREA
    INTER_LANCZOS4 = cv2.INTER_LANCZOS4


class ColorConversionCodes(IntEnum):
    COLOR_BGR2GRAY = cv2.COLOR_BGR2GRAY
    COLOR_GRAY2BGR = cv2.COLOR_GRAY2BGR
    COLOR_BGR2RGB = cv2.COLOR_BGR2RGB
    COLOR_BGR2HSV = cv2.COLOR_BGR2HSV
    COLOR_HSV2BGR = cv2.COLOR_HSV2BGR


class SvmParamTypes(IntEnum):
    """Parameter ids accepted by ParamGrid for SVM default grids"""

    C = cv2.ml.SVM_C
    GAMMA = cv2.ml.SVM_GAMMA
    P = cv2.ml.SVM_P
    NU = cv2.ml.SVM_NU
    COEF = cv2.ml.SVM_COEF
    DEGREE = cv2.ml.SVM_DEGREE


class OpenCVVersion(NamedTuple):
    major: int
    minor: int
    revision: int

    @classmethod
    def parse(cls, text: str) -> "OpenCVVersion":
        parts = [int(m) for m in re.findall(r"\d+", text)[:3]]
        parts += [0] * (3 - len(parts))
        return cls(*parts)


version = OpenCVVersion.parse(cv2.__version__)


def is_valid_type(mat_type) -> bool:
    if isinstance(mat_type, bool) or not isinstance(mat_type, (int, np.integer)):
        return False
    if mat_type < 0:
        return False
    return depth_of(int(mat_type)) in DEPTH_TO_DTYPE and channels_of(int(mat_type)) <= CV_CN_MAX


def validate_type(mat_type, name: str = "type") -> int:
    """Return mat_type as int, raising TypeError when it is not a type code"""
    if not is_valid_type(mat_type):
        raise TypeError(f"Invalid type for {name}")
    return int(mat_type)


def dtype_of(mat_type: int) -> np.dtype:
    return DEPTH_TO_DTYPE[depth_of(mat_type)]


def saturate_cast(values, depth: int) -> np.ndarray:
    """
    Convert values to the dtype of depth the way OpenCV's saturate_cast does.

    Integer targets are rounded to nearest and clipped to the dtype range;
    float targets are a plain cast.
    """
    dtype = DEPTH_TO_DTYPE[depth]
    arr = np.asarray(values)
    if arr.dtype == dtype:
        return arr
    if np.issubdtype(dtype, np.integer):
        info = np.iinfo(dtype)
        if np.issubdtype(arr.dtype, np.integer) or arr.dtype == np.bool_:
            return np.clip(arr.astype(np.int64), info.min, info.max).astype(dtype)
        with np.errstate(invalid="ignore"):
            return np.clip(np.rint(arr.astype(np.float64)), info.min, info.max).astype(dtype)
    with np.errstate(over="ignore"):
        return arr.astype(dtype)


__all__ = [
    "CV_CN_MAX", "CV_8U", "CV_8S", "CV_16U", "CV_16S", "CV_32S", "CV_32F", "CV_64F",
    "CV_8UC1", "CV_8UC2", "CV_8UC3", "CV_8UC4",
    "CV_8SC1", "CV_8SC2", "CV_8SC3", "CV_8SC4",
    "CV_16UC1", "CV_16UC2", "CV_16UC3", "CV_16UC4",
    "CV_16SC1", "CV_16SC2", "CV_16SC3", "CV_16SC4",
    "CV_32SC1", "CV_32SC2", "CV_32SC3", "CV_32SC4",
    "CV_32FC1", "CV_32FC2", "CV_32FC3", "CV_32FC4",
    "CV_64FC1", "CV_64FC2", "CV_64FC3", "CV_64FC4",
    "make_type", "depth_of", "channels_of",
    "NormTypes", "ConnectedComponentsTypes", "ThresholdTypes", "InterpolationFlags",
    "ColorConversionCodes", "SvmParamTypes", "OpenCVVersion", "version",
]
