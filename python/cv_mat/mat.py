"""
Mat: a typed two-dimensional matrix backed by OpenCV.

A Mat owns a C-contiguous numpy buffer shaped (rows, cols) for a single
channel and (rows, cols, channels) otherwise. Every method hands that buffer
to cv2 or numpy and wraps the result in a new Mat; nothing is shared between
calls except a destination passed to copy_to.

Usage:
    import cv_mat as cv

    mat = cv.Mat([[0, 255], [255, 0]], cv.CV_8U)
    labels = mat.connected_components()
    as_float = mat.convert_to(cv.CV_32F)
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import cv2
import numpy as np

from . import cv_types
from .config import VALID_CONNECTIVITY, VALID_LABEL_TYPES, get_default_config
from .cv_types import CV_8U, CV_32S, CV_64F, NormTypes
from .imgproc import ImgprocMixin
from .operators import OperatorsMixin
from .options import ConvertToOptions, NormalizeOptions, NormOptions, resolve_options

logger = logging.getLogger(__name__)

_INT32_INFO = np.iinfo(np.int32)

_BASE_NORM_TYPES = {
    NormTypes.NORM_INF,
    NormTypes.NORM_L1,
    NormTypes.NORM_L2,
    NormTypes.NORM_L2SQR,
    NormTypes.NORM_HAMMING,
    NormTypes.NORM_HAMMING2,
    NormTypes.NORM_MINMAX,
}


def _as_buffer(arr: np.ndarray) -> np.ndarray:
    # cv2 may hand back (rows, cols, 1) for single channel results
    if arr.ndim == 3 and arr.shape[2] == 1:
        arr = arr[:, :, 0]
    return np.ascontiguousarray(arr)


def _buffer_shape(rows: int, cols: int, channels: int) -> tuple:
    return (rows, cols) if channels == 1 else (rows, cols, channels)


def _numeric_array(values, what: str) -> np.ndarray:
    try:
        arr = np.asarray(values)
    except ValueError as e:
        raise ValueError(f"{what} have inconsistent channel counts") from e
    if arr.dtype.kind not in "biuf":
        raise TypeError(f"expected {what} to be numeric, got {arr.dtype}")
    return arr


def _infer_depth(arr: np.ndarray) -> int:
    if arr.dtype in cv_types.DTYPE_TO_DEPTH:
        return cv_types.DTYPE_TO_DEPTH[arr.dtype]
    if arr.dtype == np.bool_:
        return CV_8U
    if arr.dtype.kind in "iu":
        if arr.size == 0 or (arr.min() >= _INT32_INFO.min and arr.max() <= _INT32_INFO.max):
            return CV_32S
    return CV_64F


def _resolve_depth(arr: np.ndarray, mat_type: Optional[int]) -> int:
    channels = arr.shape[2] if arr.ndim == 3 else 1
    if channels > cv_types.CV_CN_MAX:
        raise ValueError(f"too many channels: {channels} > {cv_types.CV_CN_MAX}")
    if mat_type is None:
        return _infer_depth(arr)
    mat_type = cv_types.validate_type(mat_type)
    expected = cv_types.channels_of(mat_type)
    if expected != channels:
        raise ValueError(f"type expects {expected} channels per element, got {channels}")
    return cv_types.depth_of(mat_type)


def _empty_buffer(mat_type: Optional[int] = None) -> np.ndarray:
    if mat_type is None:
        return np.empty((0, 0), dtype=np.uint8)
    mat_type = cv_types.validate_type(mat_type)
    shape = _buffer_shape(0, 0, cv_types.channels_of(mat_type))
    return np.empty(shape, dtype=cv_types.dtype_of(mat_type))


def _filled_buffer(rows, cols, mat_type, fill=None) -> np.ndarray:
    for name, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 0:
            raise TypeError(f"expected {name} to be a non-negative integer, got {value!r}")
    mat_type = cv_types.validate_type(mat_type)
    depth = cv_types.depth_of(mat_type)
    channels = cv_types.channels_of(mat_type)
    shape = _buffer_shape(int(rows), int(cols), channels)
    dtype = cv_types.DEPTH_TO_DTYPE[depth]

    if fill is None:
        return np.zeros(shape, dtype=dtype)

    fill_values = _numeric_array(fill, "fill values")
    if fill_values.ndim > 1:
        raise ValueError("fill vector must be flat")
    if fill_values.ndim == 1 and fill_values.shape[0] != channels:
        raise ValueError(
            f"fill vector has {fill_values.shape[0]} values, expected {channels}"
        )
    buf = np.empty(shape, dtype=dtype)
    buf[...] = cv_types.saturate_cast(fill_values, depth)
    return buf


def _values_buffer(values: Sequence, mat_type: Optional[int] = None) -> np.ndarray:
    if len(values) == 0:
        return _empty_buffer(mat_type)

    for i, row in enumerate(values):
        if not isinstance(row, (list, tuple, np.ndarray)):
            raise TypeError(f"expected row {i} to be a list of values")
    cols = len(values[0])
    for i, row in enumerate(values):
        if len(row) != cols:
            raise ValueError(f"row {i} has {len(row)} columns, expected {cols}")

    arr = _numeric_array(values, "values")
    if arr.ndim not in (2, 3):
        raise ValueError("expected values to be numbers or per-channel sequences")
    depth = _resolve_depth(arr, mat_type)
    return _as_buffer(cv_types.saturate_cast(arr, depth))


def _numpy_buffer(arr: np.ndarray, mat_type: Optional[int] = None) -> np.ndarray:
    if arr.ndim not in (2, 3):
        raise ValueError(f"expected a 2-D or 3-D array, got shape {arr.shape}")
    if arr.dtype.kind not in "biuf":
        raise TypeError(f"unsupported element dtype {arr.dtype}")
    depth = _resolve_depth(arr, mat_type)
    return _as_buffer(np.array(cv_types.saturate_cast(arr, depth)))


@dataclass(frozen=True)
class ConnectedComponentsResult:
    """Labels, per-label stats and centroids of a connected components run"""

    labels: "Mat"
    stats: "Mat"
    centroids: "Mat"
    num_labels: int


class Mat(OperatorsMixin, ImgprocMixin):
    """
    Typed matrix wrapper.

    Constructor forms:
        Mat()                           empty matrix
        Mat(rows, cols, type)           zero-initialized
        Mat(rows, cols, type, fill)     fill value or one value per channel
        Mat(values[, type])             nested lists, row major
        Mat(ndarray[, type])            copy of a numpy array
        Mat([mat, mat, ...])            channels merged into one matrix
    """

    def __init__(self, *args):
        self._data = self._buffer_from_args(args)

    @staticmethod
    def _buffer_from_args(args: tuple) -> np.ndarray:
        if not args:
            return _empty_buffer()

        first = args[0]
        if isinstance(first, np.ndarray):
            if len(args) > 2:
                raise TypeError("Mat(ndarray[, type]) takes at most 2 arguments")
            return _numpy_buffer(*args)
        if isinstance(first, (list, tuple)):
            if any(isinstance(item, Mat) for item in first):
                if len(args) != 1:
                    raise TypeError("Mat(channels) takes exactly 1 argument")
                return _channels_buffer(first)
            if len(args) > 2:
                raise TypeError("Mat(values[, type]) takes at most 2 arguments")
            return _values_buffer(*args)
        if len(args) in (3, 4):
            return _filled_buffer(*args)

        arg_types = ", ".join(type(arg).__name__ for arg in args)
        raise TypeError(f"no Mat constructor accepts ({arg_types})")

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> "Mat":
        mat = cls.__new__(cls)
        mat._data = _as_buffer(arr)
        return mat

    @classmethod
    def from_values(cls, values: Sequence, mat_type: Optional[int] = None) -> "Mat":
        return cls._wrap(_values_buffer(values, mat_type))

    @classmethod
    def from_numpy(cls, arr: np.ndarray, mat_type: Optional[int] = None) -> "Mat":
        return cls._wrap(_numpy_buffer(arr, mat_type))

    @classmethod
    def from_channels(cls, channels: Sequence["Mat"]) -> "Mat":
        return cls._wrap(_channels_buffer(channels))

    @classmethod
    def filled(cls, rows: int, cols: int, mat_type: int, fill=None) -> "Mat":
        return cls._wrap(_filled_buffer(rows, cols, mat_type, fill))

    # Accessors

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def channels(self) -> int:
        return self._data.shape[2] if self._data.ndim == 3 else 1

    @property
    def depth(self) -> int:
        return cv_types.DTYPE_TO_DEPTH[self._data.dtype]

    @property
    def type(self) -> int:
        return cv_types.make_type(self.depth, self.channels)

    @property
    def dims(self) -> int:
        return 2

    @property
    def empty(self) -> bool:
        return self._data.size == 0

    @property
    def sizes(self) -> List[int]:
        return [self.rows, self.cols]

    @property
    def elem_size(self) -> int:
        """Bytes per element, all channels included"""
        return self._data.itemsize * self.channels

    def _check_index(self, row: int, col: int):
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"index ({row}, {col}) out of bounds for {self.rows}x{self.cols} mat"
            )

    def at(self, row: int, col: int):
        """Element at (row, col): a scalar for one channel, a list otherwise"""
        self._check_index(row, col)
        value = self._data[row, col]
        if self.channels == 1:
            return value.item()
        return value.tolist()

    def set(self, row: int, col: int, value):
        self._check_index(row, col)
        values = _numeric_array(value, "element values")
        if values.ndim > 1 or (values.ndim == 1 and values.shape[0] != self.channels):
            raise ValueError(f"expected {self.channels} values for element ({row}, {col})")
        self._data[row, col] = cv_types.saturate_cast(values, self.depth)

    def get_data_as_array(self) -> list:
        return self._data.tolist()

    def get_data(self) -> bytes:
        return self._data.tobytes()

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def __repr__(self):
        return f"Mat(rows={self.rows}, cols={self.cols}, type={self.type}, channels={self.channels})"

    # Argument checks shared with the operator and imgproc mixins

    def _check_compatible(self, other, name: str):
        if not isinstance(other, Mat):
            raise TypeError(f"expected {name} to be an instance of Mat")
        if other.rows != self.rows or other.cols != self.cols:
            raise ValueError(f"{name} size mismatch")
        if other.type != self.type:
            raise ValueError(f"{name} type mismatch")

    def _mask_selector(self, mask) -> np.ndarray:
        if not isinstance(mask, Mat):
            raise TypeError("expected mask to be an instance of Mat")
        if mask.rows != self.rows or mask.cols != self.cols:
            raise ValueError("mask size mismatch")
        if mask.channels not in (1, self.channels):
            raise ValueError(
                f"mask must have 1 or {self.channels} channels, got {mask.channels}"
            )
        selector = mask._data != 0
        if mask.channels == 1 and self.channels > 1:
            selector = selector[:, :, np.newaxis]
        return selector

    def _native_mask(self, mask) -> Optional[np.ndarray]:
        """Mask as the 8-bit single channel array cv2 expects"""
        if mask is None:
            return None
        selector = self._mask_selector(mask)
        if mask.channels != 1:
            raise ValueError("mask must have a single channel")
        return selector.reshape(self.rows, self.cols).astype(np.uint8)

    # Copy

    def copy(self, mask: Optional["Mat"] = None) -> "Mat":
        """
        Duplicate the matrix.

        With a mask, only elements where the mask is non-zero are copied;
        all other elements of the result are zero.
        """
        if mask is None:
            return self._wrap(self._data.copy())
        dst = np.zeros_like(self._data)
        np.copyto(dst, self._data, where=self._mask_selector(mask))
        return self._wrap(dst)

    def copy_to(self, dst: Optional["Mat"] = None, mask: Optional["Mat"] = None) -> "Mat":
        """
        Copy into dst and return it.

        dst is reallocated (zeroed) when its size or type differs from this
        matrix; otherwise its buffer is written in place.
        """
        if not isinstance(dst, Mat):
            raise TypeError("expected arg: destination mat")
        selector = None if mask is None else self._mask_selector(mask)
        if dst._data.shape != self._data.shape or dst._data.dtype != self._data.dtype:
            dst._data = np.zeros_like(self._data)
        if selector is None:
            np.copyto(dst._data, self._data)
        else:
            np.copyto(dst._data, self._data, where=selector)
        return dst

    # Conversion

    def convert_to(self, options=None, **kwargs) -> "Mat":
        """
        Convert to another depth, computing saturate(value * alpha + beta).

        Accepts a type code, a ConvertToOptions, a dict, or keyword options
        (type, alpha, beta). The channel count is kept.
        """
        if isinstance(options, (int, np.integer)) and not isinstance(options, bool):
            options = ConvertToOptions(type=int(options))
        opts = resolve_options(ConvertToOptions, options, kwargs)
        rtype = cv_types.validate_type(opts.type, "type")

        src = self._data
        if opts.alpha != 1 or opts.beta != 0:
            with np.errstate(over="ignore", invalid="ignore"):
                src = src.astype(np.float64) * opts.alpha + opts.beta
        return self._wrap(np.array(cv_types.saturate_cast(src, cv_types.depth_of(rtype))))

    # Norms

    def _norm_type(self, norm_type: Optional[int], allow_relative: bool = False) -> int:
        """Validate a norm type, optionally OR-ed with NORM_RELATIVE"""
        if norm_type is None:
            return int(get_default_config().norm_type)
        if isinstance(norm_type, bool) or not isinstance(norm_type, (int, np.integer)):
            raise TypeError(f"expected norm_type to be an int, got {norm_type!r}")
        norm_type = int(norm_type)
        relative = norm_type & NormTypes.NORM_RELATIVE
        if (norm_type & ~NormTypes.NORM_RELATIVE) not in _BASE_NORM_TYPES:
            raise ValueError(f"unknown norm type {norm_type}")
        if relative and not allow_relative:
            raise ValueError("NORM_RELATIVE requires src2")
        return norm_type

    def norm(self, options=None, **kwargs) -> float:
        """
        Norm of all elements, or of the difference to src2 when given.

        Accepts another Mat (as src2), a NormOptions, a dict, or keyword
        options (src2, norm_type, mask).
        """
        if isinstance(options, Mat):
            options = NormOptions(src2=options)
        opts = resolve_options(NormOptions, options, kwargs)
        norm_type = self._norm_type(opts.norm_type, allow_relative=opts.src2 is not None)
        mask = self._native_mask(opts.mask)

        if opts.src2 is None:
            if self.empty:
                return 0.0
            return float(cv2.norm(self._data, normType=norm_type, mask=mask))
        self._check_compatible(opts.src2, "src2")
        if self.empty:
            return 0.0
        return float(cv2.norm(self._data, opts.src2._data, normType=norm_type, mask=mask))

    def normalize(self, options=None, **kwargs) -> "Mat":
        """
        Rescale values into [alpha, beta] (NORM_MINMAX), or scale so that the
        chosen norm equals alpha.

        Accepts a NormalizeOptions, a dict, or keyword options (alpha, beta,
        norm_type, dtype, mask). dtype -1 keeps the source type.
        """
        opts = resolve_options(NormalizeOptions, options, kwargs)
        config = get_default_config()
        alpha = config.normalize_alpha if opts.alpha is None else float(opts.alpha)
        beta = config.normalize_beta if opts.beta is None else float(opts.beta)
        norm_type = self._norm_type(opts.norm_type)
        dtype = opts.dtype
        if dtype != -1:
            dtype = cv_types.depth_of(cv_types.validate_type(dtype, "dtype"))
        mask = self._native_mask(opts.mask)

        if self.empty:
            # cv2.normalize returns None for empty input
            out_dtype = self._data.dtype if dtype == -1 else cv_types.DEPTH_TO_DTYPE[dtype]
            return self._wrap(np.empty(self._data.shape, dtype=out_dtype))
        dst = cv2.normalize(self._data, None, alpha, beta, norm_type, dtype, mask)
        return self._wrap(dst)

    def split_channels(self) -> List["Mat"]:
        if self.empty:
            plane = np.empty((self.rows, self.cols), dtype=self._data.dtype)
            return [self._wrap(plane.copy()) for _ in range(self.channels)]
        return [self._wrap(channel) for channel in cv2.split(self._data)]

    # Connected components

    def _labeling_input(self, connectivity: Optional[int], ltype: Optional[int]):
        if self.channels != 1:
            raise ValueError("connected components require a single-channel mat")
        config = get_default_config()
        connectivity = config.connectivity if connectivity is None else connectivity
        ltype = config.labels_type if ltype is None else ltype
        if connectivity not in VALID_CONNECTIVITY:
            raise ValueError(f"connectivity must be 4 or 8, got {connectivity}")
        if ltype not in VALID_LABEL_TYPES:
            raise ValueError(f"ltype must be CV_32S or CV_16U, got {ltype}")

        image = self._data
        if self.depth != CV_8U:
            image = (image != 0).astype(np.uint8)
        return image, int(connectivity), int(ltype)

    def _empty_labels(self, ltype: int) -> np.ndarray:
        # cv2 labeling crashes on empty input
        return np.zeros((self.rows, self.cols), dtype=cv_types.DEPTH_TO_DTYPE[ltype])

    def connected_components(
        self, connectivity: Optional[int] = None, ltype: Optional[int] = None
    ) -> "Mat":
        """Label matrix: 0 for background, 1..N for each foreground region"""
        image, connectivity, ltype = self._labeling_input(connectivity, ltype)
        if image.size == 0:
            return self._wrap(self._empty_labels(ltype))
        num_labels, labels = cv2.connectedComponents(
            image, connectivity=connectivity, ltype=ltype
        )
        logger.debug("labeled %d components (connectivity=%d)", num_labels - 1, connectivity)
        return self._wrap(labels)

    def connected_components_with_stats(
        self, connectivity: Optional[int] = None, ltype: Optional[int] = None
    ) -> ConnectedComponentsResult:
        """
        Label matrix plus, per label, the bounding box and area (stats,
        indexed by ConnectedComponentsTypes) and the centroid (x, y).
        """
        image, connectivity, ltype = self._labeling_input(connectivity, ltype)
        if image.size == 0:
            # background label only
            return ConnectedComponentsResult(
                labels=self._wrap(self._empty_labels(ltype)),
                stats=self._wrap(np.zeros((1, 5), dtype=np.int32)),
                centroids=self._wrap(np.zeros((1, 2), dtype=np.float64)),
                num_labels=1,
            )
        num_labels, labels, stats, centroids = cv2.connectedComponentsWithStats(
            image, connectivity=connectivity, ltype=ltype
        )
        logger.debug("labeled %d components with stats (connectivity=%d)", num_labels - 1, connectivity)
        return ConnectedComponentsResult(
            labels=self._wrap(labels),
            stats=self._wrap(stats.astype(np.int32, copy=False)),
            centroids=self._wrap(centroids.astype(np.float64, copy=False)),
            num_labels=int(num_labels),
        )


def _channels_buffer(channels: Sequence[Mat]) -> np.ndarray:
    if len(channels) == 0:
        raise ValueError("expected at least one channel")
    for i, channel in enumerate(channels):
        if not isinstance(channel, Mat):
            raise TypeError(f"expected channel {i} to be an instance of Mat")

    first = channels[0]
    for channel in channels[1:]:
        if channel.rows != first.rows:
            raise ValueError("rows mismatch")
        if channel.cols != first.cols:
            raise ValueError("cols mismatch")
        if channel.depth != first.depth:
            raise ValueError("depth mismatch")

    total = sum(channel.channels for channel in channels)
    if total > cv_types.CV_CN_MAX:
        raise ValueError(f"too many channels: {total} > {cv_types.CV_CN_MAX}")
    if first.empty:
        return np.empty(_buffer_shape(first.rows, first.cols, total), dtype=first._data.dtype)
    logger.debug("merging %d mats into %d channels", len(channels), total)
    return _as_buffer(cv2.merge([channel._data for channel in channels]))
