"""
Arithmetic, bitwise and reduction operators for Mat.

Binary operators require both operands to have the same size and type.
Integer results saturate the way OpenCV does.
"""

from numbers import Real
from typing import List

import cv2
import numpy as np

from . import cv_types


class OperatorsMixin:
    """Operator methods mixed into Mat; relies on _data, _wrap and _check_compatible"""

    def _check_scalar(self, value, name: str):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise TypeError(f"expected {name} to be a number")

    def _check_float_depth(self, op: str):
        if self.depth not in cv_types.FLOAT_DEPTHS:
            raise ValueError(f"{op} requires a CV_32F or CV_64F mat")

    def _check_single_channel(self, op: str):
        if self.channels != 1:
            raise ValueError(f"{op} requires a single-channel mat")

    def _scaled(self, factor: float):
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            scaled = self._data.astype(np.float64) * factor
        return self._wrap(cv_types.saturate_cast(scaled, self.depth))

    def add(self, other):
        self._check_compatible(other, "other")
        return self._wrap(cv2.add(self._data, other._data))

    def sub(self, other):
        self._check_compatible(other, "other")
        return self._wrap(cv2.subtract(self._data, other._data))

    def mul(self, scalar):
        self._check_scalar(scalar, "scalar")
        return self._scaled(float(scalar))

    def div(self, scalar):
        self._check_scalar(scalar, "scalar")
        if scalar == 0:
            raise ZeroDivisionError("division of mat by zero")
        return self._scaled(1.0 / float(scalar))

    def h_mul(self, other):
        """Element-wise product"""
        self._check_compatible(other, "other")
        return self._wrap(cv2.multiply(self._data, other._data))

    def h_div(self, other):
        """Element-wise quotient; integer division by zero yields 0"""
        self._check_compatible(other, "other")
        return self._wrap(cv2.divide(self._data, other._data))

    def abs_diff(self, other):
        self._check_compatible(other, "other")
        return self._wrap(cv2.absdiff(self._data, other._data))

    def bitwise_and(self, other):
        self._check_compatible(other, "other")
        return self._wrap(cv2.bitwise_and(self._data, other._data))

    def bitwise_or(self, other):
        self._check_compatible(other, "other")
        return self._wrap(cv2.bitwise_or(self._data, other._data))

    def bitwise_xor(self, other):
        self._check_compatible(other, "other")
        return self._wrap(cv2.bitwise_xor(self._data, other._data))

    def bitwise_not(self):
        return self._wrap(cv2.bitwise_not(self._data))

    def transpose(self):
        # cv2.transpose only handles up to 4 channels
        return self._wrap(np.swapaxes(self._data, 0, 1).copy())

    def exp(self):
        self._check_float_depth("exp")
        return self._wrap(cv2.exp(self._data))

    def log(self):
        self._check_float_depth("log")
        return self._wrap(cv2.log(self._data))

    def sqrt(self):
        self._check_float_depth("sqrt")
        return self._wrap(cv2.sqrt(self._data))

    def dot(self, other) -> float:
        """Sum of element-wise products over all channels"""
        self._check_compatible(other, "other")
        return float(np.vdot(self._data.astype(np.float64), other._data.astype(np.float64)))

    def count_non_zero(self) -> int:
        self._check_single_channel("count_non_zero")
        return int(cv2.countNonZero(self._data))

    def mean(self) -> List[float]:
        """Per-channel mean"""
        return np.atleast_1d(self._data.mean(axis=(0, 1), dtype=np.float64)).tolist()

    def min_max_loc(self) -> dict:
        """
        Extremes of a single-channel mat.

        Locations are (x, y) tuples, i.e. (col, row).
        """
        self._check_single_channel("min_max_loc")
        min_val, max_val, min_loc, max_loc = cv2.minMaxLoc(self._data)
        return {
            "min_val": float(min_val),
            "max_val": float(max_val),
            "min_loc": tuple(min_loc),
            "max_loc": tuple(max_loc),
        }

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __rmul__ = mul
    __truediv__ = div
    __and__ = bitwise_and
    __or__ = bitwise_or
    __xor__ = bitwise_xor
    __invert__ = bitwise_not
