"""Image processing methods for Mat"""

from typing import Tuple

import cv2
import numpy as np

from .cv_types import ColorConversionCodes, InterpolationFlags

Size = Tuple[int, int]


def _check_ksize(ksize: Size, odd: bool = False) -> Tuple[int, int]:
    if len(ksize) != 2 or any(int(k) <= 0 for k in ksize):
        raise ValueError(f"expected ksize to be two positive ints, got {ksize}")
    if odd and any(int(k) % 2 == 0 for k in ksize):
        raise ValueError(f"expected odd kernel sizes, got {ksize}")
    return int(ksize[0]), int(ksize[1])


class ImgprocMixin:
    """Imgproc methods mixed into Mat; relies on _data and _wrap"""

    def threshold(self, thresh: float, maxval: float, threshold_type: int):
        _, dst = cv2.threshold(self._data, thresh, maxval, int(threshold_type))
        return self._wrap(dst)

    def cvt_color(self, code: int, dst_cn: int = 0):
        return self._wrap(cv2.cvtColor(self._data, int(code), dstCn=dst_cn))

    def bgr_to_gray(self):
        return self.cvt_color(ColorConversionCodes.COLOR_BGR2GRAY)

    def resize(self, rows: int, cols: int, interpolation: int = InterpolationFlags.INTER_LINEAR):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"expected positive target size, got {rows}x{cols}")
        # cv2 takes the target size as (width, height)
        return self._wrap(
            cv2.resize(self._data, (int(cols), int(rows)), interpolation=int(interpolation))
        )

    def rescale(self, factor: float):
        if factor <= 0:
            raise ValueError(f"expected positive scale factor, got {factor}")
        rows = max(1, int(round(self.rows * factor)))
        cols = max(1, int(round(self.cols * factor)))
        return self.resize(rows, cols)

    def blur(self, ksize: Size):
        return self._wrap(cv2.blur(self._data, _check_ksize(ksize)))

    def gaussian_blur(self, ksize: Size, sigma_x: float, sigma_y: float = 0):
        ksize = _check_ksize(ksize, odd=True)
        return self._wrap(cv2.GaussianBlur(self._data, ksize, sigma_x, sigmaY=sigma_y))

    def _morph_kernel(self, kernel) -> np.ndarray:
        # accepts another Mat or anything numpy can read
        data = getattr(kernel, "_data", None)
        if data is None:
            data = np.asarray(kernel, dtype=np.uint8)
        return data

    def erode(self, kernel, iterations: int = 1):
        return self._wrap(cv2.erode(self._data, self._morph_kernel(kernel), iterations=iterations))

    def dilate(self, kernel, iterations: int = 1):
        return self._wrap(cv2.dilate(self._data, self._morph_kernel(kernel), iterations=iterations))
