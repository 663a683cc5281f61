"""Read-only wrapper over cv2.ml ParamGrid"""

import logging
from numbers import Real

import cv2

from ..cv_types import SvmParamTypes

logger = logging.getLogger(__name__)


class ParamGrid:
    """
    Search grid for a statistical model parameter.

    ParamGrid()                          min 0, max 0, log step 1
    ParamGrid(min_val, max_val, log_step)
    ParamGrid(param_id)                  SVM default grid for a SvmParamTypes id
    """

    __slots__ = ("_grid",)

    def __init__(self, *args):
        if len(args) == 0:
            grid = cv2.ml.ParamGrid_create()
        elif len(args) == 1:
            grid = self._default_svm_grid(args[0])
        elif len(args) == 3:
            for name, value in zip(("min_val", "max_val", "log_step"), args):
                if isinstance(value, bool) or not isinstance(value, Real):
                    raise TypeError(f"expected {name} to be a number, got {value!r}")
            grid = cv2.ml.ParamGrid_create(*(float(value) for value in args))
        else:
            raise TypeError(f"ParamGrid takes 0, 1 or 3 arguments, got {len(args)}")
        object.__setattr__(self, "_grid", grid)

    @staticmethod
    def _default_svm_grid(param_id):
        if isinstance(param_id, bool) or not isinstance(param_id, int):
            raise TypeError(f"expected param_id to be an int, got {param_id!r}")
        if param_id not in set(SvmParamTypes):
            raise ValueError(f"unknown SVM param id {param_id}")
        logger.debug("using SVM default grid for %s", SvmParamTypes(param_id).name)
        return cv2.ml.SVM_getDefaultGridPtr(int(param_id))

    @property
    def min_val(self) -> float:
        return float(self._grid.minVal)

    @property
    def max_val(self) -> float:
        return float(self._grid.maxVal)

    @property
    def log_step(self) -> float:
        return float(self._grid.logStep)

    def __setattr__(self, name, value):
        raise AttributeError(f"ParamGrid is read-only, cannot set {name!r}")

    def __repr__(self):
        return f"ParamGrid(min_val={self.min_val}, max_val={self.max_val}, log_step={self.log_step})"
