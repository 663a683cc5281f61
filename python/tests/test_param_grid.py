"""Tests for the ParamGrid wrapper"""

import pytest

import cv_mat as cv
from cv_mat import SvmParamTypes


class TestParamGrid:
    """Test ParamGrid construction and read-only accessors"""

    def test_default(self):
        """Test default grid values"""
        grid = cv.ParamGrid()
        assert grid.min_val == 0
        assert grid.max_val == 0
        assert grid.log_step == 1

    def test_from_values(self):
        """Test grid from min, max and log step"""
        grid = cv.ParamGrid(1, 10, 2)
        assert grid.min_val == 1.0
        assert grid.max_val == 10.0
        assert grid.log_step == 2.0

    def test_svm_default_grid(self):
        """Test SVM default grid for C"""
        grid = cv.ParamGrid(SvmParamTypes.C)
        assert grid.min_val == pytest.approx(0.1)
        assert grid.max_val == pytest.approx(500)
        assert grid.log_step == pytest.approx(5)

    def test_read_only(self):
        """Test attributes cannot be assigned"""
        grid = cv.ParamGrid(1, 10, 2)
        with pytest.raises(AttributeError):
            grid.min_val = 5
        with pytest.raises(AttributeError):
            grid.other = 1

    def test_invalid_arguments(self):
        """Test bad argument counts and types raise"""
        with pytest.raises(TypeError):
            cv.ParamGrid(1, 2)
        with pytest.raises(TypeError):
            cv.ParamGrid("a", 1, 2)
        with pytest.raises(TypeError):
            cv.ParamGrid(1.5)

    def test_unknown_param_id(self):
        """Test unknown SVM param ids raise"""
        with pytest.raises(ValueError, match="unknown SVM param id"):
            cv.ParamGrid(99)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
