"""Tests for default configuration, options and type helpers"""

import logging

import cv2
import pytest

import cv_mat as cv
from cv_mat import NormTypes, cv_types
from cv_mat.options import NormOptions, resolve_options


class TestConfig:
    """Test process-wide defaults"""

    def test_defaults(self, default_config):
        """Test built-in defaults"""
        assert default_config.connectivity == 8
        assert default_config.labels_type == cv.CV_32S
        assert default_config.norm_type == NormTypes.NORM_L2

    def test_default_connectivity(self):
        """Test default connectivity applies to labeling"""
        diagonal = cv.Mat([[255, 0], [0, 255]], cv.CV_8U)
        cv.set_default_config(connectivity=4)
        assert diagonal.connected_components_with_stats().num_labels == 3

    def test_default_norm_type(self):
        """Test default norm type applies to norm"""
        mat = cv.Mat([[1, -2]], cv.CV_64F)
        cv.set_default_config(norm_type=NormTypes.NORM_L1)
        assert mat.norm() == pytest.approx(3)

    def test_default_normalize_range(self):
        """Test default alpha and beta apply to normalize"""
        mat = cv.Mat([[0, 10]], cv.CV_64F)
        cv.set_default_config(norm_type=NormTypes.NORM_MINMAX, normalize_alpha=0, normalize_beta=2)
        assert mat.normalize().at(0, 1) == pytest.approx(2)

    def test_validation(self):
        """Test invalid defaults raise"""
        with pytest.raises(ValueError):
            cv.set_default_config(connectivity=5)
        with pytest.raises(ValueError):
            cv.set_default_config(labels_type=cv.CV_8U)
        with pytest.raises(ValueError):
            cv.set_default_config(norm_type=3)

    def test_debug_sets_log_level(self):
        """Test debug switches the package logger level"""
        cv.set_default_config(debug=True)
        assert logging.getLogger("cv_mat").level == logging.DEBUG
        cv.reset_default_config()
        assert logging.getLogger("cv_mat").level == logging.NOTSET


class TestOptions:
    """Test option resolution"""

    def test_from_dict(self):
        """Test options from a dict"""
        opts = resolve_options(NormOptions, {"norm_type": NormTypes.NORM_L1})
        assert opts.norm_type == NormTypes.NORM_L1

    def test_overrides(self):
        """Test keyword overrides win over the options object"""
        opts = resolve_options(NormOptions, NormOptions(norm_type=NormTypes.NORM_L1), {"norm_type": NormTypes.NORM_INF})
        assert opts.norm_type == NormTypes.NORM_INF

    def test_unknown_key(self):
        """Test unknown option keys raise"""
        with pytest.raises(TypeError):
            resolve_options(NormOptions, {"foo": 1})

    def test_wrong_kind(self):
        """Test options of the wrong kind raise"""
        with pytest.raises(TypeError, match="expected NormOptions or dict"):
            resolve_options(NormOptions, [1, 2])


class TestTypes:
    """Test type code helpers"""

    def test_make_type(self):
        """Test type code composition and decomposition"""
        assert cv.make_type(cv.CV_8U, 3) == cv.CV_8UC3
        assert cv.depth_of(cv.CV_32FC2) == cv.CV_32F
        assert cv.channels_of(cv.CV_32FC2) == 2

    def test_validate_type(self):
        """Test type code validation"""
        assert cv_types.validate_type(cv.CV_64FC4) == cv.CV_64FC4
        for bad in (None, -1, True, "CV_8U", 1.0):
            with pytest.raises(TypeError, match="Invalid type for type"):
                cv_types.validate_type(bad)

    def test_saturate_cast(self):
        """Test saturating casts round and clip"""
        assert cv_types.saturate_cast([-1.5, 2.5, 300], cv.CV_8U).tolist() == [0, 2, 255]
        assert cv_types.saturate_cast([70000], cv.CV_16S).tolist() == [32767]

    def test_version(self):
        """Test OpenCV version parsing"""
        assert cv.version.major >= 3
        assert cv_types.OpenCVVersion.parse("4.10.0-dev") == (4, 10, 0)

    def test_ml_module_available(self):
        """Test the installed OpenCV ships the ml module"""
        assert cv.version.major == 4
        assert hasattr(cv2, "ml")
        assert hasattr(cv2.ml, "ParamGrid_create")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
