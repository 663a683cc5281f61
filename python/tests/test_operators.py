"""Tests for Mat operators"""

import numpy as np
import pytest

import cv_mat as cv


def u8(values):
    return cv.Mat(values, cv.CV_8U)


class TestArithmetic:
    """Test saturating arithmetic"""

    def test_add_saturates(self):
        """Test add clips at the depth maximum"""
        assert (u8([[200, 10]]) + u8([[100, 5]])).get_data_as_array() == [[255, 15]]

    def test_sub_saturates(self):
        """Test sub clips at zero for unsigned depths"""
        assert u8([[10, 5]]).sub(u8([[20, 1]])).get_data_as_array() == [[0, 4]]

    def test_mul_scalar(self):
        """Test scaling by a number from either side"""
        assert (u8([[100, 3]]) * 3).get_data_as_array() == [[255, 9]]
        assert (2 * u8([[1, 3]])).get_data_as_array() == [[2, 6]]

    def test_div_scalar(self):
        """Test division by a number rounds to nearest"""
        assert (u8([[10, 7]]) / 2).get_data_as_array() == [[5, 4]]

    def test_div_by_zero(self):
        """Test division by zero raises"""
        with pytest.raises(ZeroDivisionError):
            u8([[1]]).div(0)

    def test_scalar_must_be_number(self):
        """Test non numeric scalar raises"""
        with pytest.raises(TypeError):
            u8([[1]]).mul("a")

    def test_elementwise(self):
        """Test element-wise multiply and divide"""
        a = cv.Mat([[2, 3]], cv.CV_32F)
        b = cv.Mat([[4, 5]], cv.CV_32F)
        assert a.h_mul(b).get_data_as_array() == [[8.0, 15.0]]
        assert u8([[10, 5]]).h_div(u8([[2, 0]])).get_data_as_array() == [[5, 0]]

    def test_abs_diff(self):
        """Test absolute difference"""
        assert u8([[10, 5]]).abs_diff(u8([[3, 9]])).get_data_as_array() == [[7, 4]]

    def test_type_mismatch(self):
        """Test operands of different type raise"""
        with pytest.raises(ValueError, match="type mismatch"):
            u8([[1]]).add(cv.Mat([[1]], cv.CV_32F))

    def test_size_mismatch(self):
        """Test operands of different size raise"""
        with pytest.raises(ValueError, match="size mismatch"):
            u8([[1]]).add(u8([[1, 2]]))

    def test_operand_must_be_mat(self):
        """Test adding a plain number raises"""
        with pytest.raises(TypeError):
            u8([[1]]) + 1


class TestBitwise:
    """Test bitwise operators"""

    def test_and_or_xor(self):
        """Test binary bitwise operators"""
        a = u8([[0b1100]])
        b = u8([[0b1010]])
        assert (a & b).at(0, 0) == 0b1000
        assert (a | b).at(0, 0) == 0b1110
        assert (a ^ b).at(0, 0) == 0b0110

    def test_not(self):
        """Test bitwise inversion"""
        assert (~u8([[0, 255]])).get_data_as_array() == [[255, 0]]


class TestMath:
    """Test element-wise math and reductions"""

    def test_transpose(self):
        """Test transpose swaps rows and cols"""
        mat = u8([[1, 2, 3], [4, 5, 6]]).transpose()
        assert mat.rows == 3
        assert mat.cols == 2
        assert mat.get_data_as_array() == [[1, 4], [2, 5], [3, 6]]

    def test_sqrt(self):
        """Test element-wise square root"""
        mat = cv.Mat([[4, 9]], cv.CV_64F)
        assert mat.sqrt().to_numpy() == pytest.approx(np.array([[2.0, 3.0]]))

    def test_exp_log(self):
        """Test log inverts exp"""
        mat = cv.Mat([[0.0, 1.0]], cv.CV_64F)
        assert mat.exp().log().to_numpy() == pytest.approx(np.array([[0.0, 1.0]]), abs=1e-6)

    def test_float_only(self):
        """Test exp rejects integer depths"""
        with pytest.raises(ValueError, match="CV_32F or CV_64F"):
            u8([[1]]).exp()

    def test_dot(self):
        """Test dot product"""
        mat = cv.Mat([[1, 2], [3, 4]], cv.CV_64F)
        assert mat.dot(mat) == pytest.approx(30)

    def test_count_non_zero(self):
        """Test non-zero count"""
        assert u8([[0, 1], [2, 0]]).count_non_zero() == 2

    def test_count_non_zero_single_channel(self):
        """Test non-zero count rejects multi channel mats"""
        with pytest.raises(ValueError, match="single-channel"):
            cv.Mat(2, 2, cv.CV_8UC3).count_non_zero()

    def test_mean(self):
        """Test per-channel mean"""
        assert cv.Mat(2, 2, cv.CV_8UC3, [1, 2, 3]).mean() == pytest.approx([1.0, 2.0, 3.0])
        assert u8([[1, 3]]).mean() == pytest.approx([2.0])

    def test_min_max_loc(self):
        """Test min and max values with their locations"""
        result = u8([[5, 1], [9, 3]]).min_max_loc()
        assert result["min_val"] == 1
        assert result["max_val"] == 9
        assert result["min_loc"] == (1, 0)
        assert result["max_loc"] == (0, 1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
