import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import cv_mat as cv


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts and ends with the built-in defaults"""
    cv.reset_default_config()
    yield cv.get_default_config()
    cv.reset_default_config()
