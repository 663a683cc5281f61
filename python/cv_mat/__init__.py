from .cv_types import *
from . import cv_types
from .config import MatConfig, get_default_config, reset_default_config, set_default_config
from .mat import ConnectedComponentsResult, Mat
from .ml import ParamGrid
from .options import ConvertToOptions, NormalizeOptions, NormOptions

__version__ = "0.1.0"
