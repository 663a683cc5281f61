from .param_grid import ParamGrid

__all__ = ["ParamGrid"]
