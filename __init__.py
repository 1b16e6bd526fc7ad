"""
uniform_r3_spline - R³ 均匀三次B样条轨迹库

用均匀时间间隔的控制点描述连续变化的三维位置（例如传感器或刚体的运动路径），
支持:
- 任意时刻位置、速度、加速度的闭式求值
- 控制点追加与原地修改
- 向非线性最小二乘优化器暴露某时间区间内的活动控制点

该轨迹只描述平移，姿态恒为单位旋转。
"""

import logging

from .config import EstimatorConfig, SplineConfig
from .core.evaluation import EvalFlags, TrajectoryEvaluation
from .core.spline_base import SplineMeta
from .estimator import PositionMeasurement, TrajectoryEstimator
from .exceptions import (
    ConfigValidationError,
    OutOfBoundsError,
    OutOfRangeError,
    SplineError,
    UnsupportedOperationError,
)
from .trajectory import ActiveRange, UniformR3SplineTrajectory

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "UniformR3SplineTrajectory",
    "ActiveRange",
    "EvalFlags",
    "TrajectoryEvaluation",
    "SplineMeta",
    "SplineConfig",
    "EstimatorConfig",
    "PositionMeasurement",
    "TrajectoryEstimator",
    "SplineError",
    "OutOfRangeError",
    "OutOfBoundsError",
    "UnsupportedOperationError",
    "ConfigValidationError",
]
