"""
core - 核心算法模块

包含:
- bspline: 均匀三次B样条基函数矩阵
- spline_base: 节点元数据与时间索引
- parameters: 控制点参数存储
- evaluation: 求值标志与结果类型
- r3_view: R³ 样条求值器
- problem: 优化器参数块接口与 least_squares 后端
"""

from .bspline import BASIS_MATRIX, basis_weights, blend_weights, monomial_vector
from .evaluation import EvalFlags, TrajectoryEvaluation
from .parameters import ParameterStore, SequenceHolder
from .problem import LeastSquaresProblem, ParameterBlock, ParameterProblem
from .r3_view import UniformR3SplineView
from .spline_base import SplineMeta, SplineViewBase

__all__ = [
    "BASIS_MATRIX",
    "basis_weights",
    "blend_weights",
    "monomial_vector",
    "EvalFlags",
    "TrajectoryEvaluation",
    "ParameterStore",
    "SequenceHolder",
    "LeastSquaresProblem",
    "ParameterBlock",
    "ParameterProblem",
    "UniformR3SplineView",
    "SplineMeta",
    "SplineViewBase",
]
