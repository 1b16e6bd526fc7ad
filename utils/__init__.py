"""
utils - 工具函数模块

包含:
- integrals: 分段自适应Simpson积分（路径长度）
"""

from .integrals import adaptive_simpson, piecewise_arc_length

__all__ = [
    "adaptive_simpson",
    "piecewise_arc_length",
]
