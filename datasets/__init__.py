"""
datasets - 测试数据集

包含:
- helix: 螺旋线控制点与解析采样
"""

from .helix import HelixParams, helix_control_points, helix_positions

__all__ = [
    "HelixParams",
    "helix_control_points",
    "helix_positions",
]
