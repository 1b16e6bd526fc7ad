"""
helix - 螺旋线合成数据

提供:
- helix_control_points: 沿螺旋线均匀分布的控制点
- helix_positions: 解析螺旋线上的采样位置，用于拟合测试

螺旋线参数化:
    x = r·cos(ω·s), y = r·sin(ω·s), z = h·s
其中 s 为节点索引（控制点）或时间（解析采样）。
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class HelixParams:
    """螺旋线参数"""

    radius: float = 2.0  # 半径
    angular_rate: float = 0.6  # 每单位参数转过的角度 (rad)
    pitch: float = 0.25  # 每单位参数的上升高度


def helix_positions(s: np.ndarray, params: HelixParams | None = None) -> np.ndarray:
    """
    计算螺旋线上参数 s 处的位置。

    Args:
        s: (M,) 参数值
        params: 螺旋线参数

    Returns:
        (M, 3) 位置
    """
    params = params or HelixParams()
    s = np.atleast_1d(np.asarray(s, dtype=float))
    angle = params.angular_rate * s
    return np.column_stack([
        params.radius * np.cos(angle),
        params.radius * np.sin(angle),
        params.pitch * s,
    ])


def helix_control_points(num_knots: int = 12, params: HelixParams | None = None) -> np.ndarray:
    """
    沿螺旋线生成 num_knots 个控制点（第 i 个位于 s=i）。

    Returns:
        (num_knots, 3) 控制点
    """
    return helix_positions(np.arange(num_knots), params)
