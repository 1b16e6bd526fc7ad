"""
evaluation - 轨迹求值标志与结果类型
"""

from dataclasses import dataclass
from enum import IntFlag
from typing import Any

from scipy.spatial.transform import Rotation


class EvalFlags(IntFlag):
    """求值字段选择掩码，可按位或组合。"""

    POSITION = 1
    VELOCITY = 2
    ACCELERATION = 4
    ORIENTATION = 8
    ANGULAR_VELOCITY = 16

    ALL = POSITION | VELOCITY | ACCELERATION | ORIENTATION | ANGULAR_VELOCITY


@dataclass
class TrajectoryEvaluation:
    """
    单个时刻的求值结果。

    未请求的字段保持为 None，调用方不应读取未请求的字段。
    向量字段的类型与控制点的标量类型一致（通常为 (3,) numpy 数组）。
    """

    position: Any = None
    velocity: Any = None
    acceleration: Any = None
    orientation: Rotation | None = None
    angular_velocity: Any = None
