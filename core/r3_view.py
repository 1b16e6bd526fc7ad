"""
r3_view - R³ 均匀三次B样条求值器

给定查询时间 t:
1. 计算活动段索引 i0 和段内参数 u
2. 用基函数矩阵 M 计算 4 个活动控制点的混合权重
3. 加权求和得到位置、速度、加速度

该轨迹只描述平移，姿态恒为单位旋转，角速度恒为 0。
"""

import numpy as np
from scipy.spatial.transform import Rotation

from ..exceptions import OutOfRangeError
from .bspline import ORDER, blend_weights, monomial_vector
from .evaluation import EvalFlags, TrajectoryEvaluation
from .spline_base import SplineViewBase


class UniformR3SplineView(SplineViewBase):
    """
    R³ 均匀三次B样条视图。

    控制点的标量类型不限：可以是 float64 数组，也可以是自动微分/符号向量
    (例如 casadi.SX)。求值过程中对控制点只做加法和与浮点权重的乘法，
    索引和段内参数 u 始终用普通浮点数计算。
    """

    def control_point(self, i: int):
        return self.holder.parameter(i)

    def active_window(self, t: float) -> tuple[int, float]:
        """
        计算并校验 t 对应的活动窗口。

        Returns:
            i0: 活动窗口起始节点索引，窗口为 [i0, i0+3]
            u: 段内参数

        Raises:
            OutOfRangeError: n < 4，或 i0 不在 [0, n-4] 内
        """
        i0, u = self.calculate_index_and_interpolation_amount(t)
        n = self.num_knots
        if n < ORDER or i0 < 0 or i0 > n - ORDER:
            raise OutOfRangeError(t, i0, n)
        return i0, u

    def evaluate(self, t: float, flags: int = EvalFlags.POSITION) -> TrajectoryEvaluation:
        """
        在时刻 t 求值。

        只计算 flags 中请求的字段，其余字段保持为 None。

        Args:
            t: 查询时间
            flags: EvalFlags 组合

        Returns:
            TrajectoryEvaluation
        """
        result = TrajectoryEvaluation()
        i0, u = self.active_window(t)
        dt_inv = 1.0 / self.dt

        # 每个请求的导数阶数对应一组混合权重
        requested = []
        if flags & EvalFlags.POSITION:
            requested.append(("position", blend_weights(monomial_vector(u, 0))))
        if flags & EvalFlags.VELOCITY:
            requested.append(("velocity", blend_weights(monomial_vector(u, 1, dt_inv))))
        if flags & EvalFlags.ACCELERATION:
            requested.append(("acceleration", blend_weights(monomial_vector(u, 2, dt_inv))))

        if requested:
            sums = [0.0] * len(requested)
            for k in range(ORDER):
                cp = self.control_point(i0 + k)
                for j, (_, weights) in enumerate(requested):
                    sums[j] = sums[j] + weights[k] * cp
            for (name, _), value in zip(requested, sums):
                setattr(result, name, value)

        if flags & EvalFlags.ORIENTATION:
            result.orientation = Rotation.identity()
        if flags & EvalFlags.ANGULAR_VELOCITY:
            result.angular_velocity = np.zeros(3)

        return result

    def evaluate_batch(self, times: np.ndarray, flags: int = EvalFlags.POSITION) -> TrajectoryEvaluation:
        """
        批量求值。

        Args:
            times: (M,) 查询时间数组
            flags: EvalFlags 组合

        Returns:
            TrajectoryEvaluation，向量字段为 (M, 3) 数组，姿态为含 M 个旋转的 Rotation
        """
        times = np.atleast_1d(np.asarray(times, dtype=float))
        evaluations = [self.evaluate(t, flags) for t in times]

        batch = TrajectoryEvaluation()
        vector_fields = (
            ("position", EvalFlags.POSITION),
            ("velocity", EvalFlags.VELOCITY),
            ("acceleration", EvalFlags.ACCELERATION),
            ("angular_velocity", EvalFlags.ANGULAR_VELOCITY),
        )
        for name, flag in vector_fields:
            if flags & flag:
                values = [getattr(e, name) for e in evaluations]
                setattr(batch, name, np.array(values, dtype=float).reshape(len(times), 3))
        if flags & EvalFlags.ORIENTATION:
            batch.orientation = Rotation.identity(len(times))
        return batch

    def position(self, t: float):
        return self.evaluate(t, EvalFlags.POSITION).position

    def velocity(self, t: float):
        return self.evaluate(t, EvalFlags.VELOCITY).velocity

    def acceleration(self, t: float):
        return self.evaluate(t, EvalFlags.ACCELERATION).acceleration

    def orientation(self, t: float) -> Rotation:
        return self.evaluate(t, EvalFlags.ORIENTATION).orientation

    def angular_velocity(self, t: float) -> np.ndarray:
        return self.evaluate(t, EvalFlags.ANGULAR_VELOCITY).angular_velocity
