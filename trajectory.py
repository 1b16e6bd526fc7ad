"""
trajectory - R³ 均匀三次B样条轨迹

该模块实现 UniformR3SplineTrajectory 类，负责:
1. 控制点存储与追加 (append_knot)
2. 控制点读写 (control_point / mutable_control_point)
3. 向优化器暴露某时间区间内的活动控制点 (register_active_range)

求值委托给 core.r3_view.UniformR3SplineView，视图直接读取存储，
优化器原地修改控制点后无需同步即可重新求值。
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from .config import SplineConfig
from .core.bspline import ORDER
from .core.evaluation import EvalFlags, TrajectoryEvaluation
from .core.parameters import ParameterStore
from .core.problem import ParameterBlock, ParameterProblem
from .core.r3_view import UniformR3SplineView
from .core.spline_base import SplineMeta
from .exceptions import OutOfBoundsError, OutOfRangeError, UnsupportedOperationError
from .utils.integrals import piecewise_arc_length

logger = logging.getLogger(__name__)

CONTROL_POINT_SIZE = 3


class _BlockHolder:
    """按局部索引读取一组参数块的数据源。"""

    def __init__(self, blocks: list[ParameterBlock]):
        self._blocks = blocks

    def parameter(self, index: int) -> np.ndarray:
        if not 0 <= index < len(self._blocks):
            raise OutOfBoundsError(index, len(self._blocks))
        return self._blocks[index].value()


@dataclass
class ActiveRange:
    """
    register_active_range 的结果。

    Attributes:
        meta: 暴露子窗口自身的元数据 (局部 t0、dt、n)
        parameter_blocks: 节点 [i1, i2+3] 对应的参数块
        parameter_sizes: 各参数块长度（恒为 3）
        first_index: 子窗口第一个节点在原轨迹中的索引 i1
    """

    meta: SplineMeta
    parameter_blocks: list[ParameterBlock] = field(default_factory=list)
    parameter_sizes: list[int] = field(default_factory=list)
    first_index: int = 0

    @property
    def indices(self) -> list[int]:
        return [b.index for b in self.parameter_blocks]

    def view(self) -> UniformR3SplineView:
        """
        以暴露的控制点构造子窗口视图，时间原点为 meta.t0。

        视图的节点数取实际暴露的参数块个数，超出部分按 OutOfRangeError 处理。
        """
        meta = SplineMeta(dt=self.meta.dt, t0=self.meta.t0, n=len(self.parameter_blocks))
        return UniformR3SplineView(_BlockHolder(self.parameter_blocks), meta)


class UniformR3SplineTrajectory:
    """
    R³ 均匀三次B样条轨迹。

    节点从 t0 开始，间隔为 dt；第 i 个控制点位于时间 t0 + i*dt。
    有效求值区间为 [t0, t0 + (n-3)*dt)。

    Attributes:
        meta: 轨迹元数据 (t0, dt, n)
        store: 控制点存储
    """

    CLASS_ID = "UniformR3Spline"

    def __init__(self, dt: float = 1.0, t0: float = 0.0):
        """
        Args:
            dt: 节点间隔
            t0: 第一个节点的时间
        """
        config = SplineConfig(dt=dt, t0=t0).validate()
        self.meta = SplineMeta(dt=config.dt, t0=config.t0, n=0)
        self.store = ParameterStore()
        self._view = UniformR3SplineView(self.store, self.meta)

    @classmethod
    def from_config(cls, config: SplineConfig) -> "UniformR3SplineTrajectory":
        return cls(dt=config.dt, t0=config.t0)

    @classmethod
    def from_control_points(
        cls, points: np.ndarray, dt: float = 1.0, t0: float = 0.0
    ) -> "UniformR3SplineTrajectory":
        """由 (N, 3) 控制点数组构造轨迹。"""
        trajectory = cls(dt=dt, t0=t0)
        for p in np.asarray(points, dtype=float):
            trajectory.append_knot(p)
        return trajectory

    # ---- 元数据 ----

    @property
    def dt(self) -> float:
        return self.meta.dt

    @property
    def t0(self) -> float:
        return self.meta.t0

    @property
    def num_knots(self) -> int:
        return self.meta.n

    @property
    def min_time(self) -> float:
        return self.meta.min_time

    @property
    def max_time(self) -> float:
        return self.meta.max_time

    def __len__(self) -> int:
        return self.meta.n

    def as_view(self) -> UniformR3SplineView:
        return self._view

    # ---- 控制点 ----

    def _check_knot(self, i: int) -> None:
        if not 0 <= i < self.meta.n:
            raise OutOfBoundsError(i, self.meta.n)

    def control_point(self, i: int) -> np.ndarray:
        """
        第 i 个控制点的只读视图。

        视图直接引用存储，在下一次 append_knot 之前有效。
        """
        self._check_knot(i)
        view = self.store.parameter(i).view()
        view.flags.writeable = False
        return view

    def mutable_control_point(self, i: int) -> np.ndarray:
        """第 i 个控制点的可写视图，原地修改立即生效。"""
        self._check_knot(i)
        return self.store.parameter(i)

    def control_points(self) -> np.ndarray:
        """所有控制点的 (n, 3) 拷贝。"""
        return self.store.as_array(CONTROL_POINT_SIZE)

    def append_knot(self, point: np.ndarray) -> None:
        """
        在末尾追加一个节点。

        Args:
            point: (3,) 控制点
        """
        point = np.asarray(point, dtype=float)
        if point.shape != (CONTROL_POINT_SIZE,):
            raise ValueError(f"Control point must have shape (3,), got {point.shape}")

        i = self.store.add_parameter(CONTROL_POINT_SIZE)
        self.store.parameter(i)[:] = point
        self.meta.n += 1
        logger.debug("Appended knot %d at t=%.6g: %s", i, self.t0 + i * self.dt, point)

    # ---- 求值 ----

    def evaluate(self, t: float, flags: int = EvalFlags.POSITION) -> TrajectoryEvaluation:
        return self._view.evaluate(t, flags)

    def evaluate_batch(self, times: np.ndarray, flags: int = EvalFlags.POSITION) -> TrajectoryEvaluation:
        return self._view.evaluate_batch(times, flags)

    def position(self, t: float) -> np.ndarray:
        return self._view.position(t)

    def velocity(self, t: float) -> np.ndarray:
        return self._view.velocity(t)

    def acceleration(self, t: float) -> np.ndarray:
        return self._view.acceleration(t)

    def orientation(self, t: float):
        return self._view.orientation(t)

    def angular_velocity(self, t: float) -> np.ndarray:
        return self._view.angular_velocity(t)

    def arc_length(self, t1: float, t2: float, tol: float = 1e-8) -> float:
        """
        计算 [t1, t2] 上的路径长度。

        在节点处切分后逐段自适应Simpson积分速度模长。
        t1、t2 都必须在有效区间 [min_time, max_time) 内。
        """
        if t2 < t1:
            return -self.arc_length(t2, t1, tol)
        for t in (t1, t2):
            self._view.active_window(t)
        knots = self.t0 + self.dt * np.arange(self.meta.n)
        return piecewise_arc_length(self.velocity, t1, t2, knots, tol)

    # ---- 优化器接口 ----

    def register_active_range(
        self,
        times: list[tuple[float, float]],
        problem: ParameterProblem | None = None,
    ) -> ActiveRange:
        """
        暴露影响时间区间 (t1, t2) 的控制点。

        t2 处的活动窗口为 [i2, i2+3]，因此暴露节点 [i1, i2+3]。
        返回的元数据描述该子窗口自身: t0' = t0 + i1*dt。

        Args:
            times: 时间区间列表，目前只支持恰好一个 (t1, t2)
            problem: 可选，优化器；对每个参数块调用 add_parameter_block

        Returns:
            ActiveRange

        Raises:
            UnsupportedOperationError: 区间个数不为 1
            OutOfRangeError: 所需节点超出已有控制点
        """
        if len(times) != 1:
            raise UnsupportedOperationError("Multi times not implemented yet")

        t1, t2 = times[0]
        i1, _ = self.meta.index_and_interpolation_amount(t1)
        i2, _ = self.meta.index_and_interpolation_amount(t2)
        logger.debug("Active range: t1=%.6g i1=%d --- t2=%.6g i2=%d", t1, i1, t2, i2)

        n = self.meta.n
        if i1 < 0:
            raise OutOfRangeError(t1, i1, n)
        if i2 < i1 or i2 + ORDER - 1 >= n:
            raise OutOfRangeError(t2, i2, n)

        blocks = []
        for i in range(i1, i2 + ORDER):
            block = ParameterBlock(self, i, CONTROL_POINT_SIZE)
            blocks.append(block)
            if problem is not None:
                problem.add_parameter_block(block)

        meta = SplineMeta(
            dt=self.dt,
            n=i2 + ORDER - i1 + 1,
            t0=self.t0 + i1 * self.dt,
        )
        return ActiveRange(
            meta=meta,
            parameter_blocks=blocks,
            parameter_sizes=[CONTROL_POINT_SIZE] * len(blocks),
            first_index=i1,
        )

    def __repr__(self) -> str:
        return f"UniformR3SplineTrajectory(n={self.meta.n}, t0={self.t0}, dt={self.dt})"


if __name__ == "__main__":
    from uniform_r3_spline.datasets import helix_control_points

    logging.basicConfig(level=logging.DEBUG)

    print("=== R³ 均匀三次B样条轨迹测试 ===")
    trajectory = UniformR3SplineTrajectory.from_control_points(helix_control_points(10), dt=0.5)
    print(trajectory)
    print(f"有效区间: [{trajectory.min_time}, {trajectory.max_time})")

    t = 1.3
    ev = trajectory.evaluate(t, EvalFlags.POSITION | EvalFlags.VELOCITY | EvalFlags.ACCELERATION)
    print(f"\n在 t={t} 处:")
    print(f"  位置: {ev.position}")
    print(f"  速度: {ev.velocity}")
    print(f"  加速度: {ev.acceleration}")

    active = trajectory.register_active_range([(1.0, 2.0)])
    print(f"\n活动节点: {active.indices}, 子窗口 t0={active.meta.t0}, n={active.meta.n}")
    print(f"路径长度 [0, 3]: {trajectory.arc_length(0.0, 3.0):.4f}")
