"""
spline_base - 均匀样条的时间索引工具

所有均匀样条视图共享:
- SplineMeta: 节点元数据 {t0, dt, n}
- SplineViewBase: 时间 t 到 (段索引 i0, 段内参数 u) 的映射
"""

import math
from dataclasses import dataclass

from ..exceptions import OutOfRangeError
from .bspline import ORDER


@dataclass
class SplineMeta:
    """
    均匀节点元数据。

    所有节点从 t0 开始，间隔严格为 dt；n 等于当前存储的控制点个数。

    Attributes:
        dt: 节点间隔
        t0: 第一个节点的时间
        n: 节点（控制点）个数
    """

    dt: float = 1.0
    t0: float = 0.0
    n: int = 0

    @property
    def min_time(self) -> float:
        """有效求值区间的起点（闭）。"""
        return self.t0

    @property
    def max_time(self) -> float:
        """有效求值区间的终点（开）。n < 4 时区间为空。"""
        return self.t0 + (self.n - (ORDER - 1)) * self.dt

    def index_and_interpolation_amount(self, t: float) -> tuple[int, float]:
        """
        计算 t 所在的段索引和段内归一化参数。

            s  = (t - t0) / dt
            i0 = floor(s)
            u  = s - i0

        Args:
            t: 查询时间

        Returns:
            i0: 段索引（可能为负或超出范围，由调用方校验）
            u: 段内参数 [0, 1)

        Raises:
            OutOfRangeError: t 为 inf 或 NaN
        """
        s = (float(t) - self.t0) / self.dt
        if not math.isfinite(s):
            raise OutOfRangeError(t, None, self.n)
        i0 = math.floor(s)
        return i0, s - i0


class SplineViewBase:
    """
    样条视图基类。

    视图不持有控制点数据，只持有元数据和数据源 (holder) 的引用，
    因此对数据源的原地修改会立即反映到后续求值中。

    holder 需提供 parameter(i) 方法，返回第 i 个节点的控制点。
    """

    def __init__(self, holder, meta: SplineMeta):
        self.holder = holder
        self.meta = meta

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

    def calculate_index_and_interpolation_amount(self, t: float) -> tuple[int, float]:
        return self.meta.index_and_interpolation_amount(t)
