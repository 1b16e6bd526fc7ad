"""
exceptions - 样条轨迹异常类型

所有异常都继承自 SplineError，同时继承对应的内置异常，
调用方既可以统一捕获 SplineError，也可以按 ValueError / IndexError 处理。
"""


class SplineError(Exception):
    """样条轨迹库的基础异常。"""


class OutOfRangeError(SplineError, ValueError):
    """查询时间落在有效节点窗口之外（或节点数不足 4 个）。"""

    def __init__(self, t: float, i0: int | None, num_knots: int):
        self.t = t
        self.i0 = i0
        self.num_knots = num_knots
        super().__init__(f"t={t} i0={i0} is out of range for spline with ncp={num_knots}")


class OutOfBoundsError(SplineError, IndexError):
    """控制点索引超出 [0, n)。"""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"index {index} is out of bounds for {size} parameters")


class UnsupportedOperationError(SplineError, NotImplementedError):
    """请求了尚未支持的操作（例如一次注册多个时间区间）。"""


class ConfigValidationError(SplineError, ValueError):
    """配置参数校验失败。"""

    def __init__(self, field: str, reason: str, value=None):
        self.field = field
        self.reason = reason
        self.value = value
        super().__init__(f"Invalid config '{field}': {reason} (got {value!r})")
