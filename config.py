"""
config - 轨迹与估计器配置

提供:
- SplineConfig: 均匀节点参数 (dt, t0)
- EstimatorConfig: scipy.optimize.least_squares 求解参数
"""

import math
from dataclasses import dataclass

from .exceptions import ConfigValidationError

# scipy.optimize.least_squares 支持的鲁棒损失函数
SUPPORTED_LOSSES = ("linear", "soft_l1", "huber", "cauchy", "arctan")


@dataclass
class SplineConfig:
    """均匀三次B样条的节点配置。"""

    dt: float = 1.0  # 节点间隔 (s)
    t0: float = 0.0  # 第一个节点的时间 (s)

    def validate(self) -> "SplineConfig":
        if not math.isfinite(self.dt) or self.dt <= 0:
            raise ConfigValidationError("dt", "must be finite and > 0", self.dt)
        if not math.isfinite(self.t0):
            raise ConfigValidationError("t0", "must be finite", self.t0)
        return self


@dataclass
class EstimatorConfig:
    """非线性最小二乘求解配置，字段与 least_squares 的关键字参数一一对应。"""

    loss: str = "linear"
    f_scale: float = 1.0
    max_nfev: int | None = None
    ftol: float = 1e-8
    xtol: float = 1e-8
    gtol: float = 1e-8
    verbose: int = 0

    def validate(self) -> "EstimatorConfig":
        if self.loss not in SUPPORTED_LOSSES:
            raise ConfigValidationError("loss", f"must be one of {SUPPORTED_LOSSES}", self.loss)
        if not math.isfinite(self.f_scale) or self.f_scale <= 0:
            raise ConfigValidationError("f_scale", "must be finite and > 0", self.f_scale)
        if self.max_nfev is not None and self.max_nfev < 1:
            raise ConfigValidationError("max_nfev", "must be >= 1", self.max_nfev)
        for name in ("ftol", "xtol", "gtol"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigValidationError(name, "must be finite and > 0", value)
        if self.verbose not in (0, 1, 2):
            raise ConfigValidationError("verbose", "must be 0, 1 or 2", self.verbose)
        return self

    def solver_kwargs(self) -> dict:
        """转换为 least_squares 的关键字参数。"""
        return {
            "loss": self.loss,
            "f_scale": self.f_scale,
            "max_nfev": self.max_nfev,
            "ftol": self.ftol,
            "xtol": self.xtol,
            "gtol": self.gtol,
            "verbose": self.verbose,
        }
