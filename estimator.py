"""
estimator - 轨迹估计

用位置观测优化轨迹控制点:
1. 找出覆盖所有观测时间的区间 [t_min, t_max]
2. 通过 register_active_range 暴露影响该区间的控制点
3. 每个观测添加一个残差块 weight * (p(t) - p_obs)
4. scipy.optimize.least_squares 求解，结果直接写回轨迹
"""

import logging
from dataclasses import dataclass

import numpy as np
from scipy.optimize import OptimizeResult

from .config import EstimatorConfig
from .core.problem import LeastSquaresProblem
from .exceptions import SplineError
from .trajectory import ActiveRange, UniformR3SplineTrajectory

logger = logging.getLogger(__name__)


@dataclass
class PositionMeasurement:
    """
    位置观测。

    Attributes:
        t: 观测时间
        p: (3,) 观测位置
        weight: 残差权重
    """

    t: float
    p: np.ndarray
    weight: float = 1.0

    def __post_init__(self):
        self.p = np.asarray(self.p, dtype=float)
        if self.p.shape != (3,):
            raise ValueError(f"Measurement position must have shape (3,), got {self.p.shape}")

    def residual(self, trajectory) -> np.ndarray:
        return self.weight * (trajectory.position(self.t) - self.p)


class TrajectoryEstimator:
    """
    基于位置观测的轨迹估计器。

    Attributes:
        trajectory: 待优化轨迹（原地更新）
        config: 求解器配置
        measurements: 已添加的观测
    """

    def __init__(self, trajectory: UniformR3SplineTrajectory, config: EstimatorConfig | None = None):
        self.trajectory = trajectory
        self.config = (config or EstimatorConfig()).validate()
        self.measurements: list[PositionMeasurement] = []
        self.active_range: ActiveRange | None = None

    def add_measurement(self, measurement: PositionMeasurement) -> None:
        self.measurements.append(measurement)

    def add_measurements(self, times: np.ndarray, positions: np.ndarray, weight: float = 1.0) -> None:
        """批量添加观测。"""
        for t, p in zip(np.asarray(times, dtype=float), np.asarray(positions, dtype=float)):
            self.add_measurement(PositionMeasurement(float(t), p, weight))

    def build_problem(self) -> LeastSquaresProblem:
        """构造最小二乘问题。"""
        if not self.measurements:
            raise SplineError("No measurements to estimate from")

        times = [m.t for m in self.measurements]
        problem = LeastSquaresProblem(self.config)
        self.active_range = self.trajectory.register_active_range([(min(times), max(times))], problem)

        for m in self.measurements:
            problem.add_residual_block(lambda m=m: m.residual(self.trajectory))
        return problem

    def solve(self) -> OptimizeResult:
        """
        求解，优化后的控制点直接写回轨迹。

        Returns:
            scipy OptimizeResult
        """
        problem = self.build_problem()
        initial_cost = problem.cost()
        result = problem.solve()
        logger.info(
            "Estimated %d knots from %d measurements: cost %.3e -> %.3e (%s)",
            len(self.active_range.parameter_blocks),
            len(self.measurements),
            initial_cost,
            result.cost,
            result.message,
        )
        return result


if __name__ == "__main__":
    from uniform_r3_spline.datasets import helix_control_points

    logging.basicConfig(level=logging.INFO)

    print("=== 轨迹估计测试 ===")
    truth = UniformR3SplineTrajectory.from_control_points(helix_control_points(10), dt=0.5)
    times = np.linspace(truth.min_time, truth.max_time, 80, endpoint=False)
    observed = truth.evaluate_batch(times).position

    rng = np.random.default_rng(0)
    initial = helix_control_points(10) + rng.normal(scale=0.3, size=(10, 3))
    trajectory = UniformR3SplineTrajectory.from_control_points(initial, dt=0.5)

    estimator = TrajectoryEstimator(trajectory)
    estimator.add_measurements(times, observed)
    result = estimator.solve()

    error = np.abs(trajectory.control_points() - truth.control_points()).max()
    print(f"最终代价: {result.cost:.3e}")
    print(f"控制点最大误差: {error:.2e}")
