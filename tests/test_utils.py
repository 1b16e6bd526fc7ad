"""
utils 模块单元测试
"""

import numpy as np
import pytest
from scipy.integrate import quad

from uniform_r3_spline import OutOfRangeError, UniformR3SplineTrajectory
from uniform_r3_spline.datasets import helix_control_points
from uniform_r3_spline.utils.integrals import adaptive_simpson, piecewise_arc_length


class TestIntegrals:
    """数值积分测试"""

    def test_adaptive_simpson_exact_for_cubic(self):
        """测试三次多项式积分精确: ∫(x³ - 2x + 1) dx from 0 to 2 = 2"""
        result = adaptive_simpson(lambda x: x**3 - 2 * x + 1, 0.0, 2.0)
        assert result == pytest.approx(2.0, abs=1e-12)

    def test_adaptive_simpson_exp(self):
        """测试 ∫e^x dx from 0 to 1 = e - 1"""
        result = adaptive_simpson(np.exp, 0, 1, tol=1e-10)
        assert result == pytest.approx(np.e - 1, abs=1e-9)

    def test_empty_interval(self):
        """测试空区间积分为 0"""
        assert adaptive_simpson(np.exp, 1.5, 1.5) == 0.0

    def test_kink_split_at_breakpoint(self):
        """测试在不可导点切分后积分精确: ∫|t - 1/3| dt from 0 to 1 = 5/18"""

        def folded(t):
            return np.array([t - 1 / 3])

        length = piecewise_arc_length(folded, 0.0, 1.0, breakpoints=[1 / 3])
        assert length == pytest.approx(5 / 18, abs=1e-12)

    def test_breakpoints_outside_interval_ignored(self):
        """测试区间外的断点不影响结果"""

        def line(t):
            return np.array([3.0, 4.0])

        length = piecewise_arc_length(line, 0.0, 2.0, breakpoints=[-1.0, 0.0, 2.0, 5.0])
        assert length == pytest.approx(10.0)

    def test_quarter_circle_arc_length(self):
        """测试四分之一单位圆弧长 π/2"""

        def circle_derivative(t):
            return np.array([-np.pi / 2 * np.sin(np.pi * t / 2), np.pi / 2 * np.cos(np.pi * t / 2)])

        assert piecewise_arc_length(circle_derivative, 0, 1) == pytest.approx(np.pi / 2, abs=1e-8)


class TestTrajectoryArcLength:
    """轨迹路径长度测试"""

    def test_straight_line(self):
        """测试匀速直线的路径长度等于速度乘时间"""
        points = np.column_stack([np.arange(8.0), 2 * np.arange(8.0), np.zeros(8)])
        trajectory = UniformR3SplineTrajectory.from_control_points(points, dt=0.5)
        speed = np.sqrt(5.0) / 0.5
        assert trajectory.arc_length(0.2, 2.2) == pytest.approx(2.0 * speed)

    def test_matches_scipy_quad_on_helix(self):
        """测试螺旋线路径长度与 scipy quad（节点处切分）一致"""
        trajectory = UniformR3SplineTrajectory.from_control_points(helix_control_points(8), dt=1.0)

        def speed(t):
            return np.linalg.norm(trajectory.velocity(t))

        expected, _ = quad(speed, 0.0, 4.0, points=[1.0, 2.0, 3.0], epsabs=1e-12, epsrel=1e-12)
        assert trajectory.arc_length(0.0, 4.0) == pytest.approx(expected, abs=1e-8)

    def test_matches_scipy_quad_off_knot_bounds(self):
        """测试积分端点不在节点上时同样与 quad 一致"""
        trajectory = UniformR3SplineTrajectory.from_control_points(helix_control_points(10), dt=0.5)

        def speed(t):
            return np.linalg.norm(trajectory.velocity(t))

        expected, _ = quad(speed, 0.3, 3.1, points=[0.5, 1.0, 1.5, 2.0, 2.5, 3.0], epsabs=1e-12, epsrel=1e-12)
        assert trajectory.arc_length(0.3, 3.1) == pytest.approx(expected, abs=1e-8)

    def test_reversed_interval(self):
        """测试区间反向时长度取负"""
        trajectory = UniformR3SplineTrajectory.from_control_points(helix_control_points(8))
        forward = trajectory.arc_length(0.5, 3.5)
        assert forward > 0
        assert trajectory.arc_length(3.5, 0.5) == pytest.approx(-forward)

    def test_additive(self):
        """测试路径长度可加"""
        trajectory = UniformR3SplineTrajectory.from_control_points(helix_control_points(8))
        whole = trajectory.arc_length(0.0, 4.0)
        parts = trajectory.arc_length(0.0, 1.7) + trajectory.arc_length(1.7, 4.0)
        assert whole == pytest.approx(parts, rel=1e-7)

    def test_outside_valid_range(self):
        """测试积分区间超出有效区间时报错"""
        trajectory = UniformR3SplineTrajectory.from_control_points(helix_control_points(8))
        with pytest.raises(OutOfRangeError):
            trajectory.arc_length(0.0, trajectory.max_time)

    @pytest.mark.parametrize("bad", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_bounds(self, bad):
        """测试积分端点为 inf / NaN 时报错"""
        trajectory = UniformR3SplineTrajectory.from_control_points(helix_control_points(8))
        with pytest.raises(OutOfRangeError):
            trajectory.arc_length(0.0, bad)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
