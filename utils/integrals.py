"""
integrals - 路径长度数值积分

轨迹速度在节点处只有 C¹ 连续（加加速度跳变），因此路径长度
    L(t1, t2) = ∫_{t1}^{t2} ||v(t)|| dt
按节点切分成若干段，每段内被积函数光滑，再分别做自适应Simpson积分。
"""

from typing import Callable

import numpy as np

# 至少二分的层数，避免三点采样恰好吻合时过早停止
MIN_DEPTH = 2
MAX_DEPTH = 50


def _simpson(fa: float, fm: float, fb: float, a: float, b: float) -> float:
    return (b - a) / 6 * (fa + 4 * fm + fb)


def _adaptive(f, a, b, fa, fm, fb, whole, tol, depth):
    m = (a + b) / 2
    lm, rm = (a + m) / 2, (m + b) / 2
    flm, frm = f(lm), f(rm)
    left = _simpson(fa, flm, fm, a, m)
    right = _simpson(fm, frm, fb, m, b)
    delta = left + right - whole

    # Richardson 外推: 误差约为 delta / 15
    if depth >= MIN_DEPTH and (abs(delta) <= 15 * tol or depth >= MAX_DEPTH):
        return left + right + delta / 15
    return (
        _adaptive(f, a, m, fa, flm, fm, left, tol / 2, depth + 1)
        + _adaptive(f, m, b, fm, frm, fb, right, tol / 2, depth + 1)
    )


def adaptive_simpson(f: Callable[[float], float], a: float, b: float, tol: float = 1e-8) -> float:
    """
    自适应Simpson积分，被积函数值在各层之间复用。

    Args:
        f: 被积函数
        a: 积分下限
        b: 积分上限
        tol: 绝对误差容差

    Returns:
        积分值
    """
    if a == b:
        return 0.0
    fa, fm, fb = f(a), f((a + b) / 2), f(b)
    return _adaptive(f, a, b, fa, fm, fb, _simpson(fa, fm, fb, a, b), tol, 0)


def piecewise_arc_length(
    derivative_func: Callable[[float], np.ndarray],
    a: float,
    b: float,
    breakpoints=(),
    tol: float = 1e-8,
) -> float:
    """
    在断点处切分区间后计算弧长 ∫_a^b ||P'(t)|| dt。

    Args:
        derivative_func: 曲线的导数函数，返回 (n,) 向量
        a: 积分下限
        b: 积分上限 (a <= b)
        breakpoints: 导数不够光滑的位置（如样条节点），区间外的被忽略
        tol: 总误差容差，按段长比例分配

    Returns:
        弧长值
    """

    def speed(t: float) -> float:
        return float(np.linalg.norm(derivative_func(t)))

    inner = sorted(p for p in breakpoints if a < p < b)
    edges = [a, *inner, b]
    span = b - a
    total = 0.0
    for lo, hi in zip(edges[:-1], edges[1:]):
        total += adaptive_simpson(speed, lo, hi, tol * (hi - lo) / span if span > 0 else tol)
    return total


if __name__ == "__main__":
    print("=== 自适应积分测试 ===")

    result = adaptive_simpson(np.exp, 0, 1)
    print(f"∫e^x dx from 0 to 1: {result:.12f} (误差 {abs(result - (np.e - 1)):.2e})")

    # |t - 1/3| 在 1/3 处不可导，切分后逐段精确
    def folded(t):
        return np.array([t - 1 / 3])

    length = piecewise_arc_length(folded, 0.0, 1.0, breakpoints=[1 / 3])
    print(f"∫|t - 1/3| dt from 0 to 1: {length:.12f} (精确值 {5 / 18:.12f})")
