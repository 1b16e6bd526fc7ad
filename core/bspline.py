"""
bspline - 均匀三次B样条基函数工具

提供均匀三次B样条的矩阵形式，供求值器 (r3_view) 使用。

实现:
1. 基函数转换矩阵 M (4×4 常量)
2. 单项式向量及其时间导数 (位置、速度、加速度)
3. 混合权重计算 B = U^T · M
"""

import numpy as np

# 均匀三次B样条的基函数转换矩阵
# 行向量 [1, u, u², u³] 左乘 M 得到 4 个活动控制点的权重
BASIS_MATRIX = np.array(
    [
        [1.0, 4.0, 1.0, 0.0],
        [-3.0, 0.0, 3.0, 0.0],
        [3.0, -6.0, 3.0, 0.0],
        [-1.0, 3.0, -3.0, 1.0],
    ]
) / 6.0
BASIS_MATRIX.setflags(write=False)

# 纯 Python 浮点副本，避免 numpy 标量与符号/自动微分类型相乘时的类型提升
_M = BASIS_MATRIX.tolist()

ORDER = 4
MAX_DERIVATIVE = 2


def monomial_vector(u: float, derivative: int = 0, dt_inv: float = 1.0) -> list[float]:
    """
    计算单项式向量 U 或其对时间 t 的导数。

    u = (t - t0) / dt，故 d/dt = (1/dt) · d/du（链式法则）:
        0 阶: [1, u, u², u³]
        1 阶: (1/dt)  · [0, 1, 2u, 3u²]
        2 阶: (1/dt)² · [0, 0, 2, 6u]

    Args:
        u: 段内归一化参数 [0, 1)
        derivative: 导数阶数 (0, 1, 2)
        dt_inv: 节点间隔的倒数 1/dt

    Returns:
        长度为 4 的列表
    """
    if derivative == 0:
        u2 = u * u
        return [1.0, u, u2, u2 * u]
    if derivative == 1:
        return [0.0, dt_inv, 2.0 * u * dt_inv, 3.0 * u * u * dt_inv]
    if derivative == 2:
        dt_inv2 = dt_inv * dt_inv
        return [0.0, 0.0, 2.0 * dt_inv2, 6.0 * u * dt_inv2]
    raise ValueError(f"Derivative order {derivative} not supported")


def blend_weights(U: list[float]) -> list[float]:
    """
    计算混合权重 B = U^T · M。

    Args:
        U: 单项式向量 (4,)

    Returns:
        4 个活动控制点各自的权重
    """
    return [sum(U[k] * _M[k][j] for k in range(ORDER)) for j in range(ORDER)]


def basis_weights(u: float, derivative: int = 0, dt_inv: float = 1.0) -> np.ndarray:
    """
    直接计算 u 处的基函数权重（数组形式）。

    Args:
        u: 段内归一化参数
        derivative: 导数阶数
        dt_inv: 节点间隔的倒数

    Returns:
        (4,) 权重数组
    """
    return np.array(blend_weights(monomial_vector(u, derivative, dt_inv)))


if __name__ == "__main__":
    print("=== 均匀三次B样条基函数测试 ===")

    for u in (0.0, 0.25, 0.5, 0.75):
        w = basis_weights(u)
        print(f"u={u:.2f}: 权重={np.round(w, 4)}, 和={w.sum():.6f}")

    # 导数权重之和应为 0（常数曲线导数为 0）
    for d in (1, 2):
        w = basis_weights(0.3, derivative=d)
        print(f"{d} 阶导数权重和: {w.sum():.2e}")
