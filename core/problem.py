"""
problem - 面向非线性最小二乘优化器的参数块接口

- ParameterBlock: (轨迹, 节点索引, 长度) 三元组，不持有内存地址
- ParameterProblem: 优化器需实现的最小协议 add_parameter_block(block)
- LeastSquaresProblem: 基于 scipy.optimize.least_squares 的实现

求解过程中每次残差计算前，都会把当前优化变量直接写回轨迹存储，
因此残差函数只需像平常一样对轨迹求值。
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

import numpy as np
from scipy.optimize import OptimizeResult, least_squares

from ..config import EstimatorConfig
from ..exceptions import SplineError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ParameterBlock:
    """
    优化器可见的参数块。

    通过轨迹句柄和节点索引寻址，存储扩容后依然有效。

    Attributes:
        trajectory: 拥有该控制点的轨迹
        index: 节点索引
        size: 参数块长度
    """

    trajectory: Any
    index: int
    size: int

    @property
    def key(self) -> tuple[int, int]:
        return id(self.trajectory), self.index

    def value(self) -> np.ndarray:
        """当前值的可写视图。"""
        return self.trajectory.mutable_control_point(self.index)

    def assign(self, x: np.ndarray) -> None:
        self.value()[:] = x


class ParameterProblem(Protocol):
    def add_parameter_block(self, block: ParameterBlock) -> None: ...


class LeastSquaresProblem:
    """
    由参数块和残差块组成的非线性最小二乘问题。

    参数块按注册顺序拼接成优化向量，重复注册同一参数块会被忽略。
    """

    def __init__(self, config: EstimatorConfig | None = None):
        self.config = (config or EstimatorConfig()).validate()
        self._blocks: list[ParameterBlock] = []
        self._keys: set[tuple[int, int]] = set()
        self._constant: set[tuple[int, int]] = set()
        self._residuals: list[Callable[[], np.ndarray]] = []

    @property
    def parameter_blocks(self) -> list[ParameterBlock]:
        return list(self._blocks)

    @property
    def num_residual_blocks(self) -> int:
        return len(self._residuals)

    def add_parameter_block(self, block: ParameterBlock) -> None:
        if block.key in self._keys:
            return
        self._keys.add(block.key)
        self._blocks.append(block)

    def set_parameter_block_constant(self, block: ParameterBlock) -> None:
        """固定参数块，求解时不更新。"""
        self.add_parameter_block(block)
        self._constant.add(block.key)

    def add_residual_block(self, residual: Callable[[], np.ndarray]) -> None:
        """
        添加残差块。

        Args:
            residual: 无参函数，基于轨迹当前状态返回残差向量
        """
        self._residuals.append(residual)

    def _free_blocks(self) -> list[ParameterBlock]:
        return [b for b in self._blocks if b.key not in self._constant]

    def _gather(self, blocks: list[ParameterBlock]) -> np.ndarray:
        return np.concatenate([np.array(b.value(), dtype=float) for b in blocks])

    def _scatter(self, blocks: list[ParameterBlock], x: np.ndarray) -> None:
        offset = 0
        for b in blocks:
            b.assign(x[offset : offset + b.size])
            offset += b.size

    def _evaluate_residuals(self) -> np.ndarray:
        return np.concatenate([np.atleast_1d(np.asarray(r(), dtype=float)) for r in self._residuals])

    def cost(self) -> float:
        """当前状态下的代价 0.5 * ||r||²。"""
        r = self._evaluate_residuals()
        return 0.5 * float(r @ r)

    def solve(self) -> OptimizeResult:
        """
        求解并把最优值写回轨迹。

        Returns:
            scipy OptimizeResult
        """
        blocks = self._free_blocks()
        if not blocks:
            raise SplineError("Problem has no free parameter blocks")
        if not self._residuals:
            raise SplineError("Problem has no residual blocks")

        def fun(x: np.ndarray) -> np.ndarray:
            self._scatter(blocks, x)
            return self._evaluate_residuals()

        x0 = self._gather(blocks)
        logger.debug(
            "Solving: %d parameter blocks (%d free), %d residual blocks",
            len(self._blocks), len(blocks), len(self._residuals),
        )
        result = least_squares(fun, x0, **self.config.solver_kwargs())
        self._scatter(blocks, result.x)
        logger.debug("Solver finished: status=%d cost=%.3e nfev=%d", result.status, result.cost, result.nfev)
        return result
