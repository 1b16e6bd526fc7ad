"""
parameters - 控制点参数存储

- ParameterStore: 连续可增长的 float64 缓冲区，按索引分配定长参数块
- SequenceHolder: 将外部提供的向量序列（优化器变量、符号变量等）包装成相同接口

两者都提供 parameter(i)，供样条视图按节点索引读取控制点。
"""

import numpy as np

from ..exceptions import OutOfBoundsError


class ParameterStore:
    """
    连续参数存储。

    所有参数块依次存放在同一个一维缓冲区中，容量不足时按倍数扩容。
    parameter(i) 返回缓冲区切片（视图），原地修改会直接写入存储；
    扩容会重新分配缓冲区，因此视图只在下一次 add_parameter 之前有效。
    """

    def __init__(self, capacity: int = 64):
        self._data = np.zeros(max(int(capacity), 1))
        self._offsets: list[int] = []
        self._sizes: list[int] = []
        self._used = 0

    def __len__(self) -> int:
        return len(self._offsets)

    @property
    def capacity(self) -> int:
        return len(self._data)

    def add_parameter(self, size: int) -> int:
        """
        分配一个新的参数块（初始化为 0）。

        Args:
            size: 参数块长度

        Returns:
            新参数块的索引
        """
        if size < 1:
            raise ValueError(f"Parameter size must be >= 1, got {size}")

        required = self._used + size
        if required > len(self._data):
            new_capacity = len(self._data)
            while new_capacity < required:
                new_capacity *= 2
            data = np.zeros(new_capacity)
            data[: self._used] = self._data[: self._used]
            self._data = data

        self._offsets.append(self._used)
        self._sizes.append(size)
        self._used = required
        return len(self._offsets) - 1

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._offsets):
            raise OutOfBoundsError(index, len(self._offsets))

    def parameter(self, index: int) -> np.ndarray:
        """返回第 index 个参数块的可写视图。"""
        self._check_index(index)
        offset = self._offsets[index]
        return self._data[offset : offset + self._sizes[index]]

    def size_of(self, index: int) -> int:
        self._check_index(index)
        return self._sizes[index]

    def as_array(self, size: int) -> np.ndarray:
        """
        将所有参数块视为 (N, size) 数组返回（拷贝）。

        仅当所有参数块长度都等于 size 时有效。
        """
        if any(s != size for s in self._sizes):
            raise ValueError(f"Not all parameter blocks have size {size}")
        return self._data[: self._used].reshape(-1, size).copy()


class SequenceHolder:
    """
    外部向量序列的只读包装。

    用于在优化器提供的变量（例如 casadi 符号向量或其他数组）上构造样条视图，
    此时控制点的标量类型由调用方决定。
    """

    def __init__(self, parameters):
        self._parameters = parameters

    def __len__(self) -> int:
        return len(self._parameters)

    def parameter(self, index: int):
        if not 0 <= index < len(self._parameters):
            raise OutOfBoundsError(index, len(self._parameters))
        return self._parameters[index]
