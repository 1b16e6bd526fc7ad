"""
spline_base 与 parameters 模块单元测试
"""

import numpy as np
import pytest

from uniform_r3_spline.core.parameters import ParameterStore, SequenceHolder
from uniform_r3_spline.core.spline_base import SplineMeta
from uniform_r3_spline.exceptions import OutOfBoundsError, OutOfRangeError


class TestSplineMeta:
    """节点元数据测试"""

    def test_index_and_interpolation_amount(self):
        """测试 t=2.5 映射到 i0=2, u=0.5"""
        meta = SplineMeta(dt=1.0, t0=0.0, n=6)
        i0, u = meta.index_and_interpolation_amount(2.5)
        assert i0 == 2
        assert u == pytest.approx(0.5)

    def test_index_with_offset_and_spacing(self):
        """测试非零 t0 和非单位 dt"""
        meta = SplineMeta(dt=0.25, t0=0.5, n=10)
        i0, u = meta.index_and_interpolation_amount(1.1)
        assert i0 == 2
        assert u == pytest.approx(0.4)

    def test_negative_index_before_t0(self):
        """测试 t < t0 得到负索引，u 仍在 [0, 1)"""
        meta = SplineMeta(dt=1.0, t0=0.0, n=6)
        i0, u = meta.index_and_interpolation_amount(-0.25)
        assert i0 == -1
        assert u == pytest.approx(0.75)

    @pytest.mark.parametrize("t", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_time(self, t):
        """测试 inf / NaN 时间抛出 OutOfRangeError"""
        meta = SplineMeta(dt=1.0, t0=0.0, n=6)
        with pytest.raises(OutOfRangeError):
            meta.index_and_interpolation_amount(t)

    def test_valid_time_range(self):
        """测试有效区间 [t0, t0 + (n-3)*dt)"""
        meta = SplineMeta(dt=0.5, t0=1.0, n=7)
        assert meta.min_time == 1.0
        assert meta.max_time == pytest.approx(3.0)

    def test_empty_range_with_few_knots(self):
        """测试节点数不足时区间为空"""
        meta = SplineMeta(dt=1.0, t0=0.0, n=3)
        assert meta.max_time <= meta.min_time


class TestParameterStore:
    """参数存储测试"""

    def test_add_and_read(self):
        """测试分配后参数初始化为 0 且可写"""
        store = ParameterStore()
        i = store.add_parameter(3)
        assert i == 0
        np.testing.assert_array_equal(store.parameter(i), np.zeros(3))

        store.parameter(i)[:] = [1.0, 2.0, 3.0]
        np.testing.assert_array_equal(store.parameter(i), [1.0, 2.0, 3.0])

    def test_growth_preserves_values(self):
        """测试扩容后已有参数不变"""
        store = ParameterStore(capacity=2)
        for k in range(20):
            i = store.add_parameter(3)
            store.parameter(i)[:] = k

        assert len(store) == 20
        assert store.capacity >= 60
        for k in range(20):
            np.testing.assert_array_equal(store.parameter(k), np.full(3, k))

    def test_mixed_sizes(self):
        """测试不同长度的参数块"""
        store = ParameterStore()
        a = store.add_parameter(2)
        b = store.add_parameter(5)
        assert store.size_of(a) == 2
        assert store.parameter(b).shape == (5,)
        with pytest.raises(ValueError):
            store.as_array(3)

    def test_as_array(self):
        """测试导出 (N, size) 拷贝"""
        store = ParameterStore()
        for k in range(4):
            store.parameter(store.add_parameter(3))[:] = [k, 2 * k, 3 * k]
        arr = store.as_array(3)
        assert arr.shape == (4, 3)
        arr[0] = 99.0
        np.testing.assert_array_equal(store.parameter(0), np.zeros(3))

    def test_out_of_bounds(self):
        """测试越界访问抛出 OutOfBoundsError"""
        store = ParameterStore()
        store.add_parameter(3)
        with pytest.raises(OutOfBoundsError):
            store.parameter(1)
        with pytest.raises(IndexError):
            store.parameter(-1)

    def test_invalid_size(self):
        """测试非法参数长度"""
        with pytest.raises(ValueError):
            ParameterStore().add_parameter(0)


class TestSequenceHolder:
    """外部序列包装测试"""

    def test_reads_by_reference(self):
        """测试返回原对象（不拷贝）"""
        points = [np.zeros(3), np.ones(3)]
        holder = SequenceHolder(points)
        assert holder.parameter(1) is points[1]
        assert len(holder) == 2

    def test_out_of_bounds(self):
        holder = SequenceHolder([np.zeros(3)])
        with pytest.raises(OutOfBoundsError):
            holder.parameter(1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
