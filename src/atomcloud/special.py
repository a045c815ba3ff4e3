r"""特殊函数模块

本模块提供氢样波函数所需的三个基本数学函数：

- **阶乘** (`factorial`): 带单调扩展缓存的 :math:`k!`
- **广义 Laguerre 多项式** (`laguerre`): 径向部分 :math:`L_n^{\alpha}(x)`
- **连带 Legendre 多项式** (`legendre`): 角向部分 :math:`P_\ell^{|m|}(x)`

数值策略
========

- 阶乘缓存只追加不重算：已缓存的项永不再计算，扩展时持锁，读取无锁。
- Laguerre 与 Legendre 均采用三项递推，避免显式展开带来的大数相消。
- 所有函数对越界输入返回约定值（1 或 0）而非抛出异常，
  以容忍界面编辑过程中出现的瞬时非法量子数。

References
----------
.. [NR] Press, W. H. et al. (2007)
   "Numerical Recipes", 3rd ed., Section 6.7
.. [AS] Abramowitz, M. & Stegun, I. A. (1964)
   "Handbook of Mathematical Functions", Chapter 22
"""

from __future__ import annotations

import threading

import numpy as np

__all__ = [
    "FactorialCache",
    "factorial",
    "laguerre",
    "legendre",
    "default_factorial_cache",
]


class FactorialCache:
    """阶乘缓存（只追加）。

    Attributes
    ----------
    steps : int
        累计执行的递推步数（每计算一个新的 :math:`k!` 计 1 次），
        用于验证缓存从不重算已有项。

    Notes
    -----
    - 内部以 Python ``int`` 存储，结果精确。
    - 扩展缓存时持有 :class:`threading.Lock`；读取已缓存项不加锁。

    Examples
    --------
    >>> cache = FactorialCache()
    >>> cache(5)
    120
    >>> cache.steps
    5
    >>> cache(3), cache.steps  # 命中缓存，不再递推
    (6, 5)
    """

    def __init__(self):
        """初始化缓存，仅含 0! = 1。"""
        self._values: list[int] = [1]
        self._lock = threading.Lock()
        self.steps = 0

    def __call__(self, k: int) -> int:
        k = int(k)
        if k < 0:
            return 1
        values = self._values
        if k < len(values):
            return values[k]
        with self._lock:
            # 持锁后重新检查：其他线程可能已扩展
            start = len(self._values)
            res = self._values[-1]
            for i in range(start, k + 1):
                res *= i
                self._values.append(res)
                self.steps += 1
            return self._values[k]

    def clear(self):
        """清空缓存（恢复到仅含 0!）。"""
        with self._lock:
            self._values = [1]
            self.steps = 0

    def __len__(self):
        """返回已缓存的项数。"""
        return len(self._values)


default_factorial_cache = FactorialCache()


def factorial(k: int, cache: FactorialCache | None = None) -> int:
    """返回 :math:`k!`；负数输入返回 1。

    Parameters
    ----------
    k : int
        非负整数。
    cache : FactorialCache, optional
        使用的缓存对象；默认使用模块级共享缓存 ``default_factorial_cache``。
    """
    if cache is None:
        cache = default_factorial_cache
    return cache(k)


def laguerre(n: int, alpha: float, x):
    r"""广义 Laguerre 多项式 :math:`L_n^{\alpha}(x)`。

    使用三项递推：

    .. math::

        (k+1) L_{k+1}^{\alpha} = (2k+1+\alpha-x) L_k^{\alpha} - (k+\alpha) L_{k-1}^{\alpha}

    初值 :math:`L_0^{\alpha}=1`，:math:`L_1^{\alpha}=1+\alpha-x`。

    Parameters
    ----------
    n : int
        多项式阶数（n ≥ 0；负数按 0 处理）。
    alpha : float
        广义参数 :math:`\alpha`（径向波函数中取 :math:`2\ell+1`）。
    x : float or numpy.ndarray
        自变量，支持数组广播。

    Returns
    -------
    float or numpy.ndarray
        :math:`L_n^{\alpha}(x)`，形状与 ``x`` 一致。

    Notes
    -----
    n=0、1 时直接返回初值，结果精确；氢样问题所需 n ≤ 6 范围内递推稳定。

    Examples
    --------
    >>> laguerre(1, 1.0, 0.5)
    1.5
    """
    if n <= 0:
        return np.ones_like(x, dtype=float) if isinstance(x, np.ndarray) else 1.0
    l_prev = 1.0
    l_curr = 1.0 + alpha - x
    for k in range(1, n):
        l_next = ((2 * k + 1 + alpha - x) * l_curr - (k + alpha) * l_prev) / (k + 1)
        l_prev = l_curr
        l_curr = l_next
    return l_curr


def legendre(l: int, m: int, x):
    r"""连带 Legendre 多项式 :math:`P_\ell^{|m|}(x)`，含 Condon–Shortley 相位。

    计算步骤：

    1. 闭式种子 :math:`P_m^m(x) = (-1)^m (2m-1)!!\,(1-x^2)^{m/2}`
    2. 上一阶 :math:`P_{m+1}^m(x) = x(2m+1) P_m^m(x)`
    3. 三项递推 :math:`(\ell-m) P_\ell^m = x(2\ell-1) P_{\ell-1}^m - (\ell+m-1) P_{\ell-2}^m`

    Parameters
    ----------
    l : int
        角动量量子数 :math:`\ell \geq 0`。
    m : int
        磁量子数；只使用 :math:`|m|`。
    x : float or numpy.ndarray
        :math:`\cos\theta \in [-1, 1]`。

    Returns
    -------
    float or numpy.ndarray
        :math:`P_\ell^{|m|}(x)`；当 :math:`|m| > \ell` 时返回 0。

    Examples
    --------
    >>> float(legendre(1, 1, 0.0))
    -1.0
    >>> legendre(1, 2, 0.3)
    0.0
    """
    m_abs = abs(int(m))
    if m_abs > l:
        return np.zeros_like(x, dtype=float) if isinstance(x, np.ndarray) else 0.0

    pmm = np.ones_like(x, dtype=float) if isinstance(x, np.ndarray) else 1.0
    if m_abs > 0:
        somx2 = np.sqrt(np.clip((1.0 - x) * (1.0 + x), 0.0, None))
        fact = 1.0
        for _ in range(m_abs):
            pmm = -pmm * fact * somx2
            fact += 2.0
    if l == m_abs:
        return pmm

    pmmp1 = x * (2 * m_abs + 1) * pmm
    if l == m_abs + 1:
        return pmmp1

    pll = pmmp1
    for ll in range(m_abs + 2, l + 1):
        pll = (x * (2 * ll - 1) * pmmp1 - (ll + m_abs - 1) * pmm) / (ll - m_abs)
        pmm = pmmp1
        pmmp1 = pll
    return pll
