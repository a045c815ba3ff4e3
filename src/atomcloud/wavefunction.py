r"""氢样波函数与概率密度

本模块给出有效核电荷 :math:`Z_{\mathrm{eff}}` 下氢样单电子态的概率密度：

.. math::

    \psi_{n\ell m}(\mathbf{r}) = R_{n\ell}(r)\, Y_{\ell m}(\theta, \phi)

径向部分（原子单位，Bohr）：

.. math::

    R_{n\ell}(r) = \sqrt{\left(\frac{2Z}{n}\right)^3 \frac{(n-\ell-1)!}{2n\,(n+\ell)!}}
    \, e^{-\rho/2} \rho^{\ell} L_{n-\ell-1}^{2\ell+1}(\rho), \qquad \rho = \frac{2 Z r}{n}

提供两种角向表示：

- **复轨道** (`probability_density`): :math:`|Y_{\ell m}|^2`，与方位角 :math:`\phi` 无关；
- **实轨道** (`real_wavefunction`): 以方向余弦表示的实组合（px/py/dxz 等），
  具有方向性瓣，返回带符号振幅。

所有函数接受标量或 numpy 数组（广播），原点附近（:math:`r < 10^{-6}`）返回 0。
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .special import FactorialCache, factorial, laguerre, legendre

__all__ = [
    "QuantumState",
    "clamp_quantum_numbers",
    "radial_wavefunction",
    "radial_probability",
    "probability_density",
    "real_wavefunction",
    "real_probability_density",
    "R_FLOOR",
    "ZEFF_FLOOR",
]

# 原点奇点截断半径（Bohr）
R_FLOOR = 1e-6
# 有效核电荷下限
ZEFF_FLOOR = 0.1

_INV_SQRT_4PI = 1.0 / np.sqrt(4.0 * np.pi)


def clamp_quantum_numbers(n: int, l: int, m: int) -> tuple[int, int, int]:
    """把任意整数三元组裁剪为合法量子数。

    规则：``n >= 1``；``l`` 裁剪到 ``[0, n-1]``；``|m|`` 裁剪到 ``l``（保留符号）。

    Examples
    --------
    >>> clamp_quantum_numbers(2, 3, -3)
    (2, 1, -1)
    """
    n = max(int(n), 1)
    l = min(max(int(l), 0), n - 1)
    m = int(m)
    if abs(m) > l:
        m = l if m > 0 else -l
    return n, l, m


@dataclass(frozen=True)
class QuantumState:
    r"""氢样单电子态 :math:`(n, \ell, m, Z_{\mathrm{eff}})`。

    Attributes
    ----------
    n : int
        主量子数（n ≥ 1）。
    l : int
        角动量量子数（0 ≤ l < n）。
    m : int
        磁量子数（|m| ≤ l）。
    zeff : float
        有效核电荷；低于 ``ZEFF_FLOOR`` 时被抬升到下限。

    Notes
    -----
    构造时校验 :math:`\ell < n` 与 :math:`|m| \le \ell`，不满足则抛出 ``ValueError``；
    需要宽松行为时请使用 :meth:`clamped`。
    """

    n: int
    l: int
    m: int
    zeff: float = 1.0

    def __post_init__(self):
        if self.n < 1:
            raise ValueError(f"主量子数必须为正: n={self.n}")
        if not 0 <= self.l < self.n:
            raise ValueError(f"要求 0 <= l < n: n={self.n}, l={self.l}")
        if abs(self.m) > self.l:
            raise ValueError(f"要求 |m| <= l: l={self.l}, m={self.m}")
        if not self.zeff > ZEFF_FLOOR:
            object.__setattr__(self, "zeff", ZEFF_FLOOR)

    @classmethod
    def clamped(cls, n: int, l: int, m: int, zeff: float = 1.0) -> "QuantumState":
        """先用 :func:`clamp_quantum_numbers` 裁剪，再构造。"""
        return cls(*clamp_quantum_numbers(n, l, m), float(zeff))

    def density(self, x, y, z):
        """复轨道概率密度，见 :func:`probability_density`。"""
        return probability_density(x, y, z, self.n, self.l, self.m, self.zeff)

    def real_density(self, x, y, z):
        """实轨道概率密度，见 :func:`real_probability_density`。"""
        return real_probability_density(x, y, z, self.n, self.l, self.m, self.zeff)


def radial_wavefunction(r, n: int, l: int, zeff: float = 1.0, cache: FactorialCache | None = None):
    r"""径向波函数 :math:`R_{n\ell}(r)`（已归一化：:math:`\int R^2 r^2 dr = 1`）。

    Parameters
    ----------
    r : float or numpy.ndarray
        径向坐标（Bohr）。
    n, l : int
        主量子数与角动量量子数。
    zeff : float, optional
        有效核电荷，默认 1（氢原子）。
    cache : FactorialCache, optional
        阶乘缓存；默认使用共享缓存。

    Returns
    -------
    float or numpy.ndarray
        :math:`R_{n\ell}(r)`。
    """
    rho = 2.0 * zeff * r / n
    prefactor = np.sqrt(
        (2.0 * zeff / n) ** 3
        * factorial(n - l - 1, cache)
        / (2.0 * n * factorial(n + l, cache))
    )
    lag = laguerre(n - l - 1, 2 * l + 1, rho)
    return prefactor * np.exp(-rho / 2.0) * rho**l * lag


def radial_probability(r, n: int, l: int, zeff: float = 1.0, cache: FactorialCache | None = None):
    r"""径向概率分布 :math:`P(r) = r^2 R_{n\ell}(r)^2`，在 :math:`[0,\infty)` 上积分为 1。"""
    R = radial_wavefunction(r, n, l, zeff, cache)
    return r * r * R * R


def probability_density(x, y, z, n: int, l: int, m: int, zeff: float = 1.0, cache: FactorialCache | None = None):
    r"""复轨道概率密度 :math:`|\psi_{n\ell m}|^2`。

    .. math::

        |\psi|^2 = \left[R_{n\ell}(r)\, N_{\ell m} P_\ell^{|m|}(\cos\theta)\right]^2,
        \qquad N_{\ell m} = \sqrt{\frac{2\ell+1}{4\pi}\frac{(\ell-|m|)!}{(\ell+|m|)!}}

    Parameters
    ----------
    x, y, z : float or numpy.ndarray
        笛卡尔坐标（Bohr），支持广播。
    n, l, m : int
        量子数，调用方需保证合法（见 :func:`clamp_quantum_numbers`）。
    zeff : float, optional
        有效核电荷。
    cache : FactorialCache, optional
        阶乘缓存（径向与角向归一化共用）；默认使用模块级共享缓存。

    Returns
    -------
    float or numpy.ndarray
        非负概率密度；:math:`r <` ``R_FLOOR`` 处为 0。

    Notes
    -----
    单一 m 的复本征态密度绕 z 轴旋转对称，与 :math:`\phi` 无关。
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    z = np.asarray(z, dtype=float)
    r = np.sqrt(x * x + y * y + z * z)
    r_safe = np.maximum(r, R_FLOOR)
    cos_theta = np.clip(z / r_safe, -1.0, 1.0)

    m_abs = abs(int(m))
    R = radial_wavefunction(r_safe, n, l, zeff, cache)
    norm_y = np.sqrt((2 * l + 1) / (4.0 * np.pi) * factorial(l - m_abs, cache) / factorial(l + m_abs, cache))
    Y_mag = norm_y * legendre(l, m_abs, cos_theta)

    psi = R * Y_mag
    dens = np.where(r < R_FLOOR, 0.0, psi * psi)
    return dens if dens.ndim else float(dens)


def _real_angular(l: int, m: int, dx, dy, dz):
    """实球谐函数（方向余弦表示）。l > 2 退化为 s 型常数。"""
    if l == 1:
        N = np.sqrt(3.0 / (4.0 * np.pi))
        if m == 0:
            return N * dz  # pz
        if m == 1:
            return N * dx  # px
        if m == -1:
            return N * dy  # py
        return np.zeros_like(dz)
    if l == 2:
        if m == 0:
            return np.sqrt(5.0 / (16.0 * np.pi)) * (3.0 * dz * dz - 1.0)  # dz2
        if m == 1:
            return np.sqrt(15.0 / (4.0 * np.pi)) * dx * dz  # dxz
        if m == -1:
            return np.sqrt(15.0 / (4.0 * np.pi)) * dy * dz  # dyz
        if m == 2:
            return np.sqrt(15.0 / (16.0 * np.pi)) * (dx * dx - dy * dy)  # dx2-y2
        if m == -2:
            return np.sqrt(15.0 / (4.0 * np.pi)) * dx * dy  # dxy
        return np.zeros_like(dz)
    # s，以及 f 及更高（已知简化：不含真实 f 轨道角向函数）
    return np.full_like(dz, _INV_SQRT_4PI)


def real_wavefunction(x, y, z, n: int, l: int, m: int, zeff: float = 1.0, cache: FactorialCache | None = None):
    r"""实轨道波函数振幅 :math:`\psi(\mathbf{r})`（带符号）。

    角向部分直接用方向余弦 :math:`(x/r, y/r, z/r)` 表示：

    - s: :math:`1/\sqrt{4\pi}`
    - p: m=0 → z 轴，m=+1 → x 轴，m=-1 → y 轴
    - d: m=0 → :math:`d_{z^2}`，±1 → :math:`d_{xz}/d_{yz}`，
      +2 → :math:`d_{x^2-y^2}`，-2 → :math:`d_{xy}`

    Parameters
    ----------
    x, y, z : float or numpy.ndarray
        笛卡尔坐标（Bohr）。
    n, l, m : int
        量子数。
    zeff : float, optional
        有效核电荷。
    cache : FactorialCache, optional
        阶乘缓存，传给 :func:`radial_wavefunction`。

    Returns
    -------
    float or numpy.ndarray
        带符号振幅；:math:`r <` ``R_FLOOR`` 处为 0。

    Notes
    -----
    **已知限制**: :math:`\ell > 2` 的角向部分按 s 型常数处理（f 轨道呈球形分布）。
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    z = np.asarray(z, dtype=float)
    r = np.sqrt(x * x + y * y + z * z)
    r_safe = np.maximum(r, R_FLOOR)

    R = radial_wavefunction(r_safe, n, l, zeff, cache)
    Y = _real_angular(l, int(m), x / r_safe, y / r_safe, z / r_safe)
    psi = np.where(r < R_FLOOR, 0.0, R * Y)
    return psi if psi.ndim else float(psi)


def real_probability_density(x, y, z, n: int, l: int, m: int, zeff: float = 1.0, cache: FactorialCache | None = None):
    """实轨道概率密度 :math:`\\psi^2`。"""
    psi = real_wavefunction(x, y, z, n, l, m, zeff, cache)
    return psi * psi
