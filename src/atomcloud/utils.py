from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.integrate import cumulative_trapezoid

from .constants import BOHR_RADIUS_ANGSTROM
from .wavefunction import ZEFF_FLOOR, radial_probability

__all__ = [
    "radial_grid",
    "OrbitalExtent",
    "orbital_extent",
    "mean_radius",
    "radial_cdf",
    "radial_distances",
]


@dataclass(frozen=True)
class OrbitalExtent:
    """轨道空间尺度（Bohr 与 Å）。"""

    expected_radius: float
    max_extent: float

    @property
    def in_angstrom(self) -> float:
        return self.max_extent * BOHR_RADIUS_ANGSTROM


def orbital_extent(n: int, l: int, zeff: float = 1.0) -> OrbitalExtent:
    r"""氢样轨道的期望半径与显示范围。

    .. math::
        \langle r \rangle = \frac{3n^2 - \ell(\ell+1)}{2 Z_{\mathrm{eff}}}

    显示范围取 :math:`1.5\langle r \rangle`（约包含 95% 概率）。
    """
    expected = (3.0 * n * n - l * (l + 1)) / (2.0 * zeff)
    return OrbitalExtent(expected_radius=expected, max_extent=1.5 * expected)


def radial_grid(n: int, zeff: float = 1.0, npts: int = 4000) -> np.ndarray:
    r"""覆盖 :math:`[0, (12 n^2 + 10)/Z_{\mathrm{eff}}]` 的均匀径向网格。

    上限不少于 :math:`8\langle r \rangle`，氢样轨道在此之外的概率可忽略；
    随 :math:`1/Z_{\mathrm{eff}}` 收缩，重原子内层轨道也有足够的网格点。
    """
    if npts < 2:
        raise ValueError("npts 至少为 2")
    return np.linspace(0.0, (12.0 * n * n + 10.0) / max(zeff, ZEFF_FLOOR), npts)


def mean_radius(n: int, l: int, zeff: float = 1.0, r: np.ndarray | None = None) -> float:
    r"""数值积分 :math:`\langle r \rangle = \int r\,P(r)\,dr`（用于核对 :func:`orbital_extent`）。"""
    if r is None:
        r = radial_grid(n, zeff)
    P = radial_probability(r, n, l, zeff)
    return float(np.trapezoid(r * P, r))


def radial_cdf(n: int, l: int, zeff: float = 1.0, r: np.ndarray | None = None) -> tuple[np.ndarray, np.ndarray]:
    r"""径向累积分布 :math:`F(r) = \int_0^r P(r')\,dr'`。

    Parameters
    ----------
    n, l : int
        量子数。
    zeff : float, optional
        有效核电荷。
    r : numpy.ndarray, optional
        单调网格；默认由 :func:`radial_grid` 生成。

    Returns
    -------
    r : numpy.ndarray
        网格。
    F : numpy.ndarray
        累积分布，末端归一到 1。

    Notes
    -----
    仅依赖径向部分，适用于 sharpness=1 的采样结果（实轨道与复轨道的径向边缘分布相同）。
    """
    if r is None:
        r = radial_grid(n, zeff)
    P = radial_probability(r, n, l, zeff)
    F = cumulative_trapezoid(P, r, initial=0.0)
    return r, F / F[-1]


def radial_distances(points: np.ndarray) -> np.ndarray:
    """``(N, 3)`` 坐标数组到原点的距离。"""
    return np.linalg.norm(np.asarray(points, dtype=float).reshape(-1, 3), axis=1)
