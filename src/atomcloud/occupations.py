r"""电子组态与 Slater 屏蔽

按 Aufbau 顺序填充子壳层，把每个子壳层的电子分配到方向上可区分的轨道
（m 的显示顺序为 0, +1, -1, +2, -2, ...），并用简化 Slater 规则计算
每个电子感受到的有效核电荷：

.. math::

    Z_{\mathrm{eff}} = \max(Z - S,\ 0.1)

屏蔽常数 :math:`S` 按主量子数分组（简化，不区分 (ns,np) 与 nd/nf 组）：

- 同一 n 的其他电子：每个 0.35（n=1 时为 0.30）
- n-1 壳层电子：每个 0.85
- n-2 及更内层电子：每个 1.00
- 更外层电子：0
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field

from .wavefunction import ZEFF_FLOOR

__all__ = [
    "SUBSHELL_ORDER",
    "SUBSHELL_LABELS",
    "Subshell",
    "Orbital",
    "fill_subshells",
    "display_m_order",
    "slater_screening",
    "electron_configuration",
    "configuration_string",
    "max_electrons",
]


# Aufbau 填充顺序 (n, l, 容量)
SUBSHELL_ORDER: tuple[tuple[int, int, int], ...] = (
    (1, 0, 2),
    (2, 0, 2),
    (2, 1, 6),
    (3, 0, 2),
    (3, 1, 6),
    (4, 0, 2),
    (3, 2, 10),
    (4, 1, 6),
    (5, 0, 2),
    (4, 2, 10),
    (5, 1, 6),
    (6, 0, 2),
    (4, 3, 14),
    (5, 2, 10),
    (6, 1, 6),
    (7, 0, 2),
    (5, 3, 14),
    (6, 2, 10),
)

SUBSHELL_LABELS = {0: "s", 1: "p", 2: "d", 3: "f"}

# 实轨道名（与 wavefunction.real_wavefunction 的 m 约定一致）
_ORIENTATION_LABELS: dict[tuple[int, int], str] = {
    (0, 0): "",
    (1, 0): "z",
    (1, 1): "x",
    (1, -1): "y",
    (2, 0): "z2",
    (2, 1): "xz",
    (2, -1): "yz",
    (2, 2): "x2-y2",
    (2, -2): "xy",
}


def max_electrons() -> int:
    """填充表可容纳的最大电子数。"""
    return sum(cap for _n, _l, cap in SUBSHELL_ORDER)


@dataclass
class Subshell:
    r"""子壳层 :math:`(n, \ell)` 的占据信息。

    Attributes
    ----------
    n : int
        主量子数。
    l : int
        角动量量子数。
    capacity : int
        容量 :math:`2(2\ell+1)`。
    electrons : int
        占据电子数（0 < electrons ≤ capacity）。
    zeff : float | None
        Slater 规则给出的有效核电荷；构造后由 :func:`electron_configuration` 填入。
    """

    n: int
    l: int
    capacity: int
    electrons: int
    zeff: float | None = None

    @property
    def label(self) -> str:
        return f"{self.n}{SUBSHELL_LABELS.get(self.l, '?')}"

    @property
    def n_orbitals(self) -> int:
        """被占据的可区分轨道数 ``min(electrons, 2l+1)``。"""
        return min(self.electrons, 2 * self.l + 1)


@dataclass(frozen=True)
class Orbital:
    """子壳层中的一个空间取向（固定 m），可容纳 1 或 2 个电子。

    Attributes
    ----------
    n, l, m : int
        量子数；m 取自 :func:`display_m_order`。
    zeff : float
        有效核电荷。
    electrons : int
        占据该取向的电子数（1 或 2）。
    """

    n: int
    l: int
    m: int
    zeff: float
    electrons: int = field(default=1)

    @property
    def key(self) -> tuple[int, int, int]:
        """颜色/分组键 (n, l, m)。"""
        return (self.n, self.l, self.m)

    @property
    def label(self) -> str:
        base = f"{self.n}{SUBSHELL_LABELS.get(self.l, '?')}"
        suffix = _ORIENTATION_LABELS.get((self.l, self.m))
        if suffix is None:
            suffix = f"m{self.m:+d}"
        return f"{base}_{suffix}" if suffix else base


def display_m_order(l: int) -> list[int]:
    """方向可区分的 m 显示顺序：0, +1, -1, +2, -2, ...

    Examples
    --------
    >>> display_m_order(2)
    [0, 1, -1, 2, -2]
    """
    order = [0]
    for k in range(1, l + 1):
        order.extend((k, -k))
    return order


def fill_subshells(Z: int) -> list[Subshell]:
    """按 Aufbau 顺序把 Z 个电子填入子壳层。

    Parameters
    ----------
    Z : int
        电子数（中性原子即原子序数）。

    Returns
    -------
    list[Subshell]
        按填充顺序排列的非空子壳层；Z ≤ 0 时为空列表。

    Notes
    -----
    超出填充表容量（见 :func:`max_electrons`）时只填能容纳的部分，并发出 ``RuntimeWarning``。
    """
    remaining = max(0, int(Z))
    subshells: list[Subshell] = []
    for n, l, cap in SUBSHELL_ORDER:
        if remaining <= 0:
            break
        fill = min(cap, remaining)
        subshells.append(Subshell(n=n, l=l, capacity=cap, electrons=fill))
        remaining -= fill
    if remaining > 0:
        warnings.warn(
            f"Z={Z} 超出填充表容量 ({max_electrons()})，多余的 {remaining} 个电子被忽略",
            RuntimeWarning,
            stacklevel=2,
        )
    return subshells


def slater_screening(n: int, subshells: list[Subshell]) -> float:
    """主量子数为 n 的一个电子所受的屏蔽常数 S（已排除自身）。

    Parameters
    ----------
    n : int
        目标电子的主量子数。
    subshells : list[Subshell]
        完整组态（须包含目标电子本身）。
    """
    same = 0.30 if n == 1 else 0.35
    S = 0.0
    for sub in subshells:
        if sub.n == n:
            S += same * sub.electrons
        elif sub.n == n - 1:
            S += 0.85 * sub.electrons
        elif sub.n < n - 1:
            S += 1.00 * sub.electrons
    # 排除自身
    return S - same


def electron_configuration(Z: int) -> list[Orbital]:
    """原子序数 Z 的电子组态：带 Zeff 的可区分轨道列表。

    Parameters
    ----------
    Z : int
        原子序数（实际使用范围 1–92）。

    Returns
    -------
    list[Orbital]
        按子壳层填充顺序、子壳层内按 m 显示顺序排列的轨道。
        各轨道 ``electrons`` 之和等于 ``min(Z, max_electrons())``；Z ≤ 0 时为空。

    Notes
    -----
    - 子壳层内第 i 个电子放在第 ``i mod (2l+1)`` 个取向上，先铺满各取向再成对
      （仅用于视觉区分，不涉及自旋）。
    - 示例:
      - C (Z=6): 1s² 2s² 2p²，2p 占据 m=0 与 m=+1 各 1 个电子
      - Ne (Z=10): 2p 三个取向各 2 个电子

    Examples
    --------
    >>> [(o.label, o.electrons) for o in electron_configuration(6)]
    [('1s', 2), ('2s', 2), ('2p_z', 1), ('2p_x', 1)]
    """
    subshells = fill_subshells(Z)
    for sub in subshells:
        sub.zeff = max(Z - slater_screening(sub.n, subshells), ZEFF_FLOOR)

    orbitals: list[Orbital] = []
    for sub in subshells:
        n_slots = 2 * sub.l + 1
        counts = [0] * n_slots
        for i in range(sub.electrons):
            counts[i % n_slots] += 1
        for m, count in zip(display_m_order(sub.l), counts):
            if count > 0:
                orbitals.append(Orbital(n=sub.n, l=sub.l, m=m, zeff=sub.zeff, electrons=count))
    return orbitals


def configuration_string(Z: int) -> str:
    """组态的常用记法，例如 ``"1s2 2s2 2p2"``。"""
    return " ".join(f"{sub.label}{sub.electrons}" for sub in fill_subshells(Z))
