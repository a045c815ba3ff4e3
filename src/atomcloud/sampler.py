r"""Metropolis–Hastings 点云采样

对未归一化的密度 :math:`f(\mathbf{r}) \ge 0` 做三维随机游走：

1. 提议：每个坐标加独立均匀抖动 :math:`[-\sigma/2, \sigma/2]`；
2. 接受：若 :math:`f' > f` 无条件接受（不消耗随机数）；否则以概率
   :math:`(f'/f)^p` 接受，:math:`p` 为锐度指数（p=1 即标准 MH，p=2 使点云更紧凑）；
   当前密度恰为 0 时比值记为 1（总是接受，用于走出奇异区）；
3. 预热（burn-in）若干步后进入采样阶段，每步（无论是否接受）都输出当前位置。

同一位置的重复输出正是高密度区域的正确表示。相邻样本存在马尔可夫相关，
对可视化用途是可接受的折衷。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

from .wavefunction import ZEFF_FLOOR, clamp_quantum_numbers, probability_density, real_probability_density

__all__ = [
    "SamplerConfig",
    "Walker",
    "metropolis_hastings",
    "generate_orbital_samples",
    "orbital_density",
    "step_scale",
    "scaled_start",
]

DensityFn = Callable[[float, float, float], float]

_DENSITY_KINDS = ("real", "complex")


@dataclass
class SamplerConfig:
    r"""采样参数。

    Attributes
    ----------
    burn_in : int
        预热步数（不输出）。
    sharpness : float
        接受率指数 :math:`p`；1 为物理密度，2 为视觉收紧（默认）。
    step_factor : float
        提议步长系数，步长 :math:`\sigma = \mathrm{step\_factor}\cdot n^2/Z_{\mathrm{eff}}`。
    start : tuple[float, float, float]
        游走起点，以轨道尺度 :math:`n^2/Z_{\mathrm{eff}}` 为单位（见 :func:`scaled_start`），
        不得为原点（非 s 态的密度奇点）。
    density : {"real", "complex"}
        使用实轨道（有方向瓣）还是复轨道密度。
    seed : int | None
        随机种子；``None`` 表示不可复现。
    """

    burn_in: int = 500
    sharpness: float = 2.0
    step_factor: float = 1.0
    start: tuple[float, float, float] = (1.0, 1.0, 1.0)
    density: str = "real"
    seed: int | None = None

    def __post_init__(self):
        if self.burn_in < 0:
            raise ValueError(f"burn_in 必须非负: {self.burn_in}")
        if not self.sharpness > 0:
            raise ValueError(f"sharpness 必须为正: {self.sharpness}")
        if not self.step_factor > 0:
            raise ValueError(f"step_factor 必须为正: {self.step_factor}")
        if self.density not in _DENSITY_KINDS:
            raise ValueError(f"未知的密度类型: {self.density!r}，可选 {_DENSITY_KINDS}")
        if len(self.start) != 3:
            raise ValueError("start 必须是三维坐标")
        if all(c == 0 for c in self.start):
            raise ValueError("start 不能是原点")


@dataclass
class Walker:
    """随机游走状态（仅由一次采样独占）。"""

    x: float
    y: float
    z: float
    prob: float

    @property
    def position(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


def _safe(value) -> float:
    """负值或非有限值按 0 处理。"""
    v = float(value)
    if not math.isfinite(v) or v < 0.0:
        return 0.0
    return v


def _step(walker: Walker, density: DensityFn, sigma: float, sharpness: float, rng: np.random.Generator) -> None:
    dx, dy, dz = (rng.random(3) - 0.5) * sigma
    nx, ny, nz = walker.x + dx, walker.y + dy, walker.z + dz
    next_prob = _safe(density(nx, ny, nz))
    ratio = 1.0 if walker.prob == 0.0 else next_prob / walker.prob
    if next_prob > walker.prob or rng.random() < ratio**sharpness:
        walker.x, walker.y, walker.z = nx, ny, nz
        walker.prob = next_prob


def metropolis_hastings(
    density: DensityFn,
    sigma: float,
    count: int,
    burn_in: int = 500,
    sharpness: float = 2.0,
    start: tuple[float, float, float] = (1.0, 1.0, 1.0),
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    r"""Metropolis–Hastings 随机游走采样。

    Parameters
    ----------
    density : callable
        ``density(x, y, z) -> float``，非负（负值/NaN/Inf 视作 0）。
    sigma : float
        提议步长 :math:`\sigma`（每轴均匀抖动宽度）。
    count : int
        输出样本数。
    burn_in : int, optional
        预热步数，默认 500。
    sharpness : float, optional
        接受率指数，默认 2。
    start : tuple, optional
        起点，默认 (1, 1, 1)。
    rng : numpy.random.Generator, optional
        随机数源；默认新建不可复现的生成器。

    Returns
    -------
    numpy.ndarray
        形状 ``(count, 3)`` 的位置数组，按生成顺序排列。

    Notes
    -----
    每次调用相互独立，游走器不跨调用保留。
    """
    if count < 0:
        raise ValueError(f"count 必须非负: {count}")
    if not sigma > 0:
        raise ValueError(f"sigma 必须为正: {sigma}")
    if rng is None:
        rng = np.random.default_rng()

    x0, y0, z0 = (float(c) for c in start)
    walker = Walker(x0, y0, z0, _safe(density(x0, y0, z0)))

    for _ in range(int(burn_in)):
        _step(walker, density, sigma, sharpness, rng)

    out = np.empty((int(count), 3), dtype=float)
    for i in range(int(count)):
        _step(walker, density, sigma, sharpness, rng)
        out[i] = walker.position
    return out


def orbital_density(n: int, l: int, m: int, zeff: float = 1.0, kind: str = "real") -> DensityFn:
    """构造 (n, l, m, Zeff) 轨道的标量密度函数。"""
    if kind == "real":
        return lambda x, y, z: real_probability_density(x, y, z, n, l, m, zeff)
    if kind == "complex":
        return lambda x, y, z: probability_density(x, y, z, n, l, m, zeff)
    raise ValueError(f"未知的密度类型: {kind!r}，可选 {_DENSITY_KINDS}")


def step_scale(n: int, zeff: float, step_factor: float = 1.0) -> float:
    r"""提议步长 :math:`\sigma = \mathrm{step\_factor}\cdot n^2 / Z_{\mathrm{eff}}`，与轨道尺度成正比。"""
    return step_factor * n * n / max(zeff, ZEFF_FLOOR)


def scaled_start(start: tuple[float, float, float], n: int, zeff: float) -> tuple[float, float, float]:
    r"""把以轨道尺度为单位的起点换算为 Bohr：:math:`\mathbf{r}_0 = \mathbf{s}\cdot n^2/Z_{\mathrm{eff}}`。

    起点与步长（:func:`step_scale`）同尺度，重原子内层轨道（半径约 0.01 Bohr）
    在固定步数的预热内同样能到达高密度区。
    """
    scale = n * n / max(zeff, ZEFF_FLOOR)
    return tuple(float(c) * scale for c in start)


def generate_orbital_samples(
    n: int,
    l: int,
    m: int,
    zeff: float = 1.0,
    count: int = 2000,
    sharpness: float | None = None,
    config: SamplerConfig | None = None,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """对单个轨道采样。

    Parameters
    ----------
    n, l, m : int
        量子数；非法组合先被裁剪（见 :func:`clamp_quantum_numbers`）。
    zeff : float, optional
        有效核电荷（低于下限时抬升）。
    count : int, optional
        样本数。
    sharpness : float, optional
        覆盖 ``config.sharpness``。
    config : SamplerConfig, optional
        其余采样参数；默认 ``SamplerConfig()``。
    rng : numpy.random.Generator, optional
        随机数源；默认由 ``config.seed`` 创建。

    Returns
    -------
    numpy.ndarray
        ``(count, 3)`` 坐标数组；需要扁平序列时用 ``.ravel()``。
    """
    cfg = config or SamplerConfig()
    n, l, m = clamp_quantum_numbers(n, l, m)
    zeff = max(float(zeff), ZEFF_FLOOR)
    p = cfg.sharpness if sharpness is None else sharpness
    if not p > 0:
        raise ValueError(f"sharpness 必须为正: {p}")
    if rng is None:
        rng = np.random.default_rng(cfg.seed)
    return metropolis_hastings(
        orbital_density(n, l, m, zeff, cfg.density),
        sigma=step_scale(n, zeff, cfg.step_factor),
        count=count,
        burn_in=cfg.burn_in,
        sharpness=p,
        start=scaled_start(cfg.start, n, zeff),
        rng=rng,
    )
