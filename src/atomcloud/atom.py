r"""整原子点云采样

对原子序数 Z 的每个占据轨道独立运行 Metropolis–Hastings 采样，
点数按轨道占据电子数分配（每电子点数恒定），并按 (n, l, m) 标注颜色。

并行策略
========

各轨道的随机游走相互独立：每个轨道从 ``numpy.random.SeedSequence.spawn``
得到独立随机流，可在进程池中并行；结果按轨道顺序拼接。
给定 ``seed`` 时，输出与是否并行无关。
"""

from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass

import numpy as np

from .constants import orbital_color
from .occupations import Orbital, electron_configuration
from .sampler import SamplerConfig, metropolis_hastings, orbital_density, scaled_start, step_scale

__all__ = [
    "SampleBatch",
    "point_budget",
    "sample_orbital",
    "sample_atom",
]


@dataclass
class SampleBatch:
    """按生成顺序排列的 (位置, 颜色) 序列。

    Attributes
    ----------
    positions : numpy.ndarray
        ``(N, 3)`` 坐标（Bohr）。
    colors : numpy.ndarray
        ``(N, 3)`` RGB 颜色。
    keys : numpy.ndarray
        ``(N, 3)`` 整数数组，每行为该点所属轨道的 (n, l, m)。
    """

    positions: np.ndarray
    colors: np.ndarray
    keys: np.ndarray

    def __len__(self):
        return int(self.positions.shape[0])

    def __iter__(self):
        for pos, key in zip(self.positions, self.keys):
            yield pos, tuple(int(k) for k in key)

    @classmethod
    def empty(cls) -> "SampleBatch":
        return cls(np.empty((0, 3)), np.empty((0, 3)), np.empty((0, 3), dtype=int))

    @classmethod
    def concatenate(cls, batches: list["SampleBatch"]) -> "SampleBatch":
        if not batches:
            return cls.empty()
        return cls(
            np.concatenate([b.positions for b in batches]),
            np.concatenate([b.colors for b in batches]),
            np.concatenate([b.keys for b in batches]),
        )

    def select(self, n: int, l: int, m: int | None = None) -> np.ndarray:
        """取出属于 (n, l[, m]) 的坐标。"""
        mask = (self.keys[:, 0] == n) & (self.keys[:, 1] == l)
        if m is not None:
            mask &= self.keys[:, 2] == m
        return self.positions[mask]


def point_budget(orbital: Orbital, count_per_electron: int) -> int:
    """轨道点数 = 每电子点数 × 占据电子数（非负）。"""
    return max(0, int(count_per_electron)) * max(0, orbital.electrons)


def sample_orbital(
    orbital: Orbital,
    count: int,
    config: SamplerConfig,
    rng: np.random.Generator,
) -> SampleBatch:
    """对单个占据轨道采样并打上颜色标签。"""
    if count <= 0:
        return SampleBatch.empty()
    positions = metropolis_hastings(
        orbital_density(orbital.n, orbital.l, orbital.m, orbital.zeff, config.density),
        sigma=step_scale(orbital.n, orbital.zeff, config.step_factor),
        count=count,
        burn_in=config.burn_in,
        sharpness=config.sharpness,
        start=scaled_start(config.start, orbital.n, orbital.zeff),
        rng=rng,
    )
    colors = np.tile(np.asarray(orbital_color(*orbital.key), dtype=float), (count, 1))
    keys = np.tile(np.asarray(orbital.key, dtype=int), (count, 1))
    return SampleBatch(positions, colors, keys)


def _sample_task(args) -> SampleBatch:
    orbital, count, config, seed_seq = args
    return sample_orbital(orbital, count, config, np.random.default_rng(seed_seq))


def sample_atom(
    Z: int,
    count_per_electron: int = 2000,
    config: SamplerConfig | None = None,
    workers: int | None = None,
    seed: int | None = None,
) -> SampleBatch:
    """对原子 Z 的全部占据轨道采样。

    Parameters
    ----------
    Z : int
        原子序数；Z ≤ 0 返回空批次。
    count_per_electron : int, optional
        每个电子的点数，默认 2000；≤ 0 时各轨道输出 0 点。
    config : SamplerConfig, optional
        采样参数；默认 ``SamplerConfig()``。
    workers : int, optional
        并行进程数；``None`` 或 ≤ 1 时顺序执行。
    seed : int, optional
        随机种子；默认取 ``config.seed``。

    Returns
    -------
    SampleBatch
        按轨道顺序拼接的样本，总点数为 ``count_per_electron × 电子数``。
    """
    cfg = config or SamplerConfig()
    if seed is None:
        seed = cfg.seed

    tasks = []
    remaining = int(Z)
    for orbital in electron_configuration(Z):
        if remaining <= 0:
            break
        tasks.append((orbital, point_budget(orbital, count_per_electron), cfg))
        remaining -= orbital.electrons

    if not tasks:
        return SampleBatch.empty()

    seeds = np.random.SeedSequence(seed).spawn(len(tasks))
    jobs = [(orb, count, c, s) for (orb, count, c), s in zip(tasks, seeds)]

    if workers is not None and workers > 1:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            batches = list(pool.map(_sample_task, jobs))
    else:
        batches = [_sample_task(job) for job in jobs]
    return SampleBatch.concatenate(batches)
