"""atomcloud 包
=================

氢样原子电子云的概率密度计算与 Metropolis–Hastings 点云采样。

主要组成：

- 特殊函数：带缓存的阶乘、广义 Laguerre 多项式、连带 Legendre 多项式
- 波函数：复轨道密度与实轨道（方向瓣）振幅
- 电子组态：Aufbau 填充与简化 Slater 规则有效核电荷
- 采样：Metropolis–Hastings 随机游走与整原子点云

注：本项目所有文档与注释均使用中文，Docstring 采用 Sphinx + NumPy 风格，公式使用 ``:math:`` 标记。
长度单位均为 Bohr（原子单位）。
"""

from atomcloud.special import FactorialCache, factorial, laguerre, legendre
from atomcloud.wavefunction import (
    QuantumState,
    clamp_quantum_numbers,
    probability_density,
    real_probability_density,
    real_wavefunction,
)
from atomcloud.occupations import Orbital, Subshell, electron_configuration
from atomcloud.sampler import SamplerConfig, generate_orbital_samples, metropolis_hastings
from atomcloud.atom import SampleBatch, sample_atom

__all__ = [
    "FactorialCache",
    "factorial",
    "laguerre",
    "legendre",
    "QuantumState",
    "clamp_quantum_numbers",
    "probability_density",
    "real_wavefunction",
    "real_probability_density",
    "Orbital",
    "Subshell",
    "electron_configuration",
    "SamplerConfig",
    "generate_orbital_samples",
    "metropolis_hastings",
    "SampleBatch",
    "sample_atom",
]

__version__ = "0.1.0"
