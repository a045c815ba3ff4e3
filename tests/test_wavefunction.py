"""波函数与概率密度单元测试"""

import numpy as np
import pytest

from atomcloud.special import FactorialCache
from atomcloud.utils import radial_grid
from atomcloud.wavefunction import (
    QuantumState,
    ZEFF_FLOOR,
    clamp_quantum_numbers,
    probability_density,
    radial_probability,
    radial_wavefunction,
    real_probability_density,
    real_wavefunction,
)


def _valid_states(n_max=7, l_max=3):
    for n in range(1, n_max + 1):
        for l in range(0, min(n - 1, l_max) + 1):
            for m in range(-l, l + 1):
                yield n, l, m


@pytest.fixture
def points():
    rng = np.random.default_rng(1234)
    return rng.normal(scale=4.0, size=(200, 3))


@pytest.mark.wavefunction
@pytest.mark.quick
def test_hydrogen_1s_closed_form(points):
    """1s: |psi|^2 = Z^3 exp(-2Zr) / pi。"""
    x, y, z = points.T
    r = np.linalg.norm(points, axis=1)
    for Z in (1.0, 2.0, 5.7):
        expected = Z**3 * np.exp(-2 * Z * r) / np.pi
        assert np.allclose(probability_density(x, y, z, 1, 0, 0, Z), expected, rtol=1e-12)


@pytest.mark.wavefunction
@pytest.mark.quick
def test_hydrogen_2p_radial_closed_form():
    """R_21(r) = Z^{3/2} (Zr) exp(-Zr/2) / (2 sqrt(6))。"""
    r = np.linspace(0.01, 20.0, 50)
    for Z in (1.0, 3.25):
        expected = Z**1.5 * (Z * r) * np.exp(-Z * r / 2) / (2 * np.sqrt(6))
        assert np.allclose(radial_wavefunction(r, 2, 1, Z), expected, rtol=1e-12)


@pytest.mark.wavefunction
@pytest.mark.parametrize("n,l", [(1, 0), (2, 0), (2, 1), (3, 2), (4, 3), (7, 0), (7, 3)])
@pytest.mark.parametrize("zeff", [1.0, 2.5])
def test_radial_probability_normalized(n, l, zeff):
    r = radial_grid(n, zeff, npts=20000)
    norm = np.trapezoid(radial_probability(r, n, l, zeff), r)
    assert np.isclose(norm, 1.0, atol=1e-3)


@pytest.mark.wavefunction
@pytest.mark.quick
def test_s_states_complex_and_real_agree(points):
    x, y, z = points.T
    for n in range(1, 8):
        for zeff in (1.0, 3.3):
            a = probability_density(x, y, z, n, 0, 0, zeff)
            b = real_probability_density(x, y, z, n, 0, 0, zeff)
            assert np.allclose(a, b, rtol=1e-12, atol=0.0)


@pytest.mark.wavefunction
def test_pz_and_dz2_complex_and_real_agree(points):
    """m=0 的复轨道与实轨道相同（p_z, d_z2）。"""
    x, y, z = points.T
    assert np.allclose(probability_density(x, y, z, 2, 1, 0), real_probability_density(x, y, z, 2, 1, 0))
    assert np.allclose(probability_density(x, y, z, 3, 2, 0), real_probability_density(x, y, z, 3, 2, 0))


@pytest.mark.wavefunction
@pytest.mark.quick
def test_density_non_negative(points):
    x, y, z = points.T
    for n, l, m in _valid_states():
        assert np.all(probability_density(x, y, z, n, l, m, 2.0) >= 0)
        assert np.all(real_probability_density(x, y, z, n, l, m, 2.0) >= 0)


@pytest.mark.wavefunction
@pytest.mark.quick
def test_origin_returns_zero():
    for n, l, m in _valid_states(4):
        assert probability_density(0.0, 0.0, 0.0, n, l, m) == 0.0
        assert real_wavefunction(0.0, 0.0, 0.0, n, l, m) == 0.0
        assert probability_density(1e-8, 0.0, 0.0, n, l, m) == 0.0


@pytest.mark.wavefunction
def test_scalar_inputs_return_float():
    assert isinstance(probability_density(0.3, 0.2, 1.0, 2, 1, 1), float)
    assert isinstance(real_wavefunction(0.3, 0.2, 1.0, 3, 2, -2), float)
    assert isinstance(real_probability_density(0.3, 0.2, 1.0, 3, 2, -2), float)


@pytest.mark.wavefunction
def test_complex_density_independent_of_azimuth():
    r, theta = 3.0, 0.7
    phis = np.linspace(0, 2 * np.pi, 9)
    x = r * np.sin(theta) * np.cos(phis)
    y = r * np.sin(theta) * np.sin(phis)
    z = np.full_like(phis, r * np.cos(theta))
    for n, l, m in [(2, 1, 1), (3, 2, -2), (4, 3, 2)]:
        d = probability_density(x, y, z, n, l, m)
        assert np.allclose(d, d[0], rtol=1e-12)


@pytest.mark.wavefunction
def test_real_p_orbitals_point_along_axes(points):
    """m=+1 -> x 轴，m=-1 -> y 轴：与 p_z 经坐标置换后一致。"""
    x, y, z = points.T
    pz = real_wavefunction(x, y, z, 2, 1, 0)
    assert np.allclose(real_wavefunction(z, y, x, 2, 1, 1), pz)
    assert np.allclose(real_wavefunction(x, z, y, 2, 1, -1), pz)

    # 沿 x 轴 p_x 取极值，p_y / p_z 为 0
    assert real_wavefunction(2.0, 0.0, 0.0, 2, 1, 1) > 0
    assert real_wavefunction(-2.0, 0.0, 0.0, 2, 1, 1) < 0
    assert real_wavefunction(2.0, 0.0, 0.0, 2, 1, -1) == 0.0
    assert real_wavefunction(2.0, 0.0, 0.0, 2, 1, 0) == 0.0


@pytest.mark.wavefunction
@pytest.mark.parametrize("l", [1, 2])
def test_unsold_sum_rule(points, l):
    r"""Unsöld 定理：\sum_m |Y_lm|^2 = (2l+1)/(4 pi)，实轨道与复轨道均成立。"""
    x, y, z = points.T
    n = 3
    r = np.linalg.norm(points, axis=1)
    R2 = radial_wavefunction(r, n, l) ** 2
    expected = R2 * (2 * l + 1) / (4 * np.pi)
    total_real = sum(real_probability_density(x, y, z, n, l, m) for m in range(-l, l + 1))
    total_cplx = sum(probability_density(x, y, z, n, l, m) for m in range(-l, l + 1))
    assert np.allclose(total_real, expected, rtol=1e-10)
    assert np.allclose(total_cplx, expected, rtol=1e-10)


@pytest.mark.wavefunction
def test_real_f_orbitals_fall_back_to_spherical(points):
    """l > 2 的实轨道角向部分按 s 型常数处理（已知限制）。"""
    x, y, z = points.T
    r = np.linalg.norm(points, axis=1)
    expected = radial_wavefunction(r, 4, 3) ** 2 / (4 * np.pi)
    for m in range(-3, 4):
        assert np.allclose(real_probability_density(x, y, z, 4, 3, m), expected)


@pytest.mark.wavefunction
@pytest.mark.quick
def test_quantum_state_validation():
    s = QuantumState(3, 2, -1, 2.0)
    assert (s.n, s.l, s.m, s.zeff) == (3, 2, -1, 2.0)
    with pytest.raises(ValueError, match="l < n"):
        QuantumState(2, 2, 0)
    with pytest.raises(ValueError, match=r"\|m\| <= l"):
        QuantumState(3, 1, 2)
    with pytest.raises(ValueError, match="主量子数"):
        QuantumState(0, 0, 0)

    # Zeff 抬升到下限
    assert QuantumState(1, 0, 0, -4.0).zeff == ZEFF_FLOOR
    assert QuantumState(1, 0, 0, 0.0).zeff == ZEFF_FLOOR


@pytest.mark.wavefunction
@pytest.mark.quick
def test_clamp_quantum_numbers():
    assert clamp_quantum_numbers(2, 3, -3) == (2, 1, -1)
    assert clamp_quantum_numbers(0, 1, 1) == (1, 0, 0)
    assert clamp_quantum_numbers(4, 2, 5) == (4, 2, 2)
    assert clamp_quantum_numbers(3, -1, 0) == (3, 0, 0)
    s = QuantumState.clamped(2, 5, 4, 1.5)
    assert (s.n, s.l, s.m) == (2, 1, 1)


@pytest.mark.wavefunction
def test_quantum_state_density_methods():
    s = QuantumState(2, 1, 1, 1.5)
    assert s.density(1.0, 0.5, 0.2) == probability_density(1.0, 0.5, 0.2, 2, 1, 1, 1.5)
    assert s.real_density(1.0, 0.5, 0.2) == real_probability_density(1.0, 0.5, 0.2, 2, 1, 1, 1.5)


class _RecordingCache(FactorialCache):
    def __init__(self):
        super().__init__()
        self.requested = set()

    def __call__(self, k):
        self.requested.add(int(k))
        return super().__call__(k)


@pytest.mark.wavefunction
@pytest.mark.quick
def test_owned_cache_threaded_through_densities(points):
    """显式传入的阶乘缓存同时用于径向与角向归一化，结果与共享缓存一致。"""
    x, y, z = points.T
    cache = _RecordingCache()
    dens = probability_density(x, y, z, 3, 2, 1, 2.0, cache=cache)
    assert np.allclose(dens, probability_density(x, y, z, 3, 2, 1, 2.0))
    # 径向 (n-l-1)!, (n+l)!；角向 (l-|m|)!, (l+|m|)!
    assert cache.requested == {0, 5, 1, 3}
    assert cache.steps == 5
    assert len(cache) == 6

    cache = _RecordingCache()
    psi = real_wavefunction(x, y, z, 4, 1, -1, 1.5, cache=cache)
    assert np.allclose(psi, real_wavefunction(x, y, z, 4, 1, -1, 1.5))
    assert np.allclose(real_probability_density(x, y, z, 4, 1, -1, 1.5, cache=cache), psi * psi)
    assert cache.requested == {2, 5}
    assert cache.steps == 5

    cache = FactorialCache()
    r = np.linspace(0.0, 10.0, 11)
    assert np.allclose(radial_probability(r, 7, 3, 1.0, cache=cache), radial_probability(r, 7, 3, 1.0))
    assert len(cache) == 11
