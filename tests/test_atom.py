"""整原子采样测试"""

import numpy as np
import pytest

from atomcloud.atom import SampleBatch, point_budget, sample_atom
from atomcloud.constants import ORBITAL_COLORS
from atomcloud.occupations import Orbital, electron_configuration
from atomcloud.sampler import SamplerConfig
from atomcloud.utils import orbital_extent

FAST = SamplerConfig(burn_in=50, seed=0)


@pytest.mark.sampler
@pytest.mark.quick
def test_carbon_point_budget():
    """C: 每电子 100 点 -> 1s/2s 各 200，2p 两个取向各 100。"""
    batch = sample_atom(6, 100, config=FAST)
    assert len(batch) == 600
    assert batch.positions.shape == (600, 3)
    assert batch.colors.shape == (600, 3)
    assert len(batch.select(1, 0)) == 200
    assert len(batch.select(2, 0)) == 200
    assert len(batch.select(2, 1)) == 200
    assert len(batch.select(2, 1, 0)) == 100
    assert len(batch.select(2, 1, 1)) == 100
    assert len(batch.select(2, 1, -1)) == 0


@pytest.mark.sampler
@pytest.mark.quick
def test_colors_follow_l():
    batch = sample_atom(10, 20, config=FAST)
    for color, key in zip(batch.colors, batch.keys):
        assert tuple(color) == ORBITAL_COLORS[int(key[1])]


@pytest.mark.sampler
@pytest.mark.quick
def test_orbital_order_preserved():
    """样本按轨道顺序拼接：1s 段在前，2p 段在后。"""
    batch = sample_atom(5, 10, config=FAST)
    keys = [tuple(k) for k in batch.keys]
    assert keys[:20] == [(1, 0, 0)] * 20
    assert keys[20:40] == [(2, 0, 0)] * 20
    assert keys[40:] == [(2, 1, 0)] * 10


@pytest.mark.sampler
@pytest.mark.quick
def test_empty_cases():
    assert len(sample_atom(0, 100, config=FAST)) == 0
    assert len(sample_atom(-3, 100, config=FAST)) == 0
    assert len(sample_atom(6, 0, config=FAST)) == 0
    assert len(sample_atom(6, -5, config=FAST)) == 0


@pytest.mark.sampler
@pytest.mark.quick
def test_iteration_yields_position_and_key():
    batch = sample_atom(1, 15, config=FAST)
    items = list(batch)
    assert len(items) == 15
    pos, key = items[0]
    assert pos.shape == (3,)
    assert key == (1, 0, 0)


@pytest.mark.sampler
def test_seed_reproducible():
    a = sample_atom(4, 50, config=FAST, seed=123)
    b = sample_atom(4, 50, config=FAST, seed=123)
    c = sample_atom(4, 50, config=FAST, seed=124)
    assert np.array_equal(a.positions, b.positions)
    assert not np.array_equal(a.positions, c.positions)


@pytest.mark.sampler
def test_parallel_matches_sequential():
    seq = sample_atom(3, 50, config=FAST, seed=7)
    par = sample_atom(3, 50, config=FAST, seed=7, workers=2)
    assert np.array_equal(seq.positions, par.positions)
    assert np.array_equal(seq.keys, par.keys)


@pytest.mark.sampler
def test_inner_shells_are_tighter():
    """Zeff 更大的内层轨道分布更靠近原子核。"""
    batch = sample_atom(10, 400, config=SamplerConfig(burn_in=200, seed=3, sharpness=1.0))
    r1s = np.linalg.norm(batch.select(1, 0), axis=1).mean()
    r2p = np.linalg.norm(batch.select(2, 1), axis=1).mean()
    assert r1s < r2p


@pytest.mark.sampler
def test_uranium_shell_radii_match_analytic():
    """U (Z=92)：最内层 1s 与最外层 7s 的平均半径均与解析 <r> 一致。"""
    batch = sample_atom(92, 300, config=SamplerConfig(seed=92, sharpness=1.0))
    zeff = {(o.n, o.l): o.zeff for o in electron_configuration(92)}
    assert zeff[(1, 0)] == pytest.approx(91.7)
    assert zeff[(7, 0)] == pytest.approx(2.85)

    for n, l, rtol in [(1, 0, 0.2), (2, 0, 0.2), (7, 0, 0.3)]:
        r = np.linalg.norm(batch.select(n, l), axis=1)
        assert len(r) == 600
        expected = orbital_extent(n, l, zeff[(n, l)]).expected_radius
        assert abs(r.mean() - expected) < rtol * expected


@pytest.mark.quick
def test_point_budget_and_concatenate():
    orb = Orbital(2, 1, 0, 3.25, electrons=2)
    assert point_budget(orb, 100) == 200
    assert point_budget(orb, -1) == 0
    assert len(SampleBatch.concatenate([])) == 0
    e = SampleBatch.empty()
    assert e.positions.shape == (0, 3)
    assert len(SampleBatch.concatenate([e, e])) == 0
