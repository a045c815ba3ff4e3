"""电子云采样命令行入口。

示例::

    atomcloud --csv carbon.csv atom 6 --per-electron 1000
    atomcloud --sharpness 1 orbital 3 2 -1 --count 5000
"""

from __future__ import annotations

import argparse
import time

import numpy as np

from .atom import SampleBatch, sample_atom
from .constants import element_name, element_symbol, orbital_color
from .io import export_configuration_json, export_samples_csv
from .occupations import configuration_string, electron_configuration
from .sampler import SamplerConfig, generate_orbital_samples
from .utils import orbital_extent, radial_distances
from .wavefunction import clamp_quantum_numbers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="atomcloud", description="氢样轨道电子云 Metropolis-Hastings 采样")
    parser.add_argument("--burn-in", type=int, default=500, help="预热步数")
    parser.add_argument("--sharpness", type=float, default=2.0, help="接受率指数（1=物理密度）")
    parser.add_argument("--step-factor", type=float, default=1.0, help="步长系数（步长 = 系数·n²/Zeff）")
    parser.add_argument("--density", choices=["real", "complex"], default="real", help="实轨道或复轨道密度")
    parser.add_argument("--seed", type=int, default=None, help="随机种子")
    parser.add_argument("--csv", type=str, default=None, help="导出点云 CSV 路径")
    parser.add_argument("-v", "--verbose", action="store_true", help="打印详细信息")

    sub = parser.add_subparsers(dest="command", required=True)

    p_atom = sub.add_parser("atom", help="对整个原子采样")
    p_atom.add_argument("Z", type=int, help="原子序数")
    p_atom.add_argument("--per-electron", type=int, default=2000, help="每电子点数")
    p_atom.add_argument("--workers", type=int, default=None, help="并行进程数")
    p_atom.add_argument("--json", type=str, default=None, help="导出电子组态 JSON 路径")

    p_orb = sub.add_parser("orbital", help="对单个轨道采样")
    p_orb.add_argument("n", type=int)
    p_orb.add_argument("l", type=int)
    p_orb.add_argument("m", type=int)
    p_orb.add_argument("--zeff", type=float, default=1.0, help="有效核电荷")
    p_orb.add_argument("--count", type=int, default=10000, help="样本数")
    return parser


def build_config(args) -> SamplerConfig:
    return SamplerConfig(
        burn_in=args.burn_in,
        sharpness=args.sharpness,
        step_factor=args.step_factor,
        density=args.density,
        seed=args.seed,
    )


def print_atom_summary(Z: int, batch: SampleBatch) -> None:
    print("\n" + "=" * 60)
    print(f"{element_symbol(Z)} ({element_name(Z)}), Z={Z}: {configuration_string(Z)}")
    print("=" * 60)
    print(f"{'轨道':>8} {'电子':>4} {'Zeff':>8} {'点数':>8} {'<r> 采样':>10} {'<r> 解析':>10}")
    print("-" * 60)
    for orb in electron_configuration(Z):
        pts = batch.select(orb.n, orb.l, orb.m)
        r_mean = float(np.mean(radial_distances(pts))) if len(pts) else float("nan")
        r_theory = orbital_extent(orb.n, orb.l, orb.zeff).expected_radius
        print(f"{orb.label:>8} {orb.electrons:4d} {orb.zeff:8.3f} {len(pts):8d} {r_mean:10.3f} {r_theory:10.3f}")
    print(f"\n总点数: {len(batch)}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = build_config(args)

    t0 = time.perf_counter()
    if args.command == "atom":
        if args.verbose:
            print(f"采样 Z={args.Z}，每电子 {args.per_electron} 点，配置: {cfg}")
        batch = sample_atom(args.Z, args.per_electron, config=cfg, workers=args.workers)
        print_atom_summary(args.Z, batch)
        if args.json:
            export_configuration_json(args.json, args.Z)
            print(f"组态已导出: {args.json}")
    else:
        if args.verbose:
            print(f"采样 (n,l,m)=({args.n},{args.l},{args.m})，Zeff={args.zeff}，配置: {cfg}")
        pts = generate_orbital_samples(args.n, args.l, args.m, args.zeff, args.count, config=cfg)
        key = clamp_quantum_numbers(args.n, args.l, args.m)
        colors = np.tile(orbital_color(*key), (len(pts), 1))
        batch = SampleBatch(pts, colors, np.tile(key, (len(pts), 1)))
        r = radial_distances(pts)
        print(f"样本数: {len(pts)}，<r> = {float(np.mean(r)) if len(r) else float('nan'):.4f} Bohr")

    if args.verbose:
        print(f"耗时: {time.perf_counter() - t0:.2f} s")
    if args.csv:
        export_samples_csv(args.csv, batch)
        print(f"点云已导出: {args.csv}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
