from __future__ import annotations

import json
from pathlib import Path

import numpy as np

from .atom import SampleBatch
from .constants import element_name, element_symbol
from .occupations import configuration_string, electron_configuration

__all__ = [
    "export_samples_csv",
    "export_configuration_json",
]


def export_samples_csv(out_path: str | Path, batch: SampleBatch) -> None:
    """导出点云为 CSV：列为 `x,y,z,r,g,b,n,l,m`（坐标单位 Bohr）。"""
    p = Path(out_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    data = np.column_stack([batch.positions, batch.colors, batch.keys.astype(float)])
    fmt = ["%.6f"] * 6 + ["%d"] * 3
    np.savetxt(p, data, delimiter=",", header="x,y,z,r,g,b,n,l,m", comments="", fmt=fmt)


def export_configuration_json(out_path: str | Path, Z: int) -> None:
    """导出原子 Z 的电子组态与各轨道 Zeff 为 JSON。"""
    orbitals = electron_configuration(Z)
    data = {
        "metadata": {
            "Z": int(Z),
            "symbol": element_symbol(Z),
            "name": element_name(Z),
            "configuration": configuration_string(Z),
            "electrons": sum(o.electrons for o in orbitals),
        },
        "orbitals": [
            {
                "label": o.label,
                "n": o.n,
                "l": o.l,
                "m": o.m,
                "electrons": o.electrons,
                "zeff": float(o.zeff),
            }
            for o in orbitals
        ],
    }
    p = Path(out_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
