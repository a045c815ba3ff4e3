"""常量集中维护
================

物理常量、元素表与轨道显示颜色。

参考与核对来源：
- CODATA 2018 推荐值（Bohr 半径、Hartree、Rydberg）
- IUPAC 元素名称（Z=1–92）
"""

from __future__ import annotations

# 物理常量（SI）
BOHR_RADIUS_M = 0.529177210903e-10
BOHR_RADIUS_ANGSTROM = BOHR_RADIUS_M * 1e10
HARTREE_EV = 27.211386245988
RYDBERG_EV = 13.605693122994

# 显示尺度：1 Bohr = 8 显示单位
BOHR_TO_DISPLAY = 8.0

ELEMENT_SYMBOLS: tuple[str, ...] = (
    "H", "He", "Li", "Be", "B", "C", "N", "O", "F", "Ne",
    "Na", "Mg", "Al", "Si", "P", "S", "Cl", "Ar", "K", "Ca",
    "Sc", "Ti", "V", "Cr", "Mn", "Fe", "Co", "Ni", "Cu", "Zn",
    "Ga", "Ge", "As", "Se", "Br", "Kr", "Rb", "Sr", "Y", "Zr",
    "Nb", "Mo", "Tc", "Ru", "Rh", "Pd", "Ag", "Cd", "In", "Sn",
    "Sb", "Te", "I", "Xe", "Cs", "Ba", "La", "Ce", "Pr", "Nd",
    "Pm", "Sm", "Eu", "Gd", "Tb", "Dy", "Ho", "Er", "Tm", "Yb",
    "Lu", "Hf", "Ta", "W", "Re", "Os", "Ir", "Pt", "Au", "Hg",
    "Tl", "Pb", "Bi", "Po", "At", "Rn", "Fr", "Ra", "Ac", "Th",
    "Pa", "U",
)

ELEMENT_NAMES: tuple[str, ...] = (
    "Hydrogen", "Helium", "Lithium", "Beryllium", "Boron", "Carbon", "Nitrogen", "Oxygen",
    "Fluorine", "Neon", "Sodium", "Magnesium", "Aluminium", "Silicon", "Phosphorus", "Sulfur",
    "Chlorine", "Argon", "Potassium", "Calcium", "Scandium", "Titanium", "Vanadium", "Chromium",
    "Manganese", "Iron", "Cobalt", "Nickel", "Copper", "Zinc", "Gallium", "Germanium",
    "Arsenic", "Selenium", "Bromine", "Krypton", "Rubidium", "Strontium", "Yttrium", "Zirconium",
    "Niobium", "Molybdenum", "Technetium", "Ruthenium", "Rhodium", "Palladium", "Silver", "Cadmium",
    "Indium", "Tin", "Antimony", "Tellurium", "Iodine", "Xenon", "Caesium", "Barium",
    "Lanthanum", "Cerium", "Praseodymium", "Neodymium", "Promethium", "Samarium", "Europium",
    "Gadolinium", "Terbium", "Dysprosium", "Holmium", "Erbium", "Thulium", "Ytterbium",
    "Lutetium", "Hafnium", "Tantalum", "Tungsten", "Rhenium", "Osmium", "Iridium", "Platinum",
    "Gold", "Mercury", "Thallium", "Lead", "Bismuth", "Polonium", "Astatine", "Radon",
    "Francium", "Radium", "Actinium", "Thorium", "Protactinium", "Uranium",
)

# 轨道颜色（按 l）：s 红，p 绿，d 蓝，f 黄
ORBITAL_COLORS: dict[int, tuple[float, float, float]] = {
    0: (1.0, 0.2, 0.2),
    1: (0.2, 1.0, 0.2),
    2: (0.2, 0.5, 1.0),
    3: (1.0, 1.0, 0.2),
}
DEFAULT_COLOR = (1.0, 1.0, 1.0)


def element_symbol(Z: int) -> str:
    """元素符号；表外的 Z 返回 ``"Z{Z}"``。"""
    if 1 <= Z <= len(ELEMENT_SYMBOLS):
        return ELEMENT_SYMBOLS[Z - 1]
    return f"Z{Z}"


def element_name(Z: int) -> str:
    if 1 <= Z <= len(ELEMENT_NAMES):
        return ELEMENT_NAMES[Z - 1]
    return f"Element {Z}"


def orbital_color(n: int, l: int, m: int) -> tuple[float, float, float]:
    """(n, l, m) 轨道的显示颜色（RGB 浮点三元组），目前只随 l 变化。"""
    return ORBITAL_COLORS.get(l, DEFAULT_COLOR)
