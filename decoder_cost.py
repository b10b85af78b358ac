# -*- coding: utf-8 -*-
# decoder_cost.py — 树形译码器晶体管开销估算
#
# 单级 k:2^k 译码器：k 个反相器驱动 2^(k-1) 扇出 + 2^k 个 (k+1) 输入与门
# 树形译码器：顶层 log2(f) 位译码器 + f 个子树，递归到基础译码器（输出 <= b）
#
# 用法：
#   python decoder_cost.py                          # CSV，k=2..18，默认 f_max / b 网格
#   python decoder_cost.py --human --f-max 8 --b 4  # 可读格式
#   python decoder_cost.py --out tree_cost.csv

import argparse
import math
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional, Sequence

DEFAULT_K = list(range(2, 19))
DEFAULT_F_MAX = [2, 4, 8, 16, 32, 64, 128]
DEFAULT_B = [4, 8, 16, 32, 64, 128]


@dataclass(frozen=True)
class CostParams:
    f_max: int = 8      # 顶层译码器最大扇出
    b: int = 4          # 基础译码器输出个数
    t_not: int = 2      # 反相器晶体管数

    def __post_init__(self):
        if self.f_max < 2:
            raise ValueError(f"f_max must be >= 2, got {self.f_max}")
        if self.b < 2:
            raise ValueError(f"b must be >= 2, got {self.b}")


@dataclass
class CostRow:
    f_max: int
    b: int
    costs: List[int] = field(default_factory=list)


def t_and_k_plus_1(k: int) -> int:
    return 2 * (k + 1) + 2


def calc_f(k: int, p: CostParams) -> int:
    # 2^ceil(k/2)，即 sqrt(2^k) 向上取到 2 的幂
    return max(2, min(p.f_max, 1 << ((k + 1) // 2)))


def d_en(k: int, p: CostParams) -> int:
    inverters = p.t_not * k * (1 << (k - 1)) if k > 0 else 0
    return inverters + t_and_k_plus_1(k) * (1 << k)


@lru_cache(maxsize=None)
def d_tau(k: int, p: CostParams) -> int:
    f = calc_f(k, p)
    outputs = 1 << k
    if outputs <= p.b or outputs / f < 2:
        return d_en(k, p)
    lg_f = round(math.log2(f))
    return d_tau(lg_f, p) + f * d_tau(k - lg_f, p)


def sweep(k_values: Sequence[int] = DEFAULT_K,
          f_max_values: Sequence[int] = DEFAULT_F_MAX,
          b_values: Sequence[int] = DEFAULT_B) -> List[CostRow]:
    rows: List[CostRow] = []
    for f_max in f_max_values:
        for b in b_values:
            p = CostParams(f_max=f_max, b=b)
            rows.append(CostRow(f_max, b, [d_tau(k, p) for k in k_values]))
    return rows


def format_csv(rows: List[CostRow], k_values: Sequence[int]) -> str:
    s: List[str] = []
    s.append(", ".join(["f_max", "b"] + [str(k) for k in k_values]))
    for r in rows:
        s.append(", ".join([str(r.f_max), str(r.b)] + [str(c) for c in r.costs]))
    s.append("")
    return "\n".join(s)


def format_human(rows: List[CostRow], k_values: Sequence[int]) -> str:
    s: List[str] = []
    for r in rows:
        for k, c in zip(k_values, r.costs):
            s.append(f"Cost(k = {k}, f_max = {r.f_max}, b = {r.b}) = {c}")
    s.append("")
    return "\n".join(s)


def _int_list(text: str) -> List[int]:
    try:
        return [int(t) for t in text.replace(",", " ").split()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a list of integers, got {text!r}")


def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Tabulate transistor cost of tree decoders.")
    ap.add_argument("--k-min", type=int, default=DEFAULT_K[0], help="最小输入位宽 k")
    ap.add_argument("--k-max", type=int, default=DEFAULT_K[-1], help="最大输入位宽 k")
    ap.add_argument("--f-max", type=_int_list, default=DEFAULT_F_MAX, help="f_max 列表，如 '2,4,8'")
    ap.add_argument("--b", type=_int_list, default=DEFAULT_B, help="基础译码器输出数列表，如 '4,8'")
    ap.add_argument("--human", action="store_true", help="可读格式（默认 CSV）")
    ap.add_argument("--out", type=str, default=None, help="输出文件（省略则打印到 stdout）")
    args = ap.parse_args(argv)

    if args.k_min < 0 or args.k_max < args.k_min:
        ap.error(f"invalid k range {args.k_min}..{args.k_max}")
    k_values = list(range(args.k_min, args.k_max + 1))
    try:
        rows = sweep(k_values, args.f_max, args.b)
    except ValueError as e:
        ap.error(str(e))

    text = format_human(rows, k_values) if args.human else format_csv(rows, k_values)
    if args.out:
        with open(args.out, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
    else:
        print(text, end="")
    return 0


if __name__ == "__main__":
    main()
