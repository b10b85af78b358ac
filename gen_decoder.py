# -*- coding: utf-8 -*-
# gen_decoder.py — 生成 n:log2(n) 单级二进制译码器（VHDL，实体名 decoder_{n}）
#
# 特性：
# - 每个输出一行 assign：output(i) <= 全部 log2(n) 个输入位（或其取反）相与
# - 输出行按 i = n-1 .. 0 降序排列
# - 位模式用定长 BitVector 原地递减得到，不做除 2 取模的重算
#
# 用法：
#   python gen_decoder.py --n 512                 # 写 decoder_512_sld.vhd
#   python gen_decoder.py --n 16 --out -          # 打印到 stdout
#   python gen_decoder.py --n 8 --trace           # 同时打印每一步的位向量

import argparse
import os
import sys
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

FILE_ENDING = "_sld.vhd"


@dataclass(frozen=True)
class DecoderConfig:
    n: int                              # 输出宽度，必须是 2 的幂
    entity_name: Optional[str] = None   # 默认 decoder_{n}

    def __post_init__(self):
        n = self.n
        if isinstance(n, bool) or not isinstance(n, int):
            raise ValueError(f"n must be an integer, got {n!r}")
        if n < 1:
            raise ValueError(f"n must be positive, got {n}")
        if n & (n - 1):
            raise ValueError(f"n must be a power of two, got {n}")

    @property
    def log2n(self) -> int:
        return self.n.bit_length() - 1

    @property
    def max_index(self) -> int:
        return self.n - 1

    @property
    def entity(self) -> str:
        return self.entity_name or f"decoder_{self.n}"

    @property
    def filename(self) -> str:
        return self.entity + FILE_ENDING


# -------------------- 位向量计数器 --------------------
class BitVector:
    """Fixed-width unsigned counter stored as a list of bools, bit 0 = LSB.

    increment/decrement update the bits in place with carry/borrow and both
    saturate: decrementing zero and incrementing all-ones are no-ops.
    """

    def __init__(self, width: int, fill: bool = True):
        if width < 0:
            raise ValueError(f"width must be >= 0, got {width}")
        self.bits: List[bool] = [bool(fill)] * width

    def __len__(self) -> int:
        return len(self.bits)

    def __iter__(self):
        return iter(self.bits)

    def __getitem__(self, j: int) -> bool:
        return self.bits[j]

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitVector):
            return NotImplemented
        return self.bits == other.bits

    def __repr__(self) -> str:
        return f"BitVector({self.bits!r})"

    def __str__(self) -> str:
        return "[ " + "".join(f"{int(b)} " for b in self.msb_first()) + "]"

    def copy(self) -> "BitVector":
        bv = BitVector(0)
        bv.bits = list(self.bits)
        return bv

    def msb_first(self) -> List[bool]:
        return list(reversed(self.bits))

    @property
    def value(self) -> int:
        # 只用于断言/调试，生成过程不读这个值
        v = 0
        for b in reversed(self.bits):
            v = (v << 1) | int(b)
        return v

    def is_zero(self) -> bool:
        return not any(self.bits)

    def is_full(self) -> bool:
        return all(self.bits)

    def decrement(self):
        if self.is_zero():
            return
        bits = self.bits
        if bits[0]:
            bits[0] = False
            return
        # 借位：找到最低的 1，清零，其下全部置 1
        for i in range(1, len(bits)):
            if bits[i]:
                bits[i] = False
                for j in range(i):
                    bits[j] = True
                break

    def increment(self):
        if self.is_full():
            return
        bits = self.bits
        if not bits[0]:
            bits[0] = True
            return
        # 进位：找到最低的 0，置 1，其下全部清零
        for i in range(1, len(bits)):
            if not bits[i]:
                bits[i] = True
                for j in range(i):
                    bits[j] = False
                break


# -------------------- 行格式化 --------------------
def _digits(i: int) -> int:
    return len(str(i))


def index_padding(i: int, max_index: int) -> str:
    # 对齐 "<="；index 0 固定补一个空格（历史输出格式）
    if i == 0:
        return " "
    return " " * max(0, _digits(max_index) - _digits(i))


def render_literal(bit: bool, j: int) -> str:
    return f"input({j})" if bit else f"not input({j})"


def render_term(bv: BitVector, i: int, max_index: int) -> str:
    literals = [render_literal(bv[j], j) for j in range(len(bv) - 1, -1, -1)]
    # 0 位输入（n = 1）时输出恒为 1
    rhs = " and ".join(literals) if literals else "'1'"
    return f"output({i}){index_padding(i, max_index)} <= {rhs};"


# -------------------- 文档各段 --------------------
def library_lines() -> List[str]:
    return [
        "library IEEE;",
        "use IEEE.std_logic_1164.all;",
        "use IEEE.numeric_std.all;",
        "use IEEE.std_logic_unsigned.all;",
        "",
    ]


def entity_lines(cfg: DecoderConfig) -> List[str]:
    name = cfg.entity
    s: List[str] = []
    s.append(f"entity {name} is")
    s.append("generic(")
    s.append(f"  g_n:      integer := {cfg.n};  -- Output length is n")
    s.append(f"  g_log2n:  integer := {cfg.log2n}   -- Base 2 Logarithm of output length n; i.e., input length")
    s.append(");")
    s.append("port(")
    s.append("  input: in std_logic_vector(g_log2n - 1 downto 0); -- value to decode")
    s.append("  output: out std_logic_vector(g_n - 1 downto 0) -- decoded result")
    s.append(");")
    s.append(f"end {name};")
    s.append("")
    return s


def architecture_header_lines(cfg: DecoderConfig) -> List[str]:
    return [
        f"architecture behavioral of {cfg.entity} is",
        "",
        "begin",
        "-- Decoding corresponds to binary representation of given portions of shift",
        "",
    ]


def closing_lines() -> List[str]:
    return ["", "", "end;"]


def iter_decoder_body(cfg: DecoderConfig,
                      trace: Optional[Callable[[BitVector], None]] = None) -> Iterator[str]:
    bv = BitVector(cfg.log2n, fill=True)   # 全 1 = n-1
    for i in range(cfg.max_index, -1, -1):
        assert bv.value == i, f"bit vector {bv} out of step with index {i}"
        if trace is not None:
            trace(bv)
        yield render_term(bv, i, cfg.max_index)
        if i > 0:
            bv.decrement()


def gen_decoder_lines(cfg: DecoderConfig,
                      trace: Optional[Callable[[BitVector], None]] = None) -> List[str]:
    s: List[str] = []
    s.extend(library_lines())
    s.extend(entity_lines(cfg))
    s.extend(architecture_header_lines(cfg))
    s.extend(iter_decoder_body(cfg, trace))
    s.extend(closing_lines())
    return s


def gen_decoder_module(n: int, entity_name: Optional[str] = None) -> str:
    cfg = DecoderConfig(n, entity_name)
    return "\n".join(gen_decoder_lines(cfg))


# -------------------- I/O --------------------
def write_text(path: str, text: str):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)


def print_parameters(cfg: DecoderConfig, file=None):
    print("Parameters: ", file=file)
    print(f"n = ...... {cfg.n}", file=file)
    print(f"log_2(n) = {cfg.log2n}", file=file)


def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Generate an n:log2(n) single-level VHDL decoder.")
    ap.add_argument("--n", type=int, required=True, help="输出宽度 n（2 的幂）")
    ap.add_argument("--entity", type=str, default=None, help="实体名（默认 decoder_{n}）")
    ap.add_argument("--out", type=str, default=None, help="输出 .vhd 文件（默认 decoder_{n}_sld.vhd；'-' 打印到 stdout）")
    ap.add_argument("--trace", action="store_true", help="打印每一步的位向量")
    ap.add_argument("--quiet", action="store_true", help="不打印参数与进度")
    args = ap.parse_args(argv)

    try:
        cfg = DecoderConfig(args.n, args.entity)
    except ValueError as e:
        ap.error(str(e))

    to_stdout = args.out == "-"
    # 打印到 stdout 时，提示信息改走 stderr
    log = sys.stderr if to_stdout else sys.stdout
    if not args.quiet:
        print_parameters(cfg, file=log)

    trace = (lambda bv: print(bv, file=log)) if args.trace else None
    text = "\n".join(gen_decoder_lines(cfg, trace))

    if to_stdout:
        print(text)
        return 0

    path = args.out or cfg.filename
    if not args.quiet:
        print(f"Creating {path}", file=log)
    try:
        write_text(path, text)
    except OSError as e:
        print(f"error: cannot write {path}: {e}", file=sys.stderr)
        return 1
    if not args.quiet:
        print(f"Created {path}", file=log)
    return 0


if __name__ == "__main__":
    sys.exit(main())
