"""
Human-readable output around a Huffman coding session

  - to_binary / summarize   baseline size and coding statistics
  - format_report           "Encoded text" + code table + statistics
  - write_codes_csv         one row per symbol
  - plot_frequencies        occurrence-count bar chart (PNG)
"""

from __future__ import annotations

import csv
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Hashable, Optional, Sequence

import matplotlib.pyplot as plt

from huffman import HuffmanCoding


def to_binary(text: str) -> str:
    """Each character's code point in binary, no leading zeros, concatenated."""
    return "".join(format(ord(ch), "b") for ch in text)

def format_symbol(symbol: Hashable) -> str:
    if isinstance(symbol, str):
        return repr(symbol) # escapes '\n', '\t', ...
    return f"'{symbol}'"

def shannon_entropy(frequencies: Dict[Hashable, int]) -> float:
    total = sum(frequencies.values())
    if total <= 0:
        return 0.0
    h = 0.0
    for count in frequencies.values():
        if count > 0:
            p = count / total
            h -= p * math.log2(p)
    return h


@dataclass
class CodingSummary:
    symbols_total: int
    unique_symbols: int
    start_binary: str # code points in binary, the uncompressed baseline
    start_bits: int
    encoded_bits: int
    compression_ratio: float # encoded bits / start bits
    average_code_length: float # bits per symbol
    entropy_bits: float # lower bound for average_code_length
    roundtrip_ok: bool


def summarize(text: str, coding: HuffmanCoding, encoded: str, decoded: Optional[Sequence] = None) -> CodingSummary:
    """
    decoded: symbols recovered from `encoded`, or None when decoding was not
    possible (single-symbol texts). A single-symbol coding counts as ok.
    """
    start_binary = to_binary(text)
    if decoded is None:
        roundtrip_ok = coding.is_degenerate
    else:
        roundtrip_ok = list(decoded) == list(text)

    return CodingSummary(
        symbols_total=len(text),
        unique_symbols=len(coding.frequencies),
        start_binary=start_binary,
        start_bits=len(start_binary),
        encoded_bits=len(encoded),
        compression_ratio=len(encoded) / max(1, len(start_binary)),
        average_code_length=len(encoded) / max(1, len(text)),
        entropy_bits=shannon_entropy(coding.frequencies),
        roundtrip_ok=roundtrip_ok,
    )


def format_report(encoded: str, codes: Dict[Hashable, str], summary: Optional[CodingSummary] = None) -> str:
    lines = [f"Encoded text: {encoded}", "Encoding codes:"]
    width = max((len(format_symbol(s)) for s in codes), default=0)
    for symbol, code in codes.items():
        lines.append(f"  {format_symbol(symbol):<{width}}  {code}")

    if summary is not None:
        lines += [
            "",
            f"Start binary: {summary.start_binary}",
            f"Start length: {summary.start_bits}",
            f"Encoded length: {summary.encoded_bits}",
            f"Compression ratio: {summary.compression_ratio:.4f}",
            f"Symbols: {summary.symbols_total} ({summary.unique_symbols} distinct)",
            f"Average code length: {summary.average_code_length:.4f} bits/symbol",
            f"Entropy: {summary.entropy_bits:.4f} bits/symbol",
            f"Round trip: {'ok' if summary.roundtrip_ok else 'FAILED'}",
        ]
    return "\n".join(lines) + "\n"


def write_report(path: Path, report: str) -> None:
    path.write_text(report, encoding="utf-8")

def write_codes_csv(path: Path, coding: HuffmanCoding) -> None:
    fields = ["symbol", "count", "code", "code_length"]
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for symbol, code in coding.codes.items():
            w.writerow({
                "symbol": symbol,
                "count": coding.frequencies[symbol],
                "code": code,
                "code_length": len(code),
            })


def plot_frequencies(frequencies: Dict[Hashable, int], out_path: Path, title: str = "Symbol Occurrences") -> None:
    if not frequencies:
        return

    labels = [format_symbol(s) for s in frequencies]
    counts = list(frequencies.values())
    x = list(range(len(labels)))

    plt.figure(figsize=(max(6.4, 0.35 * len(labels)), 4.8))
    plt.bar(x, counts, color="cyan", edgecolor="black")
    plt.xticks(x, labels, rotation=90)
    plt.ylabel("Occurrences")
    plt.title(title)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()
