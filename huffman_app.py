"""
Huffman coding of a text: load, encode, verify, save

Outputs (in --outdir):
  - report.txt       (encoded bit string, code table, statistics)
  - codes.csv        (symbol, count, code, code_length)
  - frequencies.png  (occurrence bar chart)

How to run:
  python huffman_app.py --input book.txt --outdir results
  python huffman_app.py --text "abracadabra" --no_plot
  python huffman_app.py --input book.txt --on_unmapped error --on_truncated error
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import huffman as huff
import huffman_report as report


def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def load_text(path: Path, encoding: str = "utf-8") -> str:
    return path.read_text(encoding=encoding)


def run(text: str, on_unmapped: str = "skip", on_truncated: str = "drop"):
    """Build the coding for `text`, encode it and decode it back."""
    coding = huff.HuffmanCoding.from_symbols(text)
    encoded = coding.encode(text, on_unmapped=on_unmapped)

    # A lone symbol has an empty code, so there is nothing to decode
    decoded: Optional[List[str]] = None
    if not coding.is_degenerate:
        decoded = coding.decode(encoded, on_truncated=on_truncated)

    summary = report.summarize(text, coding, encoded, decoded)
    return coding, encoded, summary


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Build a Huffman code for a text and write a report")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--input", type=str, help="Text file to encode")
    src.add_argument("--text", type=str, help="Text to encode given inline")
    ap.add_argument("--encoding", type=str, default="utf-8", help="Encoding of --input")
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for the report files")

    # Policies
    ap.add_argument("--on_unmapped", choices=("skip", "error"), default="skip",
                    help="What to do with a symbol that has no code while encoding")
    ap.add_argument("--on_truncated", choices=("drop", "error"), default="drop",
                    help="What to do with an incomplete trailing code while decoding")

    # Output toggles
    ap.add_argument("--no_plot", action="store_true", help="Do not draw the frequency chart")
    ap.add_argument("--no_csv", action="store_true", help="Do not write codes.csv")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        text = args.text if args.text is not None else load_text(Path(args.input), args.encoding)
        coding, encoded, summary = run(text, args.on_unmapped, args.on_truncated)

        outdir = Path(args.outdir)
        safe_mkdir(outdir)

        report_txt = outdir / "report.txt"
        report.write_report(report_txt, report.format_report(encoded, coding.codes, summary))
        print(f"Wrote report to {report_txt}")

        if not args.no_csv:
            codes_csv = outdir / "codes.csv"
            report.write_codes_csv(codes_csv, coding)
            print(f"Wrote code table to {codes_csv}")

        if not args.no_plot:
            chart = outdir / "frequencies.png"
            report.plot_frequencies(coding.frequencies, chart)
            print(f"Wrote frequency chart to {chart}")
    except (huff.HuffmanError, OSError, UnicodeDecodeError, LookupError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"Start length: {summary.start_bits}  Encoded length: {summary.encoded_bits}  "
          f"Ratio: {summary.compression_ratio:.4f}")
    if coding.is_degenerate:
        print("Note: single distinct symbol, every occurrence has the empty code")
    if not summary.roundtrip_ok:
        print("error: decoded text does not match the input", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
