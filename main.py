#!/usr/bin/env python3
"""
cn_numerals — Console Entry Point
==================================

Reads one line at a time, prints the numerals found in it and the line
with every numeral replaced by Arabic digits. Type `exit` to quit.

Usage:
    python main.py                      # Interactive loop
    python main.py 一百二十三 负三点一四  # Process the arguments and exit
    python main.py --verbose            # DEBUG logging (rejected keywords etc.)
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, TextIO

from dotenv import load_dotenv

from cn_numerals.config import NumeralSettings, configure_logging
from cn_numerals.models import NumeralReport
from cn_numerals.pipeline import NumeralPipeline

EXIT_COMMAND = "exit"


# ─── ANSI Color Constants ───────────────────────────────────────────

_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"


# ─── Formatting ─────────────────────────────────────────────────────


def format_report(report: NumeralReport, color: bool = False) -> str:
    """One result line: match count, the numbers found, the replaced text."""
    numbers = ", ".join(match.display for match in report.matches)
    if not color:
        return f"提取了{report.count}个数字（{numbers}）。替换之后的字符串：{report.replaced}"
    return (
        f"提取了{_BOLD}{report.count}{_RESET}个数字"
        f"（{_CYAN}{numbers}{_RESET}）。"
        f"替换之后的字符串：{_GREEN}{report.replaced}{_RESET}"
    )


# ─── Loop ───────────────────────────────────────────────────────────


def run_loop(
    pipeline: NumeralPipeline,
    lines: Iterable[str],
    out: TextIO = sys.stdout,
    color: bool = False,
) -> int:
    """Process lines until `exit` or end of input. Returns lines processed."""
    processed = 0
    out.write("请输入一句中文。\n>")
    out.flush()
    for raw in lines:
        line = raw.rstrip("\r\n")
        if line == EXIT_COMMAND:
            break
        out.write(format_report(pipeline.run(line), color) + "\n\n>")
        out.flush()
        processed += 1
    out.write("\n")
    return processed


# ─── Main ────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Extract Chinese numerals from text.")
    parser.add_argument("text", nargs="*", help="text to process (omit for interactive mode)")
    parser.add_argument("--verbose", action="store_true", help="log at DEBUG level")
    args = parser.parse_args(argv)

    load_dotenv()
    settings = NumeralSettings.from_env()
    configure_logging(settings)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    pipeline = NumeralPipeline(settings)
    color = sys.stdout.isatty()

    if args.text:
        for text in args.text:
            print(format_report(pipeline.run(text), color))
        return 0

    run_loop(pipeline, sys.stdin, sys.stdout, color)
    return 0


if __name__ == "__main__":
    sys.exit(main())
