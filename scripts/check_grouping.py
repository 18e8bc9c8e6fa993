#!/usr/bin/env python3
"""Print how sample sentences are grouped by the real SudachiPy tagger.

Usage:
  python scripts/check_grouping.py [text ...]
"""

import asyncio
import sys
from pathlib import Path

# Add src to python path to import modules
sys.path.append(str(Path(__file__).resolve().parent.parent / "src"))

from bunsekikun.services.analysis import EXAMPLE_TEXTS, TextAnalyzer
from bunsekikun.services.tagger import TaggerLifecycle, TaggerState, sudachi_loader

# Boundary cases on top of the UI examples
BOUNDARY_CASES = [
    "食べられなかった寿司",   # verb chain + noun
    "言われてみれば難しい",   # te-form helper + adjective
    "走っている犬",          # continuous state + noun
    "田中さんたちが来た",     # name + suffixes
]


def print_word(index: int, word) -> None:
    print(f"[{index}] {word.surface} ({word.reading})  head={word.part_of_speech}")
    for t in word.tokens:
        print(f"      {t.surface:<6} {t.part_of_speech:<16} {t.pos_detail_1:<10} base={t.base_form}")


async def main(texts: list[str]) -> None:
    print("Loading tagger...")
    lifecycle = TaggerLifecycle(sudachi_loader("core", "A"), timeout=60)
    status = await lifecycle.ensure_ready()
    if status.state is not TaggerState.READY:
        print(f"Tagger failed to load: {status.reason} {status.message}")
        sys.exit(1)

    analyzer = TextAnalyzer(lifecycle)
    for text in texts:
        print(f"\n{'=' * 60}")
        print(f"Input Text: 「{text}」")
        print(f"{'=' * 60}")
        for i, word in enumerate(analyzer.analyze(text)):
            print_word(i, word)


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:] or [*EXAMPLE_TEXTS, *BOUNDARY_CASES]))
