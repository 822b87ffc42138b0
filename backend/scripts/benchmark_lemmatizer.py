from __future__ import annotations

import argparse
import asyncio
import json
import statistics
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.core.config import load_settings
from app.core.logging import configure_logging
from app.nlp.farasa import load_subprocess_lemmatizer

DEFAULT_SENTENCES = (
    "ذهب الولد إلى المدرسة صباحا",
    "كتبها الطالب في دفتره الجديد",
    "والكتاب على الطاولة بجانب النافذة",
)


def _load_sentences(path: Path | None) -> list[str]:
    if path is None:
        return list(DEFAULT_SENTENCES)
    return [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


async def run_benchmark(sentences: list[str], iterations: int, concurrency: int) -> dict[str, object]:
    lemmatizer = load_subprocess_lemmatizer(load_settings())
    try:
        started = time.perf_counter()
        await lemmatizer.ensure_ready()
        startup_ms = (time.perf_counter() - started) * 1000.0

        timings_ms: list[float] = []
        aligned = 0
        mismatched = 0
        semaphore = asyncio.Semaphore(concurrency)

        async def one(text: str) -> None:
            nonlocal aligned, mismatched
            async with semaphore:
                request_started = time.perf_counter()
                result = await lemmatizer.lemmatize(text)
                timings_ms.append((time.perf_counter() - request_started) * 1000.0)
            if result.alignment:
                aligned += 1
            else:
                mismatched += 1

        batch_started = time.perf_counter()
        await asyncio.gather(*(one(text) for _ in range(iterations) for text in sentences))
        total_s = time.perf_counter() - batch_started
    finally:
        await lemmatizer.aclose()

    return {
        "requests": len(timings_ms),
        "concurrency": concurrency,
        "startup_ms": round(startup_ms, 2),
        "aligned": aligned,
        "token_count_mismatches": mismatched,
        "latency_ms": {
            "mean": round(statistics.fmean(timings_ms), 2) if timings_ms else 0.0,
            "median": round(statistics.median(timings_ms), 2) if timings_ms else 0.0,
            "max": round(max(timings_ms), 2) if timings_ms else 0.0,
        },
        "requests_per_second": round(len(timings_ms) / total_s, 2) if total_s else 0.0,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Measure lemmatization latency against the configured analyzer.")
    parser.add_argument("--sentences", type=Path, default=None, help="UTF-8 file, one sentence per line")
    parser.add_argument("--iterations", type=int, default=5)
    parser.add_argument("--concurrency", type=int, default=4)
    args = parser.parse_args()

    configure_logging("WARNING")
    report = asyncio.run(
        run_benchmark(_load_sentences(args.sentences), max(1, args.iterations), max(1, args.concurrency))
    )
    print(json.dumps(report, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
