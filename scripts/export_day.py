"""Export one or more days of lifelogs to Markdown files on disk."""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import settings
from src.lifelogs.client import LifelogClient
from src.lifelogs.dates import get_date_range
from src.optimization.consolidation import create_consolidated_export
from src.optimization.exports import (
    build_consolidated_document,
    build_multi_file_export,
    consolidated_filename,
)
from src.optimization.optimizer import optimize_entries
from src.pipeline_config import ChunkStrategy, OptimizationConfig, SummarizeLevel


def export_day(
    client: LifelogClient,
    day: str,
    out_dir: Path,
    mode: str = "multi",
    max_tokens: int | None = None,
    timezone: str = "UTC",
) -> list[Path]:
    """Fetch ``day`` and write its export files into ``out_dir``.

    Returns the written paths; empty when the day has no lifelogs.
    """
    entries = client.get_lifelogs_for_date(day, timezone)
    if not entries:
        return []

    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    if mode == "consolidated":
        config = OptimizationConfig(
            max_tokens=max_tokens or settings.consolidated_max_tokens,
            summarize_level=SummarizeLevel.LOW,
        )
        export = create_consolidated_export(entries, config)
        path = out_dir / consolidated_filename(day)
        path.write_text(build_consolidated_document(day, timezone, export), encoding="utf-8")
        written.append(path)
    else:
        config = OptimizationConfig(
            max_tokens=max_tokens or settings.default_max_tokens,
            chunk_strategy=ChunkStrategy.SEMANTIC,
        )
        export = build_multi_file_export(day, timezone, optimize_entries(entries, config))
        for f in [*export.files, export.index_file]:
            path = out_dir / f.filename
            path.write_text(f.content, encoding="utf-8")
            written.append(path)

    return written


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("start", help="YYYY-MM-DD")
    parser.add_argument("end", nargs="?", default=None, help="YYYY-MM-DD, inclusive")
    parser.add_argument("--api-key", default=settings.limitless_api_key)
    parser.add_argument("--mode", choices=["multi", "consolidated"], default="multi")
    parser.add_argument("--out", default="exports")
    parser.add_argument("--max-tokens", type=int, default=None)
    parser.add_argument("--timezone", default=settings.default_timezone)
    args = parser.parse_args()

    if not args.api_key:
        parser.error("an API key is required (--api-key or LIMITLESS_API_KEY)")

    dates = get_date_range(args.start, args.end or args.start)
    errors = 0
    with LifelogClient(args.api_key) as client:
        for day in dates:
            try:
                paths = export_day(
                    client, day, Path(args.out), args.mode, args.max_tokens, args.timezone
                )
            except Exception as e:
                errors += 1
                print(f"  {day} ERROR: {e}")
                continue
            if not paths:
                print(f"  {day} SKIP -- no lifelogs")
                continue
            print(f"  {day} wrote {len(paths)} file(s)")

    print(f"\nDone! {len(dates)} dates, {errors} errors.")
