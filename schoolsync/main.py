#!/usr/bin/env python3
"""
SchoolSync command line entry point
Drains the student list into the session cache and runs grade calculations.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from schoolsync.config import AppPaths, SettingsManager
from schoolsync.core.di_container import AppContainer
from schoolsync.domain.grading import calculate_total
from schoolsync.managers import LoaderState

logger = logging.getLogger("SchoolSync.CLI")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="schoolsync", description="School management API client")
    parser.add_argument("--config", type=Path, default=None, help="Path to settings.yml")
    parser.add_argument("--base-url", default=None, help="Override the backend base URL")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("sync", help="Load all students into the session cache")
    subparsers.add_parser("clear-cache", help="Remove the cached student list")

    grade = subparsers.add_parser("grade", help="Compute total, percentage and grade")
    grade.add_argument("first_test", type=float)
    grade.add_argument("second_test", type=float)
    grade.add_argument("third_test", type=float)
    grade.add_argument("exam", type=float)

    return parser


def build_container(args: argparse.Namespace) -> AppContainer:
    defaults = AppPaths.default()
    paths = AppPaths(
        config_path=args.config or defaults.config_path,
        session_dir=defaults.session_dir,
    )
    settings = SettingsManager(paths.config_path).settings
    if args.base_url:
        settings.api.base_url = args.base_url.rstrip("/")
    return AppContainer.create(settings=settings, paths=paths)


async def run_sync(container: AppContainer) -> int:
    loader = container.create_student_loader()
    cached = loader.mount()
    if loader.restored:
        print(f"Restored {len(cached)} cached students")

    try:
        state = await loader.start()
    finally:
        await loader.close()
        await container.aclose()

    print(f"Loaded {len(loader.entities)} students ({state.value})")
    return 0 if state is LoaderState.DRAINED else 1


def run_grade(args: argparse.Namespace) -> int:
    score = calculate_total(args.first_test, args.second_test, args.third_test, args.exam)
    print(f"Total: {score.total:g}")
    print(f"Percentage: {score.percentage:.1f}%")
    print(f"Grade: {score.grade}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "grade":
        return run_grade(args)

    container = build_container(args)

    if args.command == "clear-cache":
        container.snapshot_store.clear()
        print("Student cache cleared")
        return 0

    try:
        return asyncio.run(run_sync(container))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
