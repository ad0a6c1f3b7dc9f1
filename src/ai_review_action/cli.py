"""
Command-line entry point for the review action.
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from .api import ReviewAction
from .config import AppConfig, ConfigManager
from .exceptions import ConfigurationError, ReviewActionError


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-review",
        description="Review a pull request diff with a chat completion model and comment on the PR.",
    )
    parser.add_argument("--config", help="YAML config file, applied over environment variables")
    parser.add_argument("--workspace", help="Directory to clone into, or the existing working copy")
    parser.add_argument("--no-clone", action="store_true", help="Use the workspace as the working copy")
    parser.add_argument("--dry-run", action="store_true", help="Log the comment instead of posting it")
    return parser


def load_config(args: argparse.Namespace) -> AppConfig:
    return AppConfig.from_yaml(args.config) if args.config else AppConfig.from_env()


def collect_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if args.workspace:
        overrides["github.workspace"] = args.workspace
    if args.no_clone:
        overrides["github.clone"] = False
    if args.dry_run:
        overrides["review.dry_run"] = True
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        manager = ConfigManager(load_config(args))
        overrides = collect_overrides(args)
        if overrides:
            manager.update_config(**overrides)
    except ConfigurationError as e:
        logging.basicConfig(level=logging.INFO)
        for problem in e.problems:
            logger.error(problem)
        return 1

    try:
        result = ReviewAction(manager.config).run()
    except ReviewActionError as e:
        logger.error(f"Review failed: {e}")
        return 1

    if result.posted:
        logger.info(f"Posted review: {result.comment_url}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
