"""
Review Ignore File

Loads the optional newline-delimited list of paths and globs that are
excluded from the reviewed diff.
"""

import logging
from pathlib import Path
from typing import List, Union

from ..exceptions import IgnoreFileError


logger = logging.getLogger(__name__)

DEFAULT_IGNORE_PATH = ".review-ignore"


def parse_exclusions(content: str) -> List[str]:
    """Split ignore file content into exclusion entries, dropping blank lines."""
    patterns = []
    for line in content.split('\n'):
        line = line.rstrip('\r')
        if line:
            patterns.append(line)
    return patterns


def load_exclusions(path: Union[str, Path]) -> List[str]:
    """
    Load exclusion patterns from an ignore file.

    Args:
        path: Ignore file location

    Returns:
        Exclusion patterns in file order, empty if the file does not exist

    Raises:
        IgnoreFileError: If the file exists but cannot be read
    """
    ignore_file = Path(path)
    if not ignore_file.exists():
        logger.debug(f"No ignore file at {ignore_file}, reviewing the full tree")
        return []

    try:
        content = ignore_file.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise IgnoreFileError(f"Cannot read ignore file {ignore_file}: {e}") from e

    patterns = parse_exclusions(content)
    logger.info(f"Loaded {len(patterns)} exclusion patterns from {ignore_file}")
    return patterns
