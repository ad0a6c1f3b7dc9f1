"""
Git Working Copy

Runs git against a local working copy: clone, fetch and the filtered
diff between the base and head branches of a pull request.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union
from urllib.parse import urlsplit

from ..exceptions import ConfigurationError, GitCommandError
from ..models.diff import DiffResult


logger = logging.getLogger(__name__)

DIFF_BASE_HEAD = "base-head"
DIFF_HEAD_BASE = "head-base"
DIFF_DIRECTIONS = (DIFF_BASE_HEAD, DIFF_HEAD_BASE)

EXCLUDE_PREFIX = ":!"


def build_clone_url(owner: str, name: str, token: str,
                    server_url: str = "https://github.com") -> str:
    """Build an HTTPS clone URL with the token embedded as credentials."""
    if not owner or not name or not token:
        raise ConfigurationError("owner, repository name and token are required to clone")

    parts = urlsplit(server_url)
    scheme = parts.scheme or "https"
    host = parts.netloc or parts.path
    return f"{scheme}://{owner}:{token}@{host.rstrip('/')}/{owner}/{name}"


def mask_credentials(text: str, secrets: Sequence[str]) -> str:
    for secret in secrets:
        if secret:
            text = text.replace(secret, "***")
    return text


class GitRepository:
    """
    Local git working copy.

    Every command runs with ``working_dir`` as its current directory,
    the process-wide working directory is never changed.
    """

    def __init__(self, working_dir: Union[str, Path], git_executable: str = "git",
                 secrets: Sequence[str] = ()):
        """
        Args:
            working_dir: Directory every git command runs in
            git_executable: git binary name or path
            secrets: Values masked in logs and error messages
        """
        self.working_dir = Path(working_dir)
        self.git_executable = git_executable
        self._secrets: List[str] = [s for s in secrets if s]

    def _run(self, args: List[str]) -> bytes:
        """
        Run a git command and return its stdout.

        Raises:
            GitCommandError: If git is missing or exits non-zero
        """
        command = [self.git_executable] + args
        masked = [mask_credentials(arg, self._secrets) for arg in command]
        display = " ".join(masked)
        logger.debug(f"Running: {display}")

        try:
            completed = subprocess.run(
                command,
                cwd=str(self.working_dir),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
            )
        except FileNotFoundError as e:
            raise GitCommandError(
                f"git executable not found: {self.git_executable}",
                command=masked,
            ) from e

        if completed.returncode != 0:
            stderr = mask_credentials(
                completed.stderr.decode('utf-8', errors='replace').strip(), self._secrets
            )
            raise GitCommandError(
                f"Command failed ({completed.returncode}): {display}\n{stderr}",
                command=masked,
                returncode=completed.returncode,
                stderr=stderr,
            )

        return completed.stdout

    def clone(self, url: str, destination: Optional[str] = None,
              secrets: Sequence[str] = ()) -> Path:
        """
        Clone ``url`` into the working directory.

        Args:
            url: Clone URL, possibly carrying credentials
            destination: Directory name to clone into
            secrets: Values masked in logs and error messages

        Returns:
            Path of the new working copy
        """
        self._secrets.extend(s for s in secrets if s)
        args = ["clone", url]
        if destination:
            args.append(destination)

        self.working_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Cloning {mask_credentials(url, self._secrets)}")
        self._run(args)

        target = destination or url.rstrip('/').rsplit('/', 1)[-1]
        if target.endswith('.git'):
            target = target[:-4]
        return self.working_dir / target

    def fetch(self, remote: str = "origin") -> None:
        logger.info(f"Fetching {remote}")
        self._run(["fetch", remote])

    def build_diff_command(
        self,
        base_branch: str,
        head_branch: str,
        exclusions: Sequence[str] = (),
        direction: str = DIFF_BASE_HEAD,
    ) -> List[str]:
        """
        Build the git diff argument list.

        The comparison covers the whole tree (``-- .``) and each exclusion
        becomes one ``:!<pattern>`` pathspec, in order.
        """
        if direction not in DIFF_DIRECTIONS:
            raise ConfigurationError(f"Unknown diff direction: {direction}")

        lower, upper = f"origin/{base_branch}", f"origin/{head_branch}"
        if direction == DIFF_HEAD_BASE:
            lower, upper = upper, lower

        command = ["diff", lower, upper, "--", "."]
        command.extend(f"{EXCLUDE_PREFIX}{pattern}" for pattern in exclusions if pattern)
        return command

    def diff(
        self,
        base_branch: str,
        head_branch: str,
        exclusions: Sequence[str] = (),
        direction: str = DIFF_BASE_HEAD,
    ) -> DiffResult:
        """
        Compute the filtered diff between two remote branches.

        Args:
            base_branch: Pull request base branch
            head_branch: Pull request head branch
            exclusions: Paths and globs left out of the comparison
            direction: ``base-head`` or ``head-base``

        Returns:
            DiffResult with the raw diff output

        Raises:
            GitCommandError: If a ref does not resolve or git is missing
        """
        args = self.build_diff_command(base_branch, head_branch, exclusions, direction)
        output = self._run(args)

        result = DiffResult(
            content=output,
            base_ref=base_branch,
            head_ref=head_branch,
            exclusions=tuple(exclusions),
        )
        logger.info(f"Diff {base_branch}..{head_branch}: {result.size} bytes")
        logger.debug(f"diff: {result.text}")
        return result
