from __future__ import annotations

import logging
import os
import subprocess
from typing import List, Optional

from .constants import GIT_TIMEOUT_SEC, SEED_SEPARATOR

logger = logging.getLogger(__name__)


class VersionControlError(Exception):
    """Raised when a version-control query has no usable answer."""


class VersionControl:
    """Queries the identity of the checkout the tool runs in."""

    def remote_url(self) -> str:
        raise NotImplementedError

    def toplevel(self) -> str:
        raise NotImplementedError

    def branch(self) -> str:
        raise NotImplementedError


class GitVersionControl(VersionControl):
    def __init__(
        self,
        cwd: Optional[str] = None,
        git_bin: str = "git",
        timeout: float = GIT_TIMEOUT_SEC,
    ) -> None:
        self.cwd = cwd
        self.git_bin = git_bin
        self.timeout = timeout

    def remote_url(self) -> str:
        return self._run(["remote", "get-url", "origin"])

    def toplevel(self) -> str:
        return self._run(["rev-parse", "--show-toplevel"])

    def branch(self) -> str:
        return self._run(["rev-parse", "--abbrev-ref", "HEAD"])

    def _run(self, args: List[str]) -> str:
        cmd = [self.git_bin, *args]
        try:
            completed = subprocess.run(
                cmd,
                cwd=self.cwd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise VersionControlError(f"{' '.join(cmd)} failed: {exc}") from exc
        value = completed.stdout.strip()
        if not value:
            raise VersionControlError(f"{' '.join(cmd)} returned no output")
        return value


class StaticVersionControl(VersionControl):
    """Canned answers; a ``None`` or blank value behaves like a failed query."""

    def __init__(
        self,
        remote_url: Optional[str] = None,
        toplevel: Optional[str] = None,
        branch: Optional[str] = None,
    ) -> None:
        self._remote_url = remote_url
        self._toplevel = toplevel
        self._branch = branch

    def remote_url(self) -> str:
        return self._answer("remote_url", self._remote_url)

    def toplevel(self) -> str:
        return self._answer("toplevel", self._toplevel)

    def branch(self) -> str:
        return self._answer("branch", self._branch)

    @staticmethod
    def _answer(query: str, value: Optional[str]) -> str:
        answer = (value or "").strip()
        if not answer:
            raise VersionControlError(f"{query} unavailable")
        return answer


def resolve_repository_identity(vcs: Optional[VersionControl] = None) -> str:
    vcs = vcs or GitVersionControl()
    try:
        return vcs.remote_url()
    except VersionControlError as exc:
        logger.debug("remote_url_unavailable", {"reason": str(exc)})
    try:
        return vcs.toplevel()
    except VersionControlError as exc:
        logger.debug("toplevel_unavailable", {"reason": str(exc)})
    cwd = os.getcwd()
    logger.warning("repository_identity_fallback", {"cwd": cwd})
    return cwd


def resolve_branch_name(vcs: Optional[VersionControl] = None) -> str:
    vcs = vcs or GitVersionControl()
    try:
        return vcs.branch()
    except VersionControlError as exc:
        logger.warning("branch_unavailable", {"reason": str(exc)})
        return ""


def build_seed(repository: str, branch: str) -> str:
    return f"{repository}{SEED_SEPARATOR}{branch}"
