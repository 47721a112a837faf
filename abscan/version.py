"""Build and runtime version information."""

from __future__ import annotations

import platform
from dataclasses import dataclass

GIT_COMMIT = "unknown"
GIT_BRANCH = "unknown"
BUILD_TIME = "unknown"
VERSION = "unknown"


@dataclass(frozen=True)
class Info:
    git_commit: str
    git_branch: str
    build_time: str
    version: str
    python_version: str

    def __str__(self) -> str:
        return (
            f"Version: {self.version}\n"
            f"Git Branch: {self.git_branch}\n"
            f"Git Commit: {self.git_commit}\n"
            f"Build Time: {self.build_time}\n"
            f"Python Version: {self.python_version}"
        )


def get_version() -> Info:
    """Collect the build stamps and the running interpreter version."""
    return Info(
        git_commit=GIT_COMMIT,
        git_branch=GIT_BRANCH,
        build_time=BUILD_TIME,
        version=VERSION,
        python_version=platform.python_version(),
    )