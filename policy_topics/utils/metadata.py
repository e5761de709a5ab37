"""Run metadata collection for exported analysis runs."""

import os
import platform
import subprocess
from datetime import datetime
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Dict, List

TRACKED_PACKAGES = ("numpy", "pandas", "pydantic", "nltk")


class RunMetadata:
    """
    Collects run environment metadata.

    Gathers git information, platform details, library versions and a
    timestamp so an exported run can be traced back to the code and
    environment that produced it.

    Usage:
        metadata = RunMetadata.gather()

        # Returns dict with keys:
        # - timestamp: ISO 8601 timestamp with timezone
        # - python_version: Python version
        # - platform: Platform string
        # - git_commit: Short SHA
        # - git_branch: Branch name
        # - researcher: Git username or OS username
        # - working_dir: Current working directory
        # - package_versions: {"numpy": "...", ...}
    """

    @staticmethod
    def gather() -> Dict[str, object]:
        """
        Gather run environment metadata.

        Returns:
            Dict with the keys listed on the class; git fields are
            "unknown" outside a repository
        """
        git_commit = RunMetadata._run_git(["rev-parse", "--short", "HEAD"])
        git_branch = RunMetadata._run_git(["rev-parse", "--abbrev-ref", "HEAD"])
        git_user = RunMetadata._run_git(["config", "user.name"])

        researcher = git_user if git_user != "unknown" else os.environ.get(
            "USER", os.environ.get("USERNAME", "unknown")
        )

        return {
            "timestamp": datetime.now().astimezone().isoformat(),
            "python_version": platform.python_version(),
            "platform": platform.platform(),
            "git_commit": git_commit,
            "git_branch": git_branch,
            "researcher": researcher,
            "working_dir": str(Path.cwd()),
            "package_versions": RunMetadata.package_versions(),
        }

    @staticmethod
    def package_versions() -> Dict[str, str]:
        versions = {}
        for name in TRACKED_PACKAGES:
            try:
                versions[name] = importlib_metadata.version(name)
            except importlib_metadata.PackageNotFoundError:
                versions[name] = "not installed"
        return versions

    @staticmethod
    def _run_git(args: List[str]) -> str:
        """
        Run git command, return 'unknown' on error.

        Args:
            args: Git command arguments (e.g., ["rev-parse", "HEAD"])
        """
        try:
            return subprocess.check_output(
                ["git"] + args,
                stderr=subprocess.DEVNULL
            ).decode('utf-8').strip()
        except (subprocess.CalledProcessError, FileNotFoundError):
            return "unknown"
