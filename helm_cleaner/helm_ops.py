from __future__ import annotations

import subprocess
from typing import Protocol

from helm_cleaner.errors import HelmLaunchError, HelmUninstallFailed
from helm_cleaner.log import get_logger

logger = get_logger(__name__)


def run_cmd(cmd: list[str]) -> int:
    """
    Run cmd to completion and return its exit code.
    stdout/stderr are inherited so helm's own messages reach the terminal.
    """
    logger.debug("> %s", " ".join(cmd))
    return subprocess.run(cmd, check=False).returncode


def helm_uninstall_cmd(helm_bin: str, release: str, namespace: str) -> list[str]:
    return [helm_bin, "uninstall", release, "-n", namespace]


class Uninstaller(Protocol):
    def run(self, release: str, namespace: str) -> None:
        """Raise HelmLaunchError or HelmUninstallFailed; return normally on success."""
        ...


class HelmUninstaller:
    def __init__(self, helm_bin: str = "helm"):
        self._helm_bin = helm_bin

    def run(self, release: str, namespace: str) -> None:
        cmd = helm_uninstall_cmd(self._helm_bin, release, namespace)
        print(f"Running: {' '.join(cmd)}")
        try:
            returncode = run_cmd(cmd)
        except OSError as e:
            raise HelmLaunchError(self._helm_bin, e) from e

        if returncode != 0:
            raise HelmUninstallFailed(release, namespace, returncode)

        print(f"✅ Release '{release}' uninstalled from '{namespace}'")
