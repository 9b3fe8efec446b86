class HelmCleanerError(Exception):
    """Base class for every failure that should end the run with a non-zero exit."""


class ConfigError(HelmCleanerError):
    pass


class ClusterQueryError(HelmCleanerError):
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class HelmLaunchError(HelmCleanerError):
    """The helm binary could not be started at all (missing, not executable, ...)."""

    def __init__(self, helm_bin: str, cause: OSError):
        super().__init__(f"Failed to run helm uninstall ({helm_bin}): {cause}")
        self.helm_bin = helm_bin
        self.cause = cause


class HelmUninstallFailed(HelmCleanerError):
    def __init__(self, release: str, namespace: str, returncode: int):
        super().__init__(
            f"helm uninstall failed for release '{release}' in namespace '{namespace}' (exit {returncode})"
        )
        self.release = release
        self.namespace = namespace
        self.returncode = returncode


class NamespaceDeleteError(HelmCleanerError):
    def __init__(self, namespace: str, status: int | None, reason: str):
        super().__init__(f"Failed to delete namespace '{namespace}': {reason}")
        self.namespace = namespace
        self.status = status
