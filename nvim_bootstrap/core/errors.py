"""
Provisioning errors — the fatal / step-fatal split.

Fatal errors (``ProvisionError``) halt the whole run; ``main.py`` turns
them into a red message and exit status 1.

Step-fatal errors (``StepFatalError``) abort only the stage that raised
them.  The orchestrator records the stage as failed and moves on.

Recoverable conditions are never exceptions: they are logged as
warnings and recorded on the stage result.
"""

from __future__ import annotations


class ProvisionError(Exception):
    """Fatal error — the run cannot continue."""


class UnsupportedPlatformError(ProvisionError):
    """The host OS has no package-manager mapping."""


class MissingPrerequisiteError(ProvisionError):
    """A hard prerequisite tool (git, tar, brew, ...) is not installed."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class PreconditionError(ProvisionError):
    """A package-source refresh or registration step failed."""


class PluginManagerError(ProvisionError):
    """The plugin manager could not be cloned."""


class ConfigSourceError(ProvisionError):
    """The configuration source tree is missing."""


class ConfigCopyError(ProvisionError):
    """Copying the configuration tree into place failed."""


class ConfigError(ProvisionError):
    """The settings file is unreadable or invalid."""


# ── Step-fatal ──────────────────────────────────────────────────


class StepFatalError(Exception):
    """Aborts the enclosing stage only."""


class ArchiveExtractError(StepFatalError):
    """The tool archive could not be extracted."""


class ArchiveLayoutError(StepFatalError):
    """The extracted archive does not contain the expected tool root."""


class ArchiveInstallError(StepFatalError):
    """The tool binary could not be copied into place."""


class ArchiveNotFoundError(Exception):
    """The tool archive does not exist; the stage is skipped."""
