"""
Run models — per-stage results and the whole-run report.

The run is a fixed linear sequence of stages.  Each stage ends
``completed``, ``skipped`` or ``failed``; only fatal errors stop the
sequence, and those never produce a report.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, Field

from nvim_bootstrap.core.models.tool import InstallReport

StageStatus = Literal["completed", "skipped", "failed"]

# Stage identifiers, in run order.
STAGE_DEPENDENCIES = "dependencies"
STAGE_PLUGIN_MANAGER = "plugin-manager"
STAGE_ARCHIVE_TOOL = "jira-tool"
STAGE_CONFIG = "config"

STAGE_ORDER: tuple[str, ...] = (
    STAGE_DEPENDENCIES,
    STAGE_PLUGIN_MANAGER,
    STAGE_ARCHIVE_TOOL,
    STAGE_CONFIG,
)


class RunOptions(BaseModel):
    """Caller switches, one per CLI flag."""

    skip_deps: bool = False
    skip_jira: bool = False
    skip_lazy: bool = False
    skip_sync: bool = False
    no_backup: bool = False


class StageResult(BaseModel):
    """Outcome of one stage."""

    name: str
    status: StageStatus = "completed"
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)

    def warn(self, message: str, *, log: logging.Logger) -> None:
        """Log a recoverable warning and record it on the result."""
        log.warning(message)
        self.warnings.append(message)

    @classmethod
    def skipped(cls, name: str, reason: str = "", **kwargs: Any) -> StageResult:
        return cls(name=name, status="skipped", details={"reason": reason}, **kwargs)

    @classmethod
    def failure(cls, name: str, error: str, **kwargs: Any) -> StageResult:
        return cls(name=name, status="failed", error=error, **kwargs)


class RunReport(BaseModel):
    """Everything a completed run did."""

    platform: str
    stages: list[StageResult] = Field(default_factory=list)
    install: InstallReport | None = None

    def add(self, stage: StageResult) -> None:
        self.stages.append(stage)

    def stage(self, name: str) -> StageResult | None:
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    @property
    def warnings(self) -> list[str]:
        return [w for stage in self.stages for w in stage.warnings]

    @property
    def degraded(self) -> bool:
        """True when the run finished with warnings or a failed stage."""
        return any(s.status == "failed" or s.warnings for s in self.stages)

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["degraded"] = self.degraded
        return data
