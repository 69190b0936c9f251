"""
Tool and outcome models — what to install, and what happened.

``InstallOutcome`` plays the role of an execution receipt: installers
never raise for a single package, they return an outcome.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolSpec(BaseModel):
    """One installable dependency on one platform."""

    model_config = ConfigDict(frozen=True)

    name: str       # abstract tool name ("fd", "neovim")
    package: str    # package-manager name ("fd-find", "neovim")
    command: str    # executable that proves the install ("fdfind", "nvim")


OutcomeStatus = Literal["already_present", "installed", "failed"]


class InstallOutcome(BaseModel):
    """Result of provisioning a single tool."""

    tool: str
    status: OutcomeStatus
    method: str = ""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status != "failed"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def already_present(cls, tool: str, method: str = "", **kwargs: Any) -> InstallOutcome:
        return cls(tool=tool, status="already_present", method=method, **kwargs)

    @classmethod
    def installed(cls, tool: str, method: str = "", **kwargs: Any) -> InstallOutcome:
        return cls(tool=tool, status="installed", method=method, **kwargs)

    @classmethod
    def failure(cls, tool: str, reason: str, method: str = "", **kwargs: Any) -> InstallOutcome:
        return cls(tool=tool, status="failed", method=method, reason=reason, **kwargs)


class InstallReport(BaseModel):
    """Ordered collection of outcomes for the dependency stage."""

    outcomes: list[InstallOutcome] = Field(default_factory=list)

    def add(self, outcome: InstallOutcome) -> None:
        self.outcomes.append(outcome)

    def extend(self, outcomes: list[InstallOutcome]) -> None:
        self.outcomes.extend(outcomes)

    def get(self, tool: str) -> InstallOutcome | None:
        """Last recorded outcome for a tool."""
        for outcome in reversed(self.outcomes):
            if outcome.tool == tool:
                return outcome
        return None

    def with_status(self, status: OutcomeStatus) -> list[InstallOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def installed(self) -> list[InstallOutcome]:
        return self.with_status("installed")

    @property
    def already_present(self) -> list[InstallOutcome]:
        return self.with_status("already_present")

    @property
    def failed(self) -> list[InstallOutcome]:
        return self.with_status("failed")

    @property
    def warnings(self) -> list[str]:
        return [f"{o.tool}: {o.reason}" for o in self.failed]

    def summary(self) -> dict[str, int]:
        return {
            "total": len(self.outcomes),
            "installed": len(self.installed),
            "already_present": len(self.already_present),
            "failed": len(self.failed),
        }
