"""
L5 Orchestration — ``__init__.py`` re-exports top-level coordinators.

These are the entry points that external code calls.
"""

from nvim_bootstrap.core.services.provision.orchestration.orchestrator import (  # noqa: F401
    run_setup,
)
