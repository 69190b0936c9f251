"""
Provisioning service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → resolver → detection → execution →
orchestration)::

    from nvim_bootstrap.core.services.provision import run_setup
"""

# ── L2: Resolver ──
from nvim_bootstrap.core.services.provision.resolver.tool_resolution import (  # noqa: F401
    command_name,
    tool_specs_for,
)

# ── L3: Detection ──
from nvim_bootstrap.core.services.provision.detection.platform import (  # noqa: F401
    PlatformSignals,
    detect_platform,
    read_platform_signals,
)

# ── L4: Execution ──
from nvim_bootstrap.core.services.provision.execution.archive import (  # noqa: F401
    install_archive_tool,
)
from nvim_bootstrap.core.services.provision.execution.installer import (  # noqa: F401
    install_dependencies,
)
from nvim_bootstrap.core.services.provision.execution.materialize import (  # noqa: F401
    materialize_config,
)
from nvim_bootstrap.core.services.provision.execution.plugin_manager import (  # noqa: F401
    bootstrap_plugin_manager,
)

# ── L5: Orchestration ──
from nvim_bootstrap.core.services.provision.orchestration.orchestrator import (  # noqa: F401
    run_setup,
)
