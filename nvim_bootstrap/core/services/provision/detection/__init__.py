"""
L3 Detection — ``__init__.py`` re-exports public detection API.
"""

from nvim_bootstrap.core.services.provision.detection.platform import (  # noqa: F401
    PlatformSignals,
    detect_platform,
    parse_os_release,
    read_platform_signals,
)
from nvim_bootstrap.core.services.provision.detection.prerequisites import (  # noqa: F401
    check_prerequisites,
)
from nvim_bootstrap.core.services.provision.detection.shell import (  # noqa: F401
    local_bin_configured,
)
from nvim_bootstrap.core.services.provision.detection.system_deps import (  # noqa: F401
    is_package_installed,
)
from nvim_bootstrap.core.services.provision.detection.tools import (  # noqa: F401
    check_tools,
    is_installed,
    is_tool_present,
)
