"""
L0 Data — ``__init__.py`` re-exports all data constants.
"""

from nvim_bootstrap.core.services.provision.data.constants import (  # noqa: F401
    _IARCH_MAP,
    LAZY_REF,
    LAZY_REPO,
    NPM_PACKAGES,
)
from nvim_bootstrap.core.services.provision.data.profile_maps import (  # noqa: F401
    _PROFILE_MAP,
    ZSH_INTEGRATION_CANDIDATES,
)
from nvim_bootstrap.core.services.provision.data.tools import (  # noqa: F401
    COMMAND_NAMES,
    PACKAGE_MANAGERS,
    PLATFORM_PACKAGES,
    REQUIRED_TOOLS,
)
