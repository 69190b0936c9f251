"""
L4 Execution — ``__init__.py`` re-exports all execution functions.

These functions WRITE to the system: package installs, clones,
file copies, symlinks and backups.
"""

from nvim_bootstrap.core.services.provision.execution.archive import (  # noqa: F401
    install_archive_tool,
    pick_integration_dir,
)
from nvim_bootstrap.core.services.provision.execution.backup import (  # noqa: F401
    backup_existing,
    backup_path_for,
    list_backups,
)
from nvim_bootstrap.core.services.provision.execution.extras import (  # noqa: F401
    install_eza,
    install_lua_language_server,
    install_npm_globals,
    install_yq,
    link_bat,
    link_fd,
)
from nvim_bootstrap.core.services.provision.execution.installer import (  # noqa: F401
    install_dependencies,
    install_tool,
)
from nvim_bootstrap.core.services.provision.execution.materialize import (  # noqa: F401
    materialize_config,
)
from nvim_bootstrap.core.services.provision.execution.package_manager import (  # noqa: F401
    AptPackageManager,
    BrewPackageManager,
    PackageManager,
    package_manager_for,
)
from nvim_bootstrap.core.services.provision.execution.plugin_manager import (  # noqa: F401
    bootstrap_plugin_manager,
)
from nvim_bootstrap.core.services.provision.execution.scratch import (  # noqa: F401
    scratch_directory,
)
from nvim_bootstrap.core.services.provision.execution.subprocess_runner import (  # noqa: F401
    _run_subprocess,
)
