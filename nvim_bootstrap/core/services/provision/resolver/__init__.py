"""
L2 Resolver — ``__init__.py`` re-exports public resolver API.
"""

from nvim_bootstrap.core.services.provision.resolver.tool_resolution import (  # noqa: F401
    command_name,
    tool_spec,
    tool_specs_for,
)
