from .step_10_resolve_arch import ResolveArchStep
from .step_20_install_binary import InstallBinaryStep
from .step_30_bootstrap_config import BootstrapConfigStep
from .step_90_finalize_permissions import FinalizePermissionsStep

__all__ = [
    "ResolveArchStep",
    "InstallBinaryStep",
    "BootstrapConfigStep",
    "FinalizePermissionsStep",
]
