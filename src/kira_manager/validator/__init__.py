"""
Validator lifecycle and governance.

Lifecycle transitions (pause, unpause, activate) and governance actions
(permission grants, identity records) all run through the transaction
pipeline and report failures with the same error taxonomy.
"""

from .governance import GovernanceService
from .permissions import POST_GENESIS_PERMISSIONS, Permission
from .service import ValidatorLifecycle
from .states import (
    ACTIVATE,
    PAUSE,
    UNPAUSE,
    StateTransition,
    ValidatorState,
    ValidatorStatus,
)

__all__ = [
    "ACTIVATE",
    "GovernanceService",
    "PAUSE",
    "POST_GENESIS_PERMISSIONS",
    "Permission",
    "StateTransition",
    "UNPAUSE",
    "ValidatorLifecycle",
    "ValidatorState",
    "ValidatorStatus",
]
