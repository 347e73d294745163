from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...core.dependencies import get_access_gate
from ...services.access_service import AccessGate, SubscribedIdentity
from ...services.user_service import Identity

_bearer_scheme = HTTPBearer(auto_error=False)


def require_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    gate: AccessGate = Depends(get_access_gate),
) -> Identity:
    token = credentials.credentials if credentials else None
    return gate.authenticate(token)


def require_subscriber(
    identity: Identity = Depends(require_identity),
    gate: AccessGate = Depends(get_access_gate),
) -> SubscribedIdentity:
    return gate.require_subscription(identity)
