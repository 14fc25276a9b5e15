from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from sanchalana.database import get_db
from sanchalana.cryptography import decode_access_token
from sanchalana.exceptions import AuthenticationError, PermissionDeniedError
from sanchalana.models.session_model import AuthSession
from sanchalana.models.admin_model import Admin

# Bearer token security
security = HTTPBearer(auto_error=False)


async def get_current_session(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> AuthSession:
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    payload = decode_access_token(credentials.credentials)

    auth_session = db.query(AuthSession).filter(
        AuthSession.id == payload["sid"],
        AuthSession.user_id == payload["sub"]
    ).first()
    if not auth_session:
        raise AuthenticationError("Session has ended, please sign in again")
    return auth_session


async def get_current_user(auth_session: AuthSession = Depends(get_current_session)):
    return auth_session.user


async def get_current_admin(
    auth_session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db)
) -> Admin:
    admin = db.query(Admin).filter(Admin.id == auth_session.user_id).first()
    if not admin:
        raise PermissionDeniedError("Admin access required")
    return admin


def authenticate_websocket(db: Session, token: str):
    """Resolve a websocket's ?token= to its auth session, or None."""
    if not token:
        return None
    try:
        payload = decode_access_token(token)
    except AuthenticationError:
        return None
    return db.query(AuthSession).filter(
        AuthSession.id == payload["sid"],
        AuthSession.user_id == payload["sub"]
    ).first()
