from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import JWTError, jwt
import bcrypt

from sanchalana.constant_file import (secret_key,
                                      jwt_algorithm,
                                      access_token_expire_minutes,
                                      bcrypt_rounds)
from sanchalana.exceptions import AuthenticationError


def encrypt_password(password: str) -> str:
    """Hash password with bcrypt"""
    # Bcrypt has a 72 byte limit - truncate password if necessary
    password_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=bcrypt_rounds))
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    password_bytes = plain_password.encode('utf-8')[:72]
    return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))


def create_access_token(user_id: str, session_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token bound to one auth session"""
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=access_token_expire_minutes))
    to_encode = {"sub": user_id, "sid": session_id, "exp": expire, "type": "access"}
    return jwt.encode(to_encode, secret_key, algorithm=jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    try:
        payload = jwt.decode(token, secret_key, algorithms=[jwt_algorithm])
    except JWTError:
        raise AuthenticationError("Could not validate credentials")

    if payload.get("type") != "access" or not payload.get("sub") or not payload.get("sid"):
        raise AuthenticationError("Invalid token")
    return payload
