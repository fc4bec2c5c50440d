"""
Authentication API Routes
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from framebox.core.security import (
    AuthSession, CredentialVerifier, create_access_token,
    get_credential_verifier, get_current_session
)
from framebox.schemas import LoginRequest, Token, SessionResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=Token)
async def login(
    login_data: LoginRequest,
    verifier: CredentialVerifier = Depends(get_credential_verifier)
):
    """Exchange the operator's credentials for a bearer token"""
    if not verifier.verify(login_data.email, login_data.password):
        logger.info("Rejected login for %s", login_data.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(data={"sub": login_data.email.strip().lower()})
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=SessionResponse)
async def get_me(current_session: AuthSession = Depends(get_current_session)):
    """Current session"""
    return {
        "email": current_session.email,
        "authenticated": True,
        "expires_at": current_session.expires_at
    }
