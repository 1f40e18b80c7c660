# backend/employee_api/api/auth_routes.py

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, StringConstraints
from sqlalchemy.orm import Session

from employee_api.api.deps_auth import CurrentUser, get_current_user, get_db, get_token_signer
from employee_api.core.security import TokenSigner
from employee_api.services import auth as auth_service
from employee_api.services.auth import LoginResult

router = APIRouter()


class LoginIn(BaseModel):
    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    password: Annotated[str, StringConstraints(min_length=1)]


@router.post("/login", response_model=LoginResult)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    signer: TokenSigner = Depends(get_token_signer),
):
    return auth_service.login(db, signer, payload.username, payload.password)


@router.get("/me", response_model=CurrentUser)
def me(current_user: CurrentUser = Depends(get_current_user)):
    return current_user
