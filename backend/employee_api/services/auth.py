import logging

from pydantic import BaseModel
from sqlalchemy.orm import Session

from employee_api.core.errors import InvalidCredentials, ValidationFailed, FIELD_MESSAGES
from employee_api.core.security import TokenSigner, verify_password, dummy_verify
from employee_api.models.account import Account

logger = logging.getLogger("employee_api.auth")


class AccountSummary(BaseModel):
    id: int
    username: str
    role: str

    class Config:
        from_attributes = True


class LoginResult(BaseModel):
    token: str
    token_type: str = "bearer"
    user: AccountSummary


def login(db: Session, signer: TokenSigner, username: str, password: str) -> LoginResult:
    username = (username or "").strip()
    password = password or ""

    missing = [f for f, v in (("username", username), ("password", password)) if not v]
    if missing:
        raise ValidationFailed([{"field": f, "message": FIELD_MESSAGES[f]} for f in missing])

    account = db.query(Account).filter(Account.username == username).first()

    if account is None:
        dummy_verify()
        logger.warning("Login failed for username=%s", username)
        raise InvalidCredentials()

    if not verify_password(password, account.password_hash):
        logger.warning("Login failed for username=%s", username)
        raise InvalidCredentials()

    token = signer.issue(
        {
            "sub": str(account.id),
            "id": account.id,
            "username": account.username,
            "role": account.role,
        }
    )

    logger.info("Login succeeded for username=%s", account.username)
    return LoginResult(token=token, user=AccountSummary.model_validate(account))
