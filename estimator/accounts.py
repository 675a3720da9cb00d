"""
Account scoping for requests.

There is no authentication. Callers identify the account whose override
catalog and saved estimates they are working with via the X-Account-Id
header; without one, the configured default account is used.
"""

from typing import Optional

from fastapi import Header, HTTPException

from .config import settings

MAX_ACCOUNT_ID_LENGTH = 128


def get_account_id(x_account_id: Optional[str] = Header(None)) -> str:
    """FastAPI dependency. Returns the account id for this request."""
    if x_account_id is None or not x_account_id.strip():
        return settings.DEFAULT_ACCOUNT_ID
    account_id = x_account_id.strip()
    if len(account_id) > MAX_ACCOUNT_ID_LENGTH:
        raise HTTPException(status_code=400, detail="X-Account-Id is too long")
    return account_id
