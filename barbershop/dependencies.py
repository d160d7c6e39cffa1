# barbershop/dependencies.py

from typing import Optional

from fastapi import Header, HTTPException, status


def get_current_user_id(x_user_id: Optional[int] = Header(None)) -> int:
    """
    Caller identity, injected by the auth gateway as X-User-Id.
    """
    if x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return x_user_id
