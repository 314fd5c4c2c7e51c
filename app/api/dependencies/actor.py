from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException

from infrastructure.logging import get_module_logger

logger = get_module_logger()


def get_actor_id(
    x_actor_id: Annotated[Optional[str], Header(alias="X-Actor-Id")] = None,
) -> str:
    """Account id of the caller, set by the authenticating proxy.

    Raises:
        HTTPException: 401 when the header is missing or blank.
    """
    if not x_actor_id or not x_actor_id.strip():
        logger.warning("actor_header_missing")
        raise HTTPException(status_code=401, detail="Missing X-Actor-Id header")
    return x_actor_id.strip()


ActorIdDep = Annotated[str, Depends(get_actor_id)]
