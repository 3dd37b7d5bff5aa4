# transport/dto.py
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


class RequestParams(BaseModel):
    """
    Everything a single API call carries besides its method and path.
    """

    qs: Optional[Dict[str, Any]] = None
    body: Any = None
    headers: Optional[Dict[str, str]] = None


class APIResponse(BaseModel):
    """
    A transport-neutral view of an HTTP response with the body already decoded.
    """

    status_code: int
    body: Any = None
    headers: Dict[str, str] = Field(default_factory=dict)
    reason: str = ""
