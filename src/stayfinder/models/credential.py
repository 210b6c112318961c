from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class SystemCredential(BaseModel):
    """API access for one external booking system, as kept in the credential store."""

    system_name: str
    endpoint_url: str
    api_key: str
    api_secret: Optional[str] = None
    is_active: bool = True

    def __repr__(self) -> str:
        # Keep key material out of logs
        return f"SystemCredential(system_name={self.system_name!r}, endpoint_url={self.endpoint_url!r}, is_active={self.is_active})"

    __str__ = __repr__
