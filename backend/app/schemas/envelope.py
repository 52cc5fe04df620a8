"""
Floreria Backend — Response Envelope
======================================

What:  The uniform wrapper every JSON response uses.

    {"ok": true,  "data": <payload>, "error": null}
    {"ok": false, "data": null,      "error": "Ramo no encontrado"}

Successful routes return Envelope.success(...); main.py's exception handlers
build the failure form with Envelope.failure(...).
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class Envelope(BaseModel):
    ok: bool = Field(description="True when the operation succeeded")
    data: Any = Field(default=None, description="Operation result, null on error")
    error: Optional[str] = Field(default=None, description="Human-readable error, null on success")

    @classmethod
    def success(cls, data: Any = None) -> "Envelope":
        return cls(ok=True, data=data, error=None)

    @classmethod
    def failure(cls, error: str) -> "Envelope":
        return cls(ok=False, data=None, error=error)


class RecordCreated(BaseModel):
    """Payload of a successful POST."""
    id: int
    message: str


class MessagePayload(BaseModel):
    """Payload of a successful PUT or DELETE."""
    message: str


class HealthPayload(BaseModel):
    status: str = Field(description="Liveness message")
    timestamp: str = Field(description="Server time, YYYY-MM-DD HH:MM:SS")
