"""Response bodies shared by every router: errors and the health probe."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of a 400 or 503 response."""

    detail: str = Field(description="What went wrong, for a human reader")
    code: str | None = Field(default=None, description="Stable code for clients to branch on, when there is one")


class HealthResponse(BaseModel):
    """Liveness probe body."""

    status: str = Field(description="Always 'ok' when the process is serving")
    message: str = Field(description="Human-readable status message")
