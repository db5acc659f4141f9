# This project was developed with assistance from AI tools.
"""Problem Details (RFC 7807) body returned for every error response."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body shared by all wizard endpoints.

    ``type`` names the problem category (``urn:loan-wizard:problem:<slug>``)
    so clients can branch on it without parsing ``detail``.
    """

    type: str = Field(default="about:blank", description="Problem category URN.")
    title: str = Field(description="Reason phrase of the HTTP status.")
    status: int = Field(description="HTTP status code.")
    detail: str = Field(default="", description="What went wrong with this request.")
    instance: str = Field(default="", description="Request path that produced the error.")
    request_id: str = Field(default="", description="Echo of X-Request-ID, or a generated id.")
