"""
Schemas for GET /health.
"""

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Liveness plus a local configuration check (no provider or datastore calls)."""

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "status": "ok",
            "service": "episode-recommender",
            "version": "0.1.0",
            "configured": True,
            "match_function": "match_documents",
        }
    })

    status: str = Field(default="ok", description="Always 'ok' while the process serves requests")
    service: str = Field(default="episode-recommender", description="Service name")
    version: str = Field(..., description="Installed recommender version")
    configured: bool = Field(
        ...,
        description="Whether credentials and tunables pass validation; "
                    "POST /recommendations answers 503 while this is false",
    )
    match_function: str = Field(..., description="Supabase RPC used for the similarity search")
