"""
Pydantic schemas for the recommendation pipeline and its HTTP endpoint.

MatchRecord and RecommendationResult are produced by the pipeline itself;
the request/response models define the POST /recommendations contract.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator


# ============================================================================
# PIPELINE MODELS
# ============================================================================

class MatchRecord(BaseModel):
    """A stored document returned by the similarity search."""
    content: str = Field(..., description="Text content of the stored document")
    id: Optional[Union[int, str]] = Field(None, description="Primary key of the document row")
    similarity: Optional[float] = Field(
        None,
        description="Similarity score computed by the database function",
    )


class RecommendationResult(BaseModel):
    """Outcome of a single pipeline run."""
    query: str
    context: str
    recommendation: str


# ============================================================================
# REQUEST MODELS
# ============================================================================

class RecommendationRequest(BaseModel):
    """Request to get a recommendation for a free-text query."""
    query: str = Field(
        ...,
        description="What the user is looking for, in natural language.",
        min_length=1,
        max_length=1000,
        examples=["An episode Elon Musk would enjoy"],
    )

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, v: str) -> str:
        # Checked only; the query is forwarded untrimmed
        if not v.strip():
            raise ValueError("query must contain non-whitespace characters")
        return v


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class RecommendationResponse(BaseModel):
    """Successful recommendation."""
    query: str = Field(..., description="The query exactly as received")
    recommendation: str = Field(..., description="Text generated by the chat model")
    context: str = Field(..., description="Content of the best matching document")


class ErrorResponse(BaseModel):
    """Error body shared by all failure responses."""
    error: str = Field(..., examples=["no_match"])
    details: str = Field(..., examples=["No stored document matched the query"])
