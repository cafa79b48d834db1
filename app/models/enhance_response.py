"""
Enhance Response Pydantic Models

Defines the JSON envelope returned by POST /api/image/enhance.
Field names are shared with the mobile client and must not change.
"""

from typing import Optional

from pydantic import BaseModel, Field


class EnhanceResponse(BaseModel):
    """
    Response model for a successful enhancement.
    """

    success: bool = Field(
        default=True,
        description="Always true for a successful enhancement"
    )
    enhancedImageUrl: str = Field(
        ...,
        description="URL of the first image produced by the enhancement service"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "enhancedImageUrl": "https://v3.fal.media/files/penguin/product_shot.png"
            }
        }
    }


class ErrorResponse(BaseModel):
    """
    Response model for any failed request.
    """

    success: bool = Field(
        default=False,
        description="Always false for errors"
    )
    error: str = Field(
        ...,
        description="Human-readable error summary"
    )
    details: Optional[str] = Field(
        default=None,
        description="Underlying cause, when one is available"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": False,
                "error": "Failed to process image",
                "details": "Remote service returned 422: Unprocessable Entity"
            }
        }
    }
