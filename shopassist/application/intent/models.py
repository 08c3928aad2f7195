"""Intent classification data models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


class QueryIntent(str, Enum):
    """What the user wants from a chat message."""

    PRODUCT_PRICE = "product_price"
    PRODUCT_REVIEWS = "product_reviews"
    PRODUCT_INFO = "product_info"
    PRODUCT_COMPARISON = "product_comparison"
    PRODUCT_SEARCH = "product_search"
    EMAIL_REQUEST = "email_request"
    GENERAL_QUESTION = "general_question"
    GREETING = "greeting"
    ABOUT_ME = "about_me"
    UNKNOWN = "unknown"


class ProductCategory(str, Enum):
    """Category vocabulary recognised in free text."""

    HEADPHONE = "headphone"
    SMARTPHONE = "smartphone"
    TV = "tv"
    SPEAKER = "speaker"
    LAPTOP = "laptop"
    TABLET = "tablet"
    WATCH = "watch"
    CAMERA = "camera"


class PriceRange(BaseModel):
    """Inclusive price bounds in rupees."""
    min: float = Field(..., ge=0)
    max: float = Field(..., gt=0)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_bounds(self):
        if self.min >= self.max:
            raise ValueError(f"min ({self.min}) must be lower than max ({self.max})")
        return self


class ExtractedEntities(BaseModel):
    """Structured values pulled out of a query. Absent means not specified."""
    product_name: Optional[str] = None
    product_category: Optional[ProductCategory] = None
    limit: Optional[int] = Field(default=None, ge=1, le=100)
    price_range: Optional[PriceRange] = None

    class Config:
        frozen = True
        populate_by_name = True
        alias_generator = to_camel
        use_enum_values = True


class IntentClassification(BaseModel):
    """Result of classifying one chat message."""
    intent: QueryIntent = Field(..., description="Final intent after fallbacks and demotion")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence score (0-1)")
    requires_data: bool = Field(..., description="Whether answering needs a product lookup")
    extracted_entities: ExtractedEntities = Field(default_factory=ExtractedEntities)
    reasoning: Optional[str] = None

    class Config:
        frozen = True
        populate_by_name = True
        alias_generator = to_camel
        use_enum_values = True


__all__ = [
    "QueryIntent",
    "ProductCategory",
    "PriceRange",
    "ExtractedEntities",
    "IntentClassification",
]
