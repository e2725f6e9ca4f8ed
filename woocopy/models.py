from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .utils.sanitizers import count_words

AttributeValue = Union[str, int, float, bool, List[Union[str, int, float, bool]]]


class _CamelModel(BaseModel):
    """Snake-case fields, camelCase on the wire"""

    model_config = ConfigDict(populate_by_name=True)


# ============ Business Profile ============
class BusinessType(str, Enum):
    MANUFACTURER = "manufacturer"
    WHOLESALER = "wholesaler"
    DISTRIBUTOR = "distributor"
    RETAILER = "retailer"
    SUPPLIER = "supplier"


class WritingTone(str, Enum):
    PROFESSIONAL = "professional"
    TECHNICAL = "technical"
    SALES = "sales"
    NEUTRAL = "neutral"


class BusinessProfile(_CamelModel):
    company_name: str = Field(default="", alias="companyName")
    target_audience: str = Field(default="", alias="targetAudience")
    description: str = ""
    business_type: BusinessType = Field(default=BusinessType.WHOLESALER, alias="businessType")
    usps: List[str] = Field(default_factory=list)
    writing_tone: WritingTone = Field(default=WritingTone.PROFESSIONAL, alias="writingTone")

    @property
    def generation_permitted(self) -> bool:
        """Company name and description are the only hard requirements"""
        return bool(self.company_name.strip()) and bool(self.description.strip())


# ============ Catalog Models ============
class Category(BaseModel):
    id: Optional[int] = None
    name: str = ""
    slug: str = ""


class ProductImage(BaseModel):
    id: Optional[int] = None
    src: str = ""
    alt: str = ""


class CatalogItem(_CamelModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str = ""
    sku: str = ""
    price: str = ""
    regular_price: str = Field(default="", alias="regularPrice")
    sale_price: str = Field(default="", alias="salePrice")
    categories: List[Category] = Field(default_factory=list)
    attributes: Dict[str, AttributeValue] = Field(default_factory=dict)
    images: List[ProductImage] = Field(default_factory=list)
    status: str = ""
    permalink: str = ""
    description: str = ""
    short_description: str = Field(default="", alias="shortDescription")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return str(value)

    @property
    def primary_category(self) -> Optional[str]:
        if self.categories and self.categories[0].name:
            return self.categories[0].name
        return None


class CatalogPage(_CamelModel):
    items: List[CatalogItem] = Field(default_factory=list)
    total_pages: int = Field(default=1, alias="totalPages")
    total: int = 0


class ConnectionProfile(_CamelModel):
    site_url: str = Field(default="", alias="siteUrl")
    consumer_key: str = Field(default="", alias="consumerKey")
    consumer_secret: str = Field(default="", alias="consumerSecret")
    is_connected: bool = Field(default=False, alias="isConnected")


# ============ Generation Models ============
class GenerationResult(_CamelModel):
    long_description: str = Field(alias="longDescription")
    short_description: str = Field(alias="shortDescription")
    word_count: int = Field(default=0, alias="wordCount")

    @model_validator(mode="after")
    def _recount_words(self) -> "GenerationResult":
        # Never trust a supplied count
        self.word_count = count_words(self.long_description)
        return self


class ProgressEvent(_CamelModel):
    phase: str = "generate"
    current: int
    total: int
    item_label: Optional[str] = Field(default=None, alias="itemLabel")


class BatchRunState(_CamelModel):
    target_ids: List[str] = Field(default_factory=list, alias="targetIds")
    index: int = 0
    total: int = 0
    results: Dict[str, GenerationResult] = Field(default_factory=dict)
    last_error: Optional[str] = Field(default=None, alias="lastError")

    @property
    def complete(self) -> bool:
        return self.index >= self.total


# ============ Publish Models ============
class UpdateRecord(_CamelModel):
    item_id: str = Field(alias="itemId")
    long_description: str = Field(alias="longDescription")
    short_description: str = Field(alias="shortDescription")


class PublishOutcome(_CamelModel):
    item_id: str = Field(alias="itemId")
    success: bool
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class PublishRunState(_CamelModel):
    updates: List[UpdateRecord] = Field(default_factory=list)
    index: int = 0
    total: int = 0
    outcomes: List[PublishOutcome] = Field(default_factory=list)

    @property
    def complete(self) -> bool:
        return self.index >= self.total


class RunSummary(_CamelModel):
    success: bool
    count: int = 0
    pushed: bool = False
    succeeded: int = 0
    failed: int = 0
    errors: Dict[str, str] = Field(default_factory=dict)
    message: Optional[str] = None
    cancelled: bool = False


# ============ Request / Response Models ============
class ConnectionRequest(_CamelModel):
    site_url: str = Field(default="", alias="siteUrl")
    consumer_key: str = Field(default="", alias="consumerKey")
    consumer_secret: str = Field(default="", alias="consumerSecret")


class USPRequest(BaseModel):
    usp: str


class SelectionRequest(BaseModel):
    ids: List[str]

    @field_validator("ids", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> List[str]:
        return [str(v) for v in value or []]


class GenerateRequest(_CamelModel):
    auto_push: Optional[bool] = Field(default=None, alias="autoPush")


class GeneratorKeyRequest(_CamelModel):
    api_key: str = Field(default="", alias="apiKey")


class AutoPushRequest(_CamelModel):
    auto_push: bool = Field(alias="autoPush")


class RunStatusResponse(_CamelModel):
    state: str
    last_state: str = Field(alias="lastState")
    progress: Optional[ProgressEvent] = None
    can_push: bool = Field(alias="canPush")
    auto_push: bool = Field(alias="autoPush")
    recently_updated: List[str] = Field(default_factory=list, alias="recentlyUpdated")
    summary: Optional[RunSummary] = None
