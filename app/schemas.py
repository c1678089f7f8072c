"""
Pydantic schemas for the inbound webhook body, outbound WooCommerce
documents and the JSON envelopes returned to the source store.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Price = Optional[Union[str, int, float]]


# ── Webhook payload (source store) ───────────────────────────────────────────

class ProductImage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    src: Optional[str] = None
    name: Optional[str] = None
    alt: Optional[str] = None


class ProductAttribute(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    name: str = ""
    slug: Optional[str] = None
    position: Optional[int] = None
    visible: Optional[bool] = None
    variation: Optional[bool] = None
    options: List[str] = []

    @field_validator("options", mode="before")
    @classmethod
    def options_as_labels(cls, v):
        # Sizes like 38 / 40 arrive as JSON numbers
        if isinstance(v, list):
            return [str(o) if isinstance(o, (int, float)) and not isinstance(o, bool) else o for o in v]
        return v


class MetaData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    key: str
    value: Any = None


class WebhookProduct(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    name: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    price: Price = None
    regular_price: Price = None
    sale_price: Price = None
    categories: Optional[List[Any]] = None
    images: List[ProductImage] = []
    attributes: List[ProductAttribute] = []
    meta_data: List[MetaData] = []


# ── Outbound documents (target store) ────────────────────────────────────────

class AttributePayload(BaseModel):
    id: Optional[int] = None
    name: str
    slug: Optional[str] = None
    position: int = 0
    visible: bool = True
    variation: bool = True
    options: List[str] = []


class ReplicationPayload(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    price: Price = None
    regular_price: Price = None
    sale_price: Price = None
    categories: Optional[List[Any]] = None
    images: List[Dict[str, Any]] = []
    attributes: List[AttributePayload] = []
    meta_data: List[Dict[str, Any]] = []


class VariationAttribute(BaseModel):
    id: Optional[int] = None
    option: str


class VariationRequest(BaseModel):
    regular_price: str
    sale_price: str
    attributes: List[VariationAttribute]


# ── Responses ────────────────────────────────────────────────────────────────

class ReplicationResult(BaseModel):
    success: bool = True
    product_id: Any = Field(serialization_alias="productId")
    message: str
    images_processed: Optional[int] = Field(default=None, serialization_alias="imagesProcessed")
    variations_created: Optional[int] = Field(default=None, serialization_alias="variationsCreated")
    variations_failed: Optional[List[str]] = Field(default=None, serialization_alias="variationsFailed")


class ErrorEnvelope(BaseModel):
    error: str
    details: Optional[str] = None
    response: Any = None


class PingResponse(BaseModel):
    status: str = "ok"
    message: str = "Test request received successfully"


class HealthResponse(BaseModel):
    status: str = "ok"
    catalog: str = "configured"
