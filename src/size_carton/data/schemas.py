"""Pydantic schemas for product rows and repository records."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from size_carton.core.models import Category, Product


class ProductRow(BaseModel):
    """One spreadsheet row / repository record before it becomes a Product."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    productname: str = Field(min_length=1, description="Product name")
    type: Category = Field(description="CONDENSER or EVAPORATOR")
    width: float = Field(gt=0, description="Width (mm)")
    height: float = Field(gt=0, description="Height (mm)")
    length: float = Field(gt=0, description="Length (mm)")
    weight: float = Field(ge=0, description="Weight (kg)")
    cbm: float = Field(ge=0, description="Volume (m³), as supplied")

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def to_product(self, product_id: int) -> Product:
        return Product(
            id=product_id,
            name=self.productname,
            category=self.type,
            width=self.width,
            height=self.height,
            length=self.length,
            weight=self.weight,
            cbm=self.cbm,
        )


class ProductRecord(ProductRow):
    """A stored product as returned by the repository (carries its id)."""

    id: int

    def to_product(self, product_id: Optional[int] = None) -> Product:
        return super().to_product(self.id if product_id is None else product_id)


class ProductListResponse(BaseModel):
    """Body of GET /api/get-products."""

    data: list[ProductRecord] = Field(default_factory=list)


class UploadResponse(BaseModel):
    """Body of a successful POST /api/upload-products."""

    model_config = ConfigDict(extra="ignore")

    message: str = ""
