"""
Pydantic models for the part search API.
"""

from typing import Any, Union

from pydantic import BaseModel, Field


class PartItem(BaseModel):
    """A single catalog record as presented to the frontend."""

    id: Union[int, str, None] = Field(..., description="Supplier record identifier.")
    article: str = Field("", description="Supplier article number or search code.")
    manufacturer: str = Field("", description="Manufacturer display name.")
    name: str = Field("", description="Product description.")

    @classmethod
    def from_supplier_record(cls, record: dict[str, Any]) -> "PartItem":
        """Normalize a raw supplier record, falling back field by field."""

        def first_present(*keys: str) -> Any:
            for key in keys:
                value = record.get(key)
                if value is not None:
                    return value
            return ""

        return cls(
            id=record.get("id"),
            article=str(first_present("dataSupplierArticleNumber", "searchCode")),
            manufacturer=str(first_present("manufacturerDescription")),
            name=str(first_present("productDescription", "description")),
        )


class SearchResponse(BaseModel):
    """Successful search payload."""

    items: list[PartItem] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error payload returned for any failed request."""

    message: str


class HealthResponse(BaseModel):
    status: str = "ok"


__all__ = ["ErrorResponse", "HealthResponse", "PartItem", "SearchResponse"]
