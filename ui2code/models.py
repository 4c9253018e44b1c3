from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from ui2code.utils.exceptions import InvalidRequestError


class _WireModel(BaseModel):
    """Accepts camelCase wire names and snake_case attribute names."""

    model_config = ConfigDict(populate_by_name=True)


class CodeRequest(_WireModel):
    """Pasted source code, returned as-is."""

    type: Literal["code"]
    code: str


class UrlRequest(_WireModel):
    """Page URL whose source should be fetched."""

    type: Literal["url"]
    url: str


class ImageRequest(_WireModel):
    """Screenshot (base64 or data URI), optionally with the page URL."""

    type: Literal["image"]
    image_base64: str = Field(alias="imageBase64")
    url: Optional[str] = None

    @field_validator("url")
    @classmethod
    def blank_url_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class EditRequest(_WireModel):
    """Natural-language edit applied to previously generated markup."""

    type: Literal["edit"]
    current_code: str = Field(alias="currentCode")
    instruction: str


ConvertRequest = Annotated[
    Union[CodeRequest, UrlRequest, ImageRequest, EditRequest],
    Field(discriminator="type"),
]

REQUEST_TYPES = ("code", "url", "image", "edit")

_request_adapter: TypeAdapter[Any] = TypeAdapter(ConvertRequest)


def parse_convert_request(payload: Any) -> Union[CodeRequest, UrlRequest, ImageRequest, EditRequest]:
    """
    Validate a decoded JSON body into one of the request variants.

    Raises:
        InvalidRequestError for non-object bodies, unknown ``type`` values,
        or missing / mistyped fields.
    """
    if not isinstance(payload, dict):
        raise InvalidRequestError("Invalid JSON body")
    if payload.get("type") not in REQUEST_TYPES:
        raise InvalidRequestError("Invalid request type")

    try:
        return _request_adapter.validate_python(payload)
    except ValidationError as e:
        problems = []
        for err in e.errors():
            # First loc element is the discriminator tag
            loc = err["loc"][1:] or err["loc"]
            problems.append(f"{'.'.join(str(p) for p in loc)}: {err['msg']}")
        raise InvalidRequestError(f"Invalid request body: {'; '.join(problems)}")


class ConvertResponse(_WireModel):
    """Successful conversion result."""

    code: str
    detected_url: Optional[str] = Field(default=None, alias="detectedUrl")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    error: str


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    status: str
    model: str
    configured: bool
