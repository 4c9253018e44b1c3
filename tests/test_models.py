from __future__ import annotations

import pytest

from ui2code.models import (
    CodeRequest,
    ConvertResponse,
    EditRequest,
    ImageRequest,
    UrlRequest,
    parse_convert_request,
)
from ui2code.utils.exceptions import InvalidRequestError


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"type": "code", "code": "x"}, CodeRequest),
        ({"type": "url", "url": "https://example.com"}, UrlRequest),
        ({"type": "image", "imageBase64": "AAAA"}, ImageRequest),
        ({"type": "edit", "currentCode": "<p></p>", "instruction": "bold"}, EditRequest),
    ],
)
def test_parse_dispatches_on_type(payload, expected) -> None:
    assert isinstance(parse_convert_request(payload), expected)


def test_image_request_reads_camel_case_fields() -> None:
    request = parse_convert_request(
        {"type": "image", "imageBase64": "AAAA", "url": " https://example.com "}
    )

    assert request.image_base64 == "AAAA"
    assert request.url == "https://example.com"


@pytest.mark.parametrize("url", ["", "   ", None])
def test_image_request_blank_url_is_none(url) -> None:
    request = parse_convert_request({"type": "image", "imageBase64": "AAAA", "url": url})

    assert request.url is None


def test_parse_rejects_wrong_field_type() -> None:
    with pytest.raises(InvalidRequestError) as excinfo:
        parse_convert_request({"type": "code", "code": 42})

    assert excinfo.value.status_code == 400
    assert excinfo.value.message.startswith("Invalid request body: code")


def test_convert_response_omits_missing_detected_url() -> None:
    assert ConvertResponse(code="x").to_wire() == {"code": "x"}
    assert ConvertResponse(code="x", detected_url="https://a.b").to_wire() == {
        "code": "x",
        "detectedUrl": "https://a.b",
    }
