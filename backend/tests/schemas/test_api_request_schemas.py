"""APIRequest Schemas — create validation and merge-patch update semantics."""

import pytest
from pydantic import ValidationError

from courier.schemas.api_request import ApiRequestCreate, ApiRequestUpdate


def test_create_strips_and_uppercases():
    body = ApiRequestCreate(name=" Users ", url=" https://x.io ", method=" post ")
    assert (body.name, body.url, body.method) == ("Users", "https://x.io", "POST")


@pytest.mark.parametrize("field", ["name", "url", "method"])
def test_create_rejects_blank_required_field(field):
    data = {"name": "n", "url": "https://x.io", "method": "GET", field: "  "}
    with pytest.raises(ValidationError):
        ApiRequestCreate(**data)


def test_create_rejects_unknown_auth_tag():
    with pytest.raises(ValidationError):
        ApiRequestCreate(
            name="n", url="https://x.io", method="GET",
            authentication={"type": "digest", "username": "u"},
        )


def test_create_dump_keeps_auth_defaults():
    body = ApiRequestCreate(
        name="n", url="https://x.io", method="GET",
        authentication={"type": "api_key", "key": "X-Key"},
    )
    assert body.model_dump()["authentication"] == {
        "type": "api_key", "key": "X-Key", "value": "",
    }


def test_patch_contains_only_sent_fields():
    patch = ApiRequestUpdate(name="Renamed").to_patch()
    assert patch == {"name": "Renamed"}


def test_patch_explicit_null_clears_optional_fields():
    patch = ApiRequestUpdate(headers=None, body=None).to_patch()
    assert patch == {"headers": None, "body": None}


@pytest.mark.parametrize("field", ["name", "url", "method"])
def test_patch_rejects_null_required_field(field):
    with pytest.raises(ValidationError):
        ApiRequestUpdate(**{field: None})


def test_patch_serializes_full_auth_variant():
    patch = ApiRequestUpdate(authentication={"type": "bearer"}).to_patch()
    assert patch == {"authentication": {"type": "bearer", "token": ""}}
