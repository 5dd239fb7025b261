"""
Unit tests for schema resolution and mapper helpers
"""

import math
import pytest
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, TypeAdapter

from core.exceptions import ConfigError
from ingestion.transformers.mappers import (
    generate_slug,
    prefer_signed_urls,
    to_number,
    to_string
)
from ingestion.transformers.validation import resolve_validator
from schemas.records import Attachment


class Gallery(BaseModel):
    Id: Optional[str] = None
    Images: Optional[List[Attachment]] = None


class Draft(BaseModel):
    Id: str
    status: str = "draft"
    tags: List[str] = Field(default_factory=list)
    note: Optional[str] = None


class TestResolveValidator:
    """Supported schema kinds"""

    def test_pydantic_model(self):
        validate = resolve_validator(Gallery)

        result = validate({
            "Id": "1",
            "Images": [{"url": "https://cdn.example.com/a.png", "title": "a"}]
        })

        assert result == {
            "Id": "1",
            "Images": [{"url": "https://cdn.example.com/a.png", "title": "a"}]
        }

    def test_type_adapter(self):
        validate = resolve_validator(TypeAdapter(Dict[str, int]))

        assert validate({"Id": "12"}) == {"Id": 12}

    def test_schema_defaults_are_included(self):
        validate = resolve_validator(Draft)

        assert validate({"Id": "1"}) == {"Id": "1", "status": "draft", "tags": []}

    def test_explicit_none_is_kept(self):
        validate = resolve_validator(Draft)

        result = validate({"Id": "1", "status": "live", "note": None})

        assert result == {"Id": "1", "status": "live", "tags": [], "note": None}

    def test_object_with_validate_method(self):
        class Checker:
            def validate(self, raw):
                return {**raw, "checked": True}

        assert resolve_validator(Checker())({"Id": 1}) == {"Id": 1, "checked": True}

    def test_plain_callable(self):
        validate = resolve_validator(lambda raw: {"Id": str(raw["Id"])})

        assert validate({"Id": 1}) == {"Id": "1"}

    def test_model_instance_returned_by_callable_is_dumped(self):
        validate = resolve_validator(lambda raw: Gallery(Id=raw["Id"]))

        assert validate({"Id": "4"}) == {"Id": "4"}

    def test_non_mapping_result_rejected(self):
        validate = resolve_validator(lambda raw: ["not", "a", "mapping"])

        with pytest.raises(TypeError):
            validate({})

    def test_unusable_schema(self):
        with pytest.raises(ConfigError):
            resolve_validator(42)


class TestMappers:
    """Cell coercion helpers"""

    @pytest.mark.parametrize("value,expected", [
        (5, 5),
        (2.5, 2.5),
        ("12", 12),
        (" 3.75 ", 3.75),
        (True, 1),
        ("abc", 0),
        (None, 0),
        (float("inf"), 0),
        ("nan", 0),
    ])
    def test_to_number(self, value, expected):
        assert to_number(value) == expected

    def test_to_number_fallback(self):
        assert to_number("n/a", fallback=-1) == -1
        assert math.isclose(to_number("1e3"), 1000.0)

    def test_to_string(self):
        assert to_string(None) == ""
        assert to_string(None, "n/a") == "n/a"
        assert to_string(7) == "7"
        assert to_string(0) == "0"

    @pytest.mark.parametrize("text,expected", [
        ("Hello World", "hello-world"),
        ("  Été 2024 -- Best Of! ", "t-2024-best-of"),
        ("---", ""),
        ("already-a-slug", "already-a-slug"),
    ])
    def test_generate_slug(self, text, expected):
        assert generate_slug(text) == expected

    def test_prefer_signed_urls(self):
        attachments = [
            {"url": "https://a/1.png", "signedUrl": "https://a/1.png?sig=x", "title": "1"},
            {"url": "https://a/2.png"},
        ]

        result = prefer_signed_urls(attachments)

        assert result[0]["url"] == "https://a/1.png?sig=x"
        assert result[0]["title"] == "1"
        assert result[1]["url"] == "https://a/2.png"
        assert attachments[0]["url"] == "https://a/1.png"

    @pytest.mark.parametrize("value", [None, []])
    def test_prefer_signed_urls_empty(self, value):
        assert prefer_signed_urls(value) == []
