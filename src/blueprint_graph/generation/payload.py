# -*- coding: utf-8 -*-
"""
Payload - Read generator output text as a raw graph description.

Model output is "almost JSON": it may be wrapped in markdown fences,
surrounded by prose, carry control characters or trailing commas.
The reader strips all of that before parsing and only gives up with
``BlueprintPayloadError`` when no JSON object can be recovered.

Example:
    raw = parse_blueprint_payload(response_text)
    blueprint = build_blueprint(raw)
"""
import json
import re
from typing import Any, ClassVar, Dict, List

from loguru import logger
from pydantic import Field, field_validator

from ..core.blueprint import DEFAULT_CPP_CODE, DEFAULT_SUMMARY, DEFAULT_TARGET_CLASS
from ..errors import BlueprintPayloadError
from ..schema.raw import RawModel, as_text

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


class RawBlueprint(RawModel):
    """
    Untrusted generation result.

    Node and edge records are kept as received; they are only
    interpreted by the normalizer and the resolver.
    """
    nodes: List[Any] = Field(default_factory=list)
    edges: List[Any] = Field(default_factory=list)
    summary: str = DEFAULT_SUMMARY
    cpp_code: str = DEFAULT_CPP_CODE
    target_class: str = DEFAULT_TARGET_CLASS
    variables: List[Any] = Field(default_factory=list)
    functions: List[Any] = Field(default_factory=list)
    sources: List[Any] = Field(default_factory=list)

    key_aliases: ClassVar[Dict[str, str]] = {
        "links": "edges",
        "connections": "edges",
        "cpp": "cpp_code",
        "code": "cpp_code",
        "class": "target_class",
    }

    @field_validator("nodes", "edges", "variables", "functions", "sources", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> List[Any]:
        return _as_list(value)

    @field_validator("summary", mode="before")
    @classmethod
    def _coerce_summary(cls, value: Any) -> str:
        return as_text(value, strip=False) or DEFAULT_SUMMARY

    @field_validator("cpp_code", mode="before")
    @classmethod
    def _coerce_cpp(cls, value: Any) -> str:
        return as_text(value, strip=False) or DEFAULT_CPP_CODE

    @field_validator("target_class", mode="before")
    @classmethod
    def _coerce_target_class(cls, value: Any) -> str:
        return as_text(value) or DEFAULT_TARGET_CLASS


def extract_json_object(text: str) -> str:
    """
    Cut the outermost JSON object out of free-form text.

    Raises:
        BlueprintPayloadError: If the text holds no ``{...}`` span
    """
    cleaned = _FENCE.sub("", text).strip()
    first = cleaned.find("{")
    last = cleaned.rfind("}")
    if first == -1 or last == -1 or last < first:
        raise BlueprintPayloadError("No JSON object found in response")
    return _CONTROL_CHARS.sub("", cleaned[first:last + 1])


def parse_blueprint_payload(text: str) -> RawBlueprint:
    """
    Parse generator output into a raw blueprint.

    Args:
        text: Response text as returned by the generation service

    Returns:
        RawBlueprint with document defaults filled in

    Raises:
        BlueprintPayloadError: If no JSON object can be recovered
    """
    if not isinstance(text, str):
        raise BlueprintPayloadError(f"Expected response text, got {type(text).__name__}")

    body = extract_json_object(text)
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError:
        logger.warning("Initial parse failed, attempting to fix trailing commas...")
        try:
            parsed = json.loads(_TRAILING_COMMA.sub(r"\1", body))
        except json.JSONDecodeError as e:
            raise BlueprintPayloadError(f"JSON Parse Failed: {e}") from e

    return RawBlueprint.model_validate(parsed)
