# -*- coding: utf-8 -*-
"""
Pipeline - Raw generation result to positioned blueprint.

    raw description -> normalize (per node) -> resolve edges -> layout

Each stage is a pure function; the pipeline only wires them together
and reports diagnostics through the logger.
"""
from typing import Any, List, Optional, Union

from loguru import logger
from pydantic import ValidationError

from ..config import LayoutSettings
from ..core.blueprint import Blueprint, BlueprintSource
from ..layout.engine import layout
from ..schema.normalizer import normalize_functions, normalize_nodes, normalize_variables
from ..schema.raw import as_text
from ..schema.resolver import resolve
from .payload import RawBlueprint, parse_blueprint_payload


def _coerce_sources(raw_sources: List[Any]) -> List[BlueprintSource]:
    sources = []
    for record in raw_sources:
        if not isinstance(record, dict):
            continue
        url = as_text(record.get("url") or record.get("uri"))
        if not url:
            continue
        sources.append(BlueprintSource(title=as_text(record.get("title")) or url, url=url))
    return sources


def load_raw_blueprint(source: Union[str, dict, RawBlueprint]) -> RawBlueprint:
    """
    Accept response text, a decoded mapping or a RawBlueprint.

    Raises:
        BlueprintPayloadError: If text cannot be parsed
    """
    if isinstance(source, RawBlueprint):
        return source
    if isinstance(source, str):
        return parse_blueprint_payload(source)
    try:
        return RawBlueprint.model_validate(source)
    except ValidationError:
        logger.warning(f"Unreadable graph description ({type(source).__name__}); using an empty graph")
        return RawBlueprint()


def build_blueprint(
    source: Union[str, dict, RawBlueprint],
    settings: Optional[LayoutSettings] = None,
) -> Blueprint:
    """
    Normalize, resolve and lay out a generation result.

    Args:
        source: Response text, decoded mapping or RawBlueprint
        settings: Layout spacing, defaults when omitted

    Returns:
        Positioned Blueprint document
    """
    raw = load_raw_blueprint(source)

    nodes = normalize_nodes(raw.nodes)
    resolution = resolve(raw.edges, nodes)
    positioned = layout(nodes, resolution.edges, settings)

    blueprint = Blueprint(
        nodes=positioned,
        edges=resolution.edges,
        summary=raw.summary,
        cpp_code=raw.cpp_code,
        target_class=raw.target_class,
        variables=normalize_variables(raw.variables),
        functions=normalize_functions(raw.functions),
        sources=_coerce_sources(raw.sources),
        dropped_edges=resolution.dropped,
    )

    logger.info(
        f"Built blueprint '{blueprint.target_class}': {len(blueprint.nodes)} nodes, "
        f"{len(blueprint.edges)} edges, {resolution.dropped_count} dropped"
    )
    if blueprint.nodes and not blueprint.has_entry_point:
        logger.warning("Blueprint has no Entry Point (Event). Logic may not execute.")
    return blueprint
