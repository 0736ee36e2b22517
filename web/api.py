"""API endpoints for the catalog browser.

Request parameters (search term, sort column/direction, selected colour) are
threaded straight into the pure functions in ``views``; the endpoints hold
no state of their own.

    GET /api/collections
    GET /api/collections/<path:collection_name>
    GET /api/collections/<path:collection_name>/designs/<design_id>
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from flask import Blueprint, Response, jsonify, request

from .catalog import CatalogLoad, get_catalog
from .config import order_id_fields_for
from .views import (
    GroupMode,
    SortConfig,
    collection_info,
    default_color,
    filter_by_exact_field,
    filter_by_search_term,
    group_by_collection,
    group_by_design_or_color,
    group_key,
    list_variants,
    record_to_row,
    sort_by,
)

__all__ = ["api"]

logger = logging.getLogger(__name__)

# Create blueprint for API
api = Blueprint("api", __name__, url_prefix="/api")

# Public sort names -> attribute names
COLLECTION_SORT_FIELDS = {
    "collectionName": "collection_name",
    "vendor": "vendor",
    "count": "count",
}

VARIANT_SORT_FIELDS = {
    "size": "size",
    "designId": "design_id",
    "primaryColor": "primary_color",
    "retailPrice": "retail_price",
    "upc": "upc",
    "vpn": "vpn",
}


class InvalidParameter(ValueError):
    """Invalid query parameter."""
    pass


@api.errorhandler(InvalidParameter)
def _bad_request(error: InvalidParameter) -> Tuple[Response, int]:
    logger.info("Rejected request %s: %s", request.full_path, error)
    return jsonify({"error": str(error)}), 400


def _sort_config(fields: Dict[str, str]) -> SortConfig:
    sort = request.args.get("sort")
    direction = request.args.get("direction", "asc").lower()
    if direction not in ("asc", "desc"):
        raise InvalidParameter("direction must be 'asc' or 'desc'")
    if not sort:
        return SortConfig()
    if sort not in fields:
        raise InvalidParameter(f"Cannot sort by '{sort}'. Choices: {list(fields)}")
    return SortConfig(fields[sort], direction)


def _group_mode() -> GroupMode:
    mode = request.args.get("mode", GroupMode.BY_COLOR.value)
    try:
        return GroupMode(mode)
    except ValueError:
        raise InvalidParameter(f"mode must be one of {[m.value for m in GroupMode]}") from None


def _with_load_state(payload: Dict[str, Any], catalog: CatalogLoad) -> Dict[str, Any]:
    if not catalog.ok:
        payload["error"] = "Catalog data is unavailable"
    return payload


def _collection_records(catalog: CatalogLoad, collection_name: str) -> List[Any]:
    return filter_by_exact_field(catalog.records, group_key("collection_name"), collection_name)


def _not_found(message: str) -> Tuple[Response, int]:
    return jsonify({"error": message}), 404


@api.route("/collections", methods=["GET"])
def list_collections() -> Response:
    """Collection summaries.

    Query params:
        q: case-insensitive substring of the collection name
        sort: collectionName | vendor | count
        direction: asc | desc
    """
    catalog = get_catalog()
    sort = _sort_config(COLLECTION_SORT_FIELDS)

    summaries = group_by_collection(catalog.records)
    summaries = filter_by_search_term(summaries, request.args.get("q", ""), "collection_name")
    summaries = sort.apply(summaries)

    return jsonify(
        _with_load_state(
            {
                "collections": [s.to_dict() for s in summaries],
                "total": len(summaries),
            },
            catalog,
        )
    )


@api.route("/collections/<path:collection_name>", methods=["GET"])
def collection_detail(collection_name: str) -> Union[Response, Tuple[Response, int]]:
    """Colour or design breakdown of one collection.

    Query params:
        mode: color (default) | design
        q: filter the groups by key substring
        color: selected colour (color mode; defaults to the colour with most sizes)
    """
    catalog = get_catalog()
    mode = _group_mode()
    records = _collection_records(catalog, collection_name)

    if not records:
        if not catalog.ok:
            return jsonify(_with_load_state({"collection": None, "groups": [], "rows": []}, catalog))
        return _not_found("Collection not found.")

    groups = group_by_design_or_color(records, mode)
    payload: Dict[str, Any] = {
        "collection": collection_info(records),
        "mode": mode.value,
    }

    if mode is GroupMode.BY_COLOR:
        selected: Optional[str] = request.args.get("color") or default_color(groups)
        payload["defaultColor"] = default_color(groups)
        payload["selectedColor"] = selected
        fields = order_id_fields_for(catalog.variant)
        payload["rows"] = [
            record_to_row(r, fields)
            for r in filter_by_exact_field(records, group_key("primary_color"), selected)
        ]
        # Dropdown lists colours with the most sizes first
        groups = sort_by(groups, "size_count", "desc")

    groups = filter_by_search_term(groups, request.args.get("q", ""), "key")
    payload["groups"] = [g.to_dict() for g in groups]
    return jsonify(payload)


@api.route("/collections/<path:collection_name>/designs/<design_id>", methods=["GET"])
def design_detail(collection_name: str, design_id: str) -> Union[Response, Tuple[Response, int]]:
    """Variant rows of one design, with resolved Order IDs.

    Query params:
        color: narrow to one colour
        sort: size | designId | primaryColor | retailPrice | upc | vpn
        direction: asc | desc
    """
    catalog = get_catalog()
    sort = _sort_config(VARIANT_SORT_FIELDS)
    records = _collection_records(catalog, collection_name)

    rows = list_variants(
        records,
        collection=collection_name,
        design_id=design_id,
        color=request.args.get("color") or None,
        sort=sort,
    )

    if not rows:
        if not catalog.ok:
            return jsonify(_with_load_state({"rows": []}, catalog))
        return _not_found("Design not found.")

    fields = order_id_fields_for(catalog.variant)
    return jsonify(
        {
            "collection": collection_info(records),
            "designId": design_id,
            "rows": [record_to_row(r, fields) for r in rows],
            "total": len(rows),
        }
    )
