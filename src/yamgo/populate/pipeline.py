"""Aggregation stages that inline referenced documents.

Each relation becomes a ``$lookup`` with a correlated sub-pipeline matching
``_id`` against the local reference, followed by an ``$addFields`` that
collapses the joined array to its first element. A to-many relation
therefore keeps only its first match.
"""

from __future__ import annotations

from typing import Any

from yamgo.common.models import FindOptions
from yamgo.populate.types import PopulateOptions

LOCAL_REFERENCE_VAR = "oId"


def build_lookup_stage(populate: PopulateOptions) -> dict[str, Any]:
    pipeline: list[dict[str, Any]] = [
        {"$match": {"$expr": {"$eq": ["$_id", f"$${LOCAL_REFERENCE_VAR}"]}}},
    ]
    # MongoDB rejects an empty $project
    if populate.projection:
        pipeline.append({"$project": {field: 1 for field in populate.projection}})

    return {
        "$lookup": {
            "from": populate.on,
            "let": {LOCAL_REFERENCE_VAR: f"${populate.path}"},
            "pipeline": pipeline,
            "as": populate.path,
        }
    }


def build_add_fields_stage(populate: PopulateOptions) -> dict[str, Any]:
    return {"$addFields": {populate.path: {"$first": f"${populate.path}"}}}


def build_pipeline(
    filter: dict[str, Any],
    populates: list[PopulateOptions],
    options: FindOptions | None = None,
) -> list[dict[str, Any]]:
    """Match ``filter``, apply paging options, then join each relation in order."""
    pipeline: list[dict[str, Any]] = [{"$match": filter}]

    if options is not None:
        if options.sort:
            pipeline.append({"$sort": dict(options.sort)})
        if options.skip:
            pipeline.append({"$skip": options.skip})
        if options.limit:
            pipeline.append({"$limit": options.limit})

    for populate in populates:
        pipeline.append(build_lookup_stage(populate))
        pipeline.append(build_add_fields_stage(populate))
    return pipeline
