"""Request schemas for API endpoints."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from sui_mvr.api.schemas.base import APIBaseSchema


class ResolveNameRequest(APIBaseSchema):
    """Request to resolve a single package or type name."""

    name: Annotated[
        str,
        Field(
            min_length=1,
            max_length=1000,
            description="MVR name, e.g. @namespace/package or @namespace/package::module::Type",
        ),
    ]


class ResolveNamesRequest(APIBaseSchema):
    """Request to resolve several names in one registry round trip."""

    names: Annotated[
        list[str],
        Field(
            max_length=500,
            description="MVR names to resolve. Duplicates are collapsed.",
        ),
    ]
