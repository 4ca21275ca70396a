"""
Pydantic models for user responses.

User records are schemaless: any JSON object is stored as given, so
single records travel as plain dictionaries.  Only the paginated list
response has a fixed shape, described here for the OpenAPI schema.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

UserRecord = Dict[str, Any]


class Pagination(BaseModel):
    page: int = Field(..., examples=[1])
    limit: int = Field(..., examples=[10])
    total: int = Field(..., examples=[3])
    totalPages: int = Field(..., examples=[1])


class UserPage(BaseModel):
    """One page of users as returned by ``GET /users?page=&limit=``."""

    data: List[UserRecord]
    pagination: Pagination
