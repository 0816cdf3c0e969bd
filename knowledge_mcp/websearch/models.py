"""Web search data models."""

from typing import Any

from pydantic import BaseModel, Field


class WebSearchQuery(BaseModel):
    """A fully resolved web search request.

    Attributes:
        query: Keywords to search for.
        country: Country code for result localisation.
        language: Language code for results.
        domain: Search engine domain to query.
    """

    query: str = Field(description="Search keywords")
    country: str = Field(description="Country code")
    language: str = Field(description="Language code")
    domain: str = Field(description="Search engine domain")


class WebSearchResult(BaseModel):
    """Provider response, passed through untouched.

    Attributes:
        query: The echoed search keywords.
        country: Country code used.
        language: Language code used.
        domain: Search engine domain used.
        results: Provider JSON payload, verbatim.
    """

    query: str = Field(description="Search keywords")
    country: str = Field(description="Country code")
    language: str = Field(description="Language code")
    domain: str = Field(description="Search engine domain")
    results: Any = Field(description="Provider payload")
