from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator


class DateQuery(BaseModel):
    """Validated year/month filter with optional day and hour-of-day."""
    year: int
    month: int = Field(ge=1, le=12)
    day: Optional[int] = Field(default=None, ge=1, le=31)
    hour: Optional[int] = Field(default=None, ge=0, le=23)

    @model_validator(mode="after")
    def _hour_needs_day(self):
        if self.hour is not None and self.day is None:
            raise ValueError("hour cannot be given without a day")
        return self


class ProjectedArticle(BaseModel):
    """Narrowed view of an upstream article.

    Values are passed through untyped since the upstream record is opaque.
    Fields missing on the upstream record stay unset, so dump with
    ``exclude_unset=True`` to keep them out of the response.
    """
    abstract: Any = None
    web_url: Any = None
    headline: Any = None
    date: Any = None
    section_name: Any = None
    byline: Any = None
    id: Any = None


class MessageOut(BaseModel):
    message: str
