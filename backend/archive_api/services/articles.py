# backend/archive_api/services/articles.py
"""Filtering, projection and lookup over one month of raw archive articles."""
from datetime import datetime, tzinfo
from typing import Any, Dict, Iterable, List, Optional

from dateutil.parser import isoparse

from archive_api.core.config import settings
from archive_api.logger import get_logger
from archive_api.schemas.article import DateQuery, ProjectedArticle

log = get_logger(__name__)

RawArticle = Dict[str, Any]

# output field -> upstream field
PROJECTED_FIELDS = {
    "abstract": "abstract",
    "web_url": "web_url",
    "headline": "headline",
    "date": "pub_date",
    "section_name": "section_name",
    "byline": "byline",
    "id": "uri",
}


def parse_pub_date(raw: Any, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse an upstream pub_date into ``tz`` (default ARCHIVE_TIMEZONE).

    Timestamps with an offset are converted; naive ones are read as local to ``tz``.
    """
    if not isinstance(raw, str) or not raw.strip():
        return None
    tz = tz or settings.tz
    try:
        dt = isoparse(raw.strip())
    except (ValueError, OverflowError):
        log.debug("Could not parse pub_date: %r", raw)
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def _matches(query: DateQuery, published: Optional[datetime]) -> bool:
    if published is None:
        return False
    if (published.year, published.month, published.day) != (query.year, query.month, query.day):
        return False
    return query.hour is None or published.hour == query.hour


def filter_articles(query: DateQuery, articles: Iterable[RawArticle], tz: Optional[tzinfo] = None) -> List[RawArticle]:
    """Keep articles published on the query's day (and hour, if given)."""
    articles = list(articles)
    if query.day is None:
        return articles
    kept = [a for a in articles if _matches(query, parse_pub_date(a.get("pub_date"), tz))]
    log.debug("Filter %s kept %d of %d articles", query, len(kept), len(articles))
    return kept


def project_articles(articles: Iterable[RawArticle], limit: Optional[int] = None) -> List[ProjectedArticle]:
    limit = settings.MAX_ARTICLES if limit is None else limit
    out = []
    for item in list(articles)[:limit]:
        fields = {dst: item[src] for dst, src in PROJECTED_FIELDS.items() if src in item}
        out.append(ProjectedArticle(**fields))
    return out


def find_by_id(article_id: str, articles: Iterable[RawArticle]) -> List[RawArticle]:
    return [a for a in articles if a.get("uri") == article_id]
