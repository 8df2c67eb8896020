# backend/archive_api/routers/nytimes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from archive_api.api.deps import get_archive_client
from archive_api.logger import get_logger
from archive_api.schemas.article import MessageOut, ProjectedArticle
from archive_api.services.archive_client import ArchiveClient
from archive_api.services.articles import filter_articles, find_by_id, project_articles
from archive_api.utils.validators import validate_query

router = APIRouter(prefix="/nytimes", tags=["nytimes"])
log = get_logger(__name__)

NO_ARTICLES = {"message": "No articles found"}

_ERRORS = {
    400: {"model": MessageOut, "description": "Invalid Query"},
    429: {"model": MessageOut, "description": "Rate limited by archive service"},
    502: {"model": MessageOut, "description": "Archive service unavailable"},
    504: {"model": MessageOut, "description": "Archive request timed out"},
}


def _respond(articles):
    if not articles:
        return NO_ARTICLES
    return [a.model_dump(exclude_unset=True) for a in project_articles(articles)]


@router.get("", summary="Articles for the current month", responses=_ERRORS)
def current_month(client: ArchiveClient = Depends(get_archive_client)):
    return _respond(client.fetch())


@router.get(
    "/articles",
    summary="Articles for a month, optionally narrowed to a day and hour",
    response_model=None,
    responses={200: {"model": List[ProjectedArticle]}, **_ERRORS},
)
def articles(
    year: Optional[str] = Query(None, description="Year, 1851 or later"),
    month: Optional[str] = Query(None, description="Month, 1-12"),
    date: Optional[str] = Query(None, description="Day of month"),
    hrs: Optional[str] = Query(None, description="Hour of day, 0-23 (needs date)"),
    client: ArchiveClient = Depends(get_archive_client),
):
    query = validate_query(year, month, date, hrs)
    docs = client.fetch(query.year, query.month)
    if query.day is not None:
        docs = filter_articles(query, docs)
    return _respond(docs)


@router.get(
    "/article/{article_id:path}",
    summary="Look up one article by its uri within a month",
    response_model=None,
    responses={200: {"model": List[ProjectedArticle]}, **_ERRORS},
)
def article(
    article_id: str,
    year: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    date: Optional[str] = Query(None),
    hrs: Optional[str] = Query(None),
    client: ArchiveClient = Depends(get_archive_client),
):
    query = validate_query(year, month, date, hrs)
    matches = find_by_id(article_id, client.fetch(query.year, query.month))
    if not matches:
        log.info("Article %s not found in %d-%02d", article_id, query.year, query.month)
    return _respond(matches)
