from archive_api.schemas.article import DateQuery, MessageOut, ProjectedArticle

__all__ = [
    "DateQuery",
    "MessageOut",
    "ProjectedArticle",
]
