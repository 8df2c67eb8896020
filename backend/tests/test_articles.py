# backend/tests/test_articles.py
from datetime import timedelta, timezone
from zoneinfo import ZoneInfo

from archive_api.schemas.article import DateQuery
from archive_api.services.articles import (
    filter_articles,
    find_by_id,
    parse_pub_date,
    project_articles,
)
from factories import make_article

DOCS = [
    make_article("nyt://article/a", "1899-12-05T05:00:00+0000"),
    make_article("nyt://article/b", "1899-12-15T05:00:00+0000"),
    make_article("nyt://article/c", "1899-12-15T14:30:00+0000"),
    make_article("nyt://article/d", "1899-12-15T14:59:59Z"),
    make_article("nyt://article/e", "1899-11-15T14:00:00+0000"),
    make_article("nyt://article/f", "not a date"),
    make_article("nyt://article/g", None),
]


def _uris(docs):
    return [d["uri"] for d in docs]


def test_parse_pub_date_formats():
    assert parse_pub_date("2022-07-01T04:00:04+0000").hour == 4
    assert parse_pub_date("2022-07-01T04:00:04Z").day == 1
    assert parse_pub_date("2022-07-01").month == 7
    assert parse_pub_date("garbage") is None
    assert parse_pub_date("") is None
    assert parse_pub_date(None) is None


def test_parse_pub_date_converts_offsets():
    dt = parse_pub_date("2022-07-01T02:00:00+0000", tz=ZoneInfo("America/New_York"))
    assert (dt.month, dt.day, dt.hour) == (6, 30, 22)


def test_parse_pub_date_naive_is_local():
    tz = timezone(timedelta(hours=-5))
    dt = parse_pub_date("2022-07-01T02:00:00", tz=tz)
    assert dt.tzinfo is tz
    assert dt.hour == 2


def test_filter_by_day():
    kept = filter_articles(DateQuery(year=1899, month=12, day=15), DOCS)
    assert _uris(kept) == ["nyt://article/b", "nyt://article/c", "nyt://article/d"]


def test_filter_by_single_digit_day():
    kept = filter_articles(DateQuery(year=1899, month=12, day=5), DOCS)
    assert _uris(kept) == ["nyt://article/a"]


def test_filter_by_day_and_hour():
    kept = filter_articles(DateQuery(year=1899, month=12, day=15, hour=14), DOCS)
    assert _uris(kept) == ["nyt://article/c", "nyt://article/d"]


def test_filter_hour_zero():
    docs = [make_article("nyt://article/z", "2020-03-03T00:10:00+0000")]
    assert len(filter_articles(DateQuery(year=2020, month=3, day=3, hour=0), docs)) == 1
    assert filter_articles(DateQuery(year=2020, month=3, day=3, hour=1), docs) == []


def test_filter_uses_archive_timezone():
    docs = [make_article("nyt://article/tz", "2022-07-01T02:00:00+0000")]
    ny = ZoneInfo("America/New_York")
    assert filter_articles(DateQuery(year=2022, month=7, day=1), docs, tz=ny) == []
    assert len(filter_articles(DateQuery(year=2022, month=6, day=30, hour=22), docs, tz=ny)) == 1


def test_filter_without_day_returns_everything():
    assert filter_articles(DateQuery(year=1899, month=12), DOCS) == DOCS


def test_filter_no_match():
    assert filter_articles(DateQuery(year=1899, month=12, day=31), DOCS) == []


def test_project_caps_at_ten():
    docs = [make_article(f"nyt://article/{i}", "2022-07-01T00:00:00+0000") for i in range(25)]
    out = project_articles(docs)
    assert len(out) == 10
    assert [p.id for p in out] == [f"nyt://article/{i}" for i in range(10)]


def test_project_respects_explicit_limit():
    docs = [make_article(f"nyt://article/{i}", None) for i in range(5)]
    assert len(project_articles(docs, limit=3)) == 3


def test_project_narrows_and_renames_fields():
    (item,) = project_articles([DOCS[1]])
    data = item.model_dump(exclude_unset=True)
    assert set(data) == {"abstract", "web_url", "headline", "date", "section_name", "byline", "id"}
    assert data["id"] == "nyt://article/b"
    assert data["date"] == "1899-12-15T05:00:00+0000"
    assert data["headline"] == {"main": "headline nyt://article/b"}
    assert "word_count" not in data and "uri" not in data


def test_project_keeps_missing_fields_absent():
    (item,) = project_articles([{"uri": "nyt://article/bare", "abstract": None}])
    assert item.model_dump(exclude_unset=True) == {"id": "nyt://article/bare", "abstract": None}


def test_project_empty():
    assert project_articles([]) == []


def test_find_by_id():
    assert _uris(find_by_id("nyt://article/c", DOCS)) == ["nyt://article/c"]


def test_find_by_id_unknown():
    assert find_by_id("nyt://article/UNKNOWN", DOCS) == []


def test_find_by_id_is_exact():
    assert find_by_id("nyt://article/C", DOCS) == []
    assert find_by_id("nyt://article/", DOCS) == []


def test_project_passes_non_string_values_through():
    doc = make_article("nyt://article/odd", "1899-12-15T05:00:00+0000", section_name=42, abstract=["a", "b"])
    (item,) = project_articles([doc])
    data = item.model_dump(exclude_unset=True)
    assert data["section_name"] == 42
    assert data["abstract"] == ["a", "b"]
