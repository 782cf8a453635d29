import pytest

from import_engine.errors import AmbiguousCategory, CategoryNotFound
from import_engine.resolver import CategoryResolver, category_slug
from tests.factories import CategoryFactory


@pytest.mark.parametrize("name, expected", [
    ("Office Supplies", "office-supplies"),
    ("  Office   Supplies  ", "office-supplies"),
    ("Đồ dùng văn phòng", "do-dung-van-phong"),
    ("Café\tCrème", "cafe-creme"),
    ("TOOLS", "tools"),
])
def test_category_slug(name, expected):
    assert category_slug(name) == expected


def test_resolve_found(session):
    cat = CategoryFactory(name="Office Supplies", slug="office-supplies")
    resolver = CategoryResolver(session)
    assert resolver.resolve("office supplies") == cat.id


def test_resolve_not_found_keeps_original_text(session):
    resolver = CategoryResolver(session)
    with pytest.raises(CategoryNotFound) as exc:
        resolver.resolve("Office Supplies")
    assert str(exc.value) == 'Category "Office Supplies" not found in categories table'


class _CountingSession:
    """Stands in for a Session; every execute() returns `rows`."""

    def __init__(self, rows):
        self.rows = rows
        self.calls = 0

    def execute(self, _stmt):
        self.calls += 1
        return list(self.rows)


def test_prefetch_issues_one_query_for_all_names():
    fake = _CountingSession([(1, "tools"), (2, "office-supplies")])
    resolver = CategoryResolver(fake)

    asked = resolver.prefetch(["Tools", "tools", "Office Supplies", None, "  ", 3])
    assert asked == 2
    assert resolver.resolve("TOOLS") == 1
    assert resolver.resolve("Office  Supplies") == 2
    assert fake.calls == 1


def test_unprefetched_name_is_looked_up_once():
    fake = _CountingSession([])
    resolver = CategoryResolver(fake)
    for _ in range(3):
        with pytest.raises(CategoryNotFound):
            resolver.resolve("Garden")
    assert fake.calls == 1


def test_multiple_matches_are_refused_and_logged(caplog):
    resolver = CategoryResolver(_CountingSession([(1, "tools"), (9, "tools")]))
    with caplog.at_level("WARNING"):
        with pytest.raises(AmbiguousCategory) as exc:
            resolver.resolve("Tools")
    assert "matches 2 rows" in str(exc.value)
    assert "refusing to pick one" in caplog.text
