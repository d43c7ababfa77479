from datetime import datetime, timedelta

import pytest

from src.domain.logic.search_filter import build_game_filter, owned_by, owner_contains, title_contains
from src.domain.models.game import GameFilter, PageRequest, SortOrder
from src.utils.exceptions import ResourceNotFoundError

pytestmark = pytest.mark.usefixtures("db")


async def seed(repo, count, email="a@x.com", start=datetime(2024, 5, 1, 9, 0, 0), **fields):
    records = []
    for i in range(count):
        data = {
            "title": f"Game {i}",
            "rating": float(i % 11),
            "timespent": float(i),
            "email": email,
            "dateadded": start + timedelta(hours=i),
        }
        data.update(fields)
        records.append(await repo.create(data))
    return records


async def test_create_assigns_id_and_dateadded(repo):
    game = await repo.create_game(title="Celeste", rating=9, timespent=12, email="a@x.com")
    assert game.id is not None
    assert isinstance(game.dateadded, datetime)

    fetched = await repo.get_by_id(game.id)
    assert (fetched.title, fetched.rating, fetched.timespent, fetched.email) == ("Celeste", 9.0, 12.0, "a@x.com")
    assert fetched.image_path is None


async def test_get_by_id_missing(repo):
    with pytest.raises(ResourceNotFoundError):
        await repo.get_by_id(999)


async def test_second_page_of_fifteen(repo):
    await seed(repo, 15)
    page = await repo.paginate(owned_by("a@x.com"), SortOrder.RECENT, PageRequest(2, 10))
    assert page.total == 15
    assert len(page.results) == 5


async def test_page_beyond_end_keeps_total(repo):
    await seed(repo, 3)
    page = await repo.paginate(GameFilter(), SortOrder.RECENT, PageRequest(5, 10))
    assert page.results == []
    assert page.total == 3


async def test_scope_excludes_other_owners(repo):
    await seed(repo, 4, email="a@x.com")
    await seed(repo, 2, email="b@x.com")
    page = await repo.paginate(owned_by("b@x.com"), SortOrder.RECENT, PageRequest(1, 10))
    assert page.total == 2
    assert {g.email for g in page.results} == {"b@x.com"}


async def test_scope_is_case_sensitive(repo):
    await seed(repo, 2, email="a@x.com")
    page = await repo.paginate(owned_by("A@X.COM"), SortOrder.RECENT, PageRequest(1, 10))
    assert page.total == 0


async def test_recent_ordering(repo):
    await seed(repo, 3)
    page = await repo.paginate(GameFilter(), SortOrder.RECENT, PageRequest(1, 10))
    assert [g.title for g in page.results] == ["Game 2", "Game 1", "Game 0"]


async def test_popular_ordering(repo):
    await repo.create_game(title="Low", rating=5, timespent=100, email="a@x.com")
    await repo.create_game(title="High short", rating=9, timespent=1, email="a@x.com")
    await repo.create_game(title="High long", rating=9, timespent=50, email="b@x.com")
    page = await repo.paginate(GameFilter(), SortOrder.POPULAR, PageRequest(1, 10))
    assert [g.title for g in page.results] == ["High long", "High short", "Low"]


async def test_title_search_is_case_insensitive(repo):
    await repo.create_game(title="Celeste", rating=9, timespent=12, email="a@x.com")
    await repo.create_game(title="Hollow Knight", rating=8, timespent=40, email="b@x.com")
    page = await repo.paginate(title_contains("celeste"), SortOrder.INSERTION, PageRequest(1, 10))
    assert page.total == 1
    assert page.results[0].title == "Celeste"


async def test_like_wildcards_are_literal(repo):
    await repo.create_game(title="100% Orange Juice", rating=7, timespent=3, email="a@x.com")
    await repo.create_game(title="1000 Piece Puzzle", rating=6, timespent=2, email="a@x.com")
    page = await repo.paginate(title_contains("100%"), SortOrder.INSERTION, PageRequest(1, 10))
    assert [g.title for g in page.results] == ["100% Orange Juice"]


async def test_owner_substring_search(repo):
    await seed(repo, 2, email="alice@example.com")
    await seed(repo, 1, email="bob@other.org")
    page = await repo.paginate(owner_contains("EXAMPLE"), SortOrder.RECENT, PageRequest(1, 10))
    assert page.total == 2


@pytest.mark.parametrize("field_name, value, expected", [
    ("rating", "3", 2),
    ("timespent", "4", 1),
    ("rating", "abc", 0),
    ("dateadded", "2024-05-01", 15),
    ("dateadded", "2024-05-02", 5),
    ("dateadded", "not-a-date", 0),
    ("title", "game 1", 11),
])
async def test_field_filters(repo, field_name, value, expected):
    await seed(repo, 20)
    page = await repo.paginate(build_game_filter("a@x.com", field_name, value), SortOrder.RECENT, PageRequest(1, 100))
    assert page.total == expected
    assert len(page.results) == expected


async def test_total_matches_independent_count(repo):
    await seed(repo, 25)
    await seed(repo, 5, email="b@x.com")
    game_filter = build_game_filter("a@x.com", "title", "game 2")
    page = await repo.paginate(game_filter, SortOrder.RECENT, PageRequest(1, 3))

    everything = await repo.get_by(email="a@x.com")
    expected = [g for g in everything if "game 2" in g.title.lower()]
    assert page.total == len(expected)
    assert len(page.results) == 3


async def test_stats_empty(repo):
    row = await repo.aggregate_stats(GameFilter())
    assert int(row["total_games"]) == 0
    assert float(row["total_time"]) == 0
    assert float(row["avg_rating"]) == 0


async def test_stats_scoped(repo):
    await repo.create_game(title="A", rating=8, timespent=10, email="a@x.com")
    await repo.create_game(title="B", rating=6, timespent=20, email="a@x.com")
    await repo.create_game(title="C", rating=1, timespent=99, email="b@x.com")

    row = await repo.aggregate_stats(owned_by("a@x.com"))
    assert int(row["total_games"]) == 2
    assert float(row["total_time"]) == 30
    assert float(row["avg_rating"]) == 7
    assert float(row["avg_time"]) == 15

    assert int((await repo.aggregate_stats(GameFilter()))["total_games"]) == 3


async def test_update_changes_only_given_fields(repo):
    game = await repo.create_game(title="Celeste", rating=9, timespent=12, email="a@x.com")
    updated = await repo.update(game.id, {"timespent": 20})
    assert (updated.title, updated.rating, updated.timespent) == ("Celeste", 9.0, 20.0)
    assert updated.dateadded == game.dateadded


async def test_delete_requires_matching_owner(repo):
    game = await repo.create_game(title="Celeste", rating=9, timespent=12, email="b@x.com")

    assert await repo.delete_owned(game.id, "a@x.com") is False
    assert (await repo.get_by_id(game.id)).email == "b@x.com"

    assert await repo.delete_owned(game.id, "b@x.com") is True
    with pytest.raises(ResourceNotFoundError):
        await repo.get_by_id(game.id)
