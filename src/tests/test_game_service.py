from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.dto.game_dto import GameCreateRequest, GameUpdateRequest
from src.application.services.game_service import GameService
from src.domain.models.game import GameFilter, PageRequest, PaginatedResult, SortOrder
from src.infrastructure.database.game_record_repo import GameRecordRepository
from src.tests.helpers import make_record
from src.utils.exceptions import (
    DeleteFailedError,
    ResourceNotFoundError,
    UnauthorizedError,
    UpdateFailedError,
    ValidationError,
)


@pytest.fixture
def mock_repo():
    repo = MagicMock(spec=GameRecordRepository)
    repo.paginate = AsyncMock(return_value=PaginatedResult(results=[make_record()], total=1))
    repo.aggregate_stats = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=make_record(id=5))
    repo.create_game = AsyncMock()
    repo.update = AsyncMock()
    repo.delete_owned = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def service(mock_repo):
    return GameService(repo=mock_repo)


async def test_popular_games_normalizes_pagination(service, mock_repo):
    result = await service.get_popular_games(page="0", limit="500")

    mock_repo.paginate.assert_awaited_once_with(GameFilter(), SortOrder.POPULAR, PageRequest(1, 10))
    assert result.total == 1
    assert "email" not in result.model_dump()["results"][0]


async def test_recent_games_sorted_by_date(service, mock_repo):
    await service.get_recent_games(page=3, limit=20)
    mock_repo.paginate.assert_awaited_once_with(GameFilter(), SortOrder.RECENT, PageRequest(3, 20))


@pytest.mark.parametrize("title", [None, "", "   "])
async def test_search_by_title_requires_value(service, mock_repo, title):
    with pytest.raises(ValidationError):
        await service.search_games_by_title(title)
    mock_repo.paginate.assert_not_awaited()


async def test_search_by_title_trims(service, mock_repo):
    await service.search_games_by_title("  Mario  ")
    game_filter = mock_repo.paginate.await_args.args[0]
    assert game_filter.conditions[0].value == "Mario"


async def test_search_by_title_rejects_long_term(service):
    with pytest.raises(ValidationError):
        await service.search_games_by_title("m" * 101)


async def test_search_by_user_requires_value(service):
    with pytest.raises(ValidationError):
        await service.search_games_by_user("  ")


async def test_search_by_user_includes_email(service):
    result = await service.search_games_by_user("x.com")
    assert result.results[0].email == "a@x.com"


async def test_user_games_requires_email(service):
    with pytest.raises(ValidationError):
        await service.get_user_games("")


async def test_user_games_scopes_by_email(service, mock_repo):
    await service.get_user_games(" a@x.com ", "rating", "9", page=2, limit=5)
    game_filter, sort, page = mock_repo.paginate.await_args.args
    assert [c.column for c in game_filter.conditions] == ["email", "rating"]
    assert game_filter.conditions[0].value == "a@x.com"
    assert sort == SortOrder.RECENT
    assert page == PageRequest(2, 5)


async def test_stats_are_numbers(service, mock_repo):
    mock_repo.aggregate_stats.return_value = {
        "total_games": "2", "total_time": "15", "avg_rating": "8.5", "avg_time": "7.5",
    }
    stats = await service.get_user_stats("a@x.com")
    assert stats.model_dump(by_alias=True) == {
        "totalGames": 2, "totalTime": 15.0, "avgRating": 8.5, "avgTime": 7.5,
    }


async def test_global_stats_empty(service, mock_repo):
    mock_repo.aggregate_stats.return_value = {
        "total_games": 0, "total_time": 0, "avg_rating": None, "avg_time": None,
    }
    stats = await service.get_global_stats()
    mock_repo.aggregate_stats.assert_awaited_once_with(GameFilter())
    assert stats.model_dump(by_alias=True) == {
        "totalGames": 0, "totalTime": 0.0, "avgRating": 0.0, "avgTime": 0.0,
    }


async def test_user_stats_requires_email(service):
    with pytest.raises(ValidationError):
        await service.get_user_stats(None)


async def test_create_game(service, mock_repo):
    mock_repo.create_game.return_value = make_record(id=7)
    created = await service.create_game(GameCreateRequest(
        title=" Celeste ", rating=9, timespent=12, email="a@x.com"
    ))

    mock_repo.create_game.assert_awaited_once_with(
        title="Celeste", rating=9.0, timespent=12.0, email="a@x.com", image_path=None
    )
    assert created.id == 7


async def test_create_game_invalid_rating(service, mock_repo):
    with pytest.raises(ValidationError):
        await service.create_game(GameCreateRequest(title="Celeste", rating=11, timespent=1, email="a@x.com"))
    mock_repo.create_game.assert_not_awaited()


async def test_update_by_other_user_is_unauthorized(service, mock_repo):
    with pytest.raises(UnauthorizedError):
        await service.update_game(5, GameUpdateRequest(email="b@x.com", title="Mine now"))
    mock_repo.update.assert_not_awaited()


async def test_update_requires_email(service, mock_repo):
    with pytest.raises(ValidationError):
        await service.update_game(5, GameUpdateRequest(title="No owner"))
    mock_repo.get_by_id.assert_not_awaited()


async def test_update_only_provided_fields(service, mock_repo):
    mock_repo.update.return_value = make_record(id=5, rating=7.0)
    updated = await service.update_game(5, GameUpdateRequest(email="a@x.com", rating=7))

    mock_repo.update.assert_awaited_once_with(5, {"rating": 7.0})
    assert updated.rating == 7.0


async def test_update_without_changes_returns_current(service, mock_repo):
    current = await service.update_game(5, GameUpdateRequest(email="a@x.com"))
    assert current.id == 5
    mock_repo.update.assert_not_awaited()


async def test_update_missing_record(service, mock_repo):
    mock_repo.get_by_id.side_effect = ResourceNotFoundError("GameRecord with id 5 not found")
    with pytest.raises(ResourceNotFoundError):
        await service.update_game(5, GameUpdateRequest(email="a@x.com", title="x"))


async def test_update_race_surfaces_as_update_failed(service, mock_repo):
    mock_repo.update.side_effect = ResourceNotFoundError("GameRecord with id 5 not found")
    with pytest.raises(UpdateFailedError):
        await service.update_game(5, GameUpdateRequest(email="a@x.com", title="x"))


async def test_delete_by_owner(service, mock_repo):
    await service.delete_game(5, " a@x.com ")
    mock_repo.delete_owned.assert_awaited_once_with(5, "a@x.com")


async def test_delete_by_other_user(service, mock_repo):
    with pytest.raises(UnauthorizedError):
        await service.delete_game(5, "b@x.com")
    mock_repo.delete_owned.assert_not_awaited()


async def test_delete_zero_rows(service, mock_repo):
    mock_repo.delete_owned.return_value = False
    with pytest.raises(DeleteFailedError):
        await service.delete_game(5, "a@x.com")


async def test_get_by_id_scoped_and_unscoped(service):
    assert (await service.get_game_by_id(5)).id == 5
    assert (await service.get_game_by_id(5, "a@x.com")).id == 5
    with pytest.raises(UnauthorizedError):
        await service.get_game_by_id(5, "b@x.com")
