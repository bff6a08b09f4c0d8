from collections import defaultdict
from unittest.mock import AsyncMock

import pytest

from moviehub.dependencies import ensure_indexes


@pytest.mark.asyncio
async def test_one_per_user_rules_are_unique_indexes():
    collections = defaultdict(AsyncMock)

    class Database:
        def __getitem__(self, name):
            return collections[name]

    await ensure_indexes(Database())

    def unique_keys(name):
        return [c.args[0] for c in collections[name].create_index.call_args_list if c.kwargs.get("unique")]

    assert unique_keys("rating_reviews") == [[("movie", 1), ("user", 1)]]
    assert unique_keys("likes") == [[("review", 1), ("user", 1)]]
    assert unique_keys("post_likes") == [[("post", 1), ("user", 1)]]
    assert unique_keys("users") == ["email", "username"]
