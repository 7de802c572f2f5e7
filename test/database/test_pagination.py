"""ページング用の関数のテスト"""
import pytest

from sandbox_db.database.pagination import (
    DEFAULT_LIMIT, get_int, resolve_limit, resolve_page
)



@pytest.mark.parametrize("value, minimum, expected", [
    (5, None, 5),
    ("12", None, 12),
    ("7.9", None, 7),
    (3.2, 1, 3),
    (-3, 1, 1),
    (0, 1, 1),
    (None, None, 0),
    (None, 1, 1),
    ("abc", 1, 1),
    ("", 1, 1),
    (" 8 ", 1, 8),
    (True, None, 0),
    ([], 2, 2),
    ("inf", 1, 1),
    ("1_000", 1, 1),
    (float("nan"), 1, 1),
])
def test_get_int(value, minimum, expected):
    assert get_int(value, minimum) == expected

@pytest.mark.parametrize("limit, expected", [
    (None, 20),
    ("7", 7),
    (-3, 1),
    (0, 1),
    (50, 50),
    ("many", DEFAULT_LIMIT),
    ("1_000", DEFAULT_LIMIT),
])
def test_resolve_limit(limit, expected):
    """limitが正の整数に変換されることのテスト"""
    assert resolve_limit(limit) == expected

def test_resolve_limit_default_argument():
    assert resolve_limit() == DEFAULT_LIMIT

def test_resolve_limit_post_process():
    """post_processで最終的な値を上書きできることのテスト"""
    calls = []

    def cap(value: int) -> int:
        calls.append(value)
        return min(value, 10)

    assert resolve_limit(None, post_process=cap) == 10
    assert resolve_limit("3", post_process=cap) == 3
    # post_processには正規化後の値が渡される
    assert calls == [20, 3]

@pytest.mark.parametrize("page, expected", [
    (None, 1),
    (4, 4),
    ("2", 2),
    (0, 1),
    (-5, 1),
    ("next", 1),
])
def test_resolve_page(page, expected):
    """pageが正の整数に変換されることのテスト"""
    assert resolve_page(page) == expected
