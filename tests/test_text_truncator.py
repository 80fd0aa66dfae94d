from sitechat.services.text_truncator import TRUNCATION_MARKER, truncate_text


def test_short_text_is_returned_unchanged():
    text = "a" * 6000
    assert truncate_text(text) is text


def test_long_text_is_cut_and_marked():
    text = "b" * 6010
    result = truncate_text(text)
    assert result == "b" * 6000 + TRUNCATION_MARKER


def test_custom_budget():
    assert truncate_text("abcdefghijkl", max_tokens=2) == "abcdefgh" + TRUNCATION_MARKER


def test_truncation_is_idempotent_and_bounded():
    once = truncate_text("c" * 20000, max_tokens=100)
    twice = truncate_text(once, max_tokens=100)
    assert twice == once
    assert len(twice) <= 100 * 4 + len(TRUNCATION_MARKER)


def test_non_positive_budget_never_raises():
    assert truncate_text("hello world", max_tokens=0) == TRUNCATION_MARKER
    assert truncate_text("hello world", max_tokens=-5) == TRUNCATION_MARKER
    assert truncate_text("", max_tokens=0) == ""
