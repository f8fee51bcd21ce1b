import pytest
from lxml import etree

from fuzzy_locator.framework.literal import combine, literal


def _evaluate(expression: str) -> str:
    return etree.fromstring("<root/>").xpath(f"string({expression})")


@pytest.mark.P0
@pytest.mark.parametrize(
    "text, expected",
    [
        ("Login", "'Login'"),
        ("", "''"),
        ("it's", "\"it's\""),
        ('say "hi"', "'say \"hi\"'"),
        ("it's a \"test\"", "concat('it', \"'\", 's a \"test\"')"),
    ],
)
def test_literal_picks_quoting(text, expected):
    assert literal(text) == expected


def test_literal_none_and_non_strings():
    assert literal(None) == "''"
    assert literal(42) == "'42'"


@pytest.mark.P0
@pytest.mark.parametrize(
    "text",
    [
        "plain",
        "it's",
        'say "hi"',
        "it's a \"test\"",
        "'\"'\"",
        "trailing quote'\"",
        "Выберите услугу",
    ],
)
def test_literal_evaluates_back_to_original_text(text):
    assert _evaluate(literal(text)) == text


def test_combine_builds_union():
    assert combine([".//a", ".//button"]) == ".//a | .//button"
    assert combine([".//a"]) == ".//a"
