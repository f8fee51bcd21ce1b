import pytest
from lxml import html

from fuzzy_locator.common.global_config import set_config
from fuzzy_locator.framework.custom_locator import custom_locator, install_from_config
from fuzzy_locator.framework.locator import Locator, LocatorKind, remove_filter

MARKUP = """
<html><body>
  <button data-test-id="register_button">Register</button>
  <button data-qa="it's">Quote</button>
</body></html>
"""


def _find(xpath):
    return html.document_fromstring(MARKUP).xpath(xpath)


@pytest.mark.P0
def test_xpath_strategy_rewrites_prefixed_strings():
    custom_locator()
    locator = Locator.classify("$register_button")

    assert locator.kind is LocatorKind.XPATH
    assert locator.value == ".//*[@data-test-id='register_button']"
    assert str(locator) == "$register_button"
    assert [el.text for el in _find(locator.value)] == ["Register"]


def test_css_strategy():
    custom_locator(strategy="css")
    locator = Locator.classify("$register_button")

    assert locator.kind is LocatorKind.CSS
    assert locator.value == "[data-test-id=register_button]"


def test_custom_prefix_attribute_and_quote_escaping():
    custom_locator(prefix="=", attribute="data-qa")
    locator = Locator.classify("=it's")

    assert locator.value == ".//*[@data-qa=\"it's\"]"
    assert [el.text for el in _find(locator.value)] == ["Quote"]


def test_show_actual_renders_selector():
    custom_locator(show_actual=True)
    assert str(Locator.classify("$login")) == ".//*[@data-test-id='login']"


def test_other_strings_are_untouched():
    custom_locator()
    assert Locator.classify("Register").is_fuzzy()
    assert Locator.classify("#register").is_css()


def test_filter_can_be_removed():
    registered = custom_locator()
    remove_filter(registered)
    assert Locator.classify("$register_button").is_fuzzy()


def test_unknown_strategy_is_rejected():
    with pytest.raises(ValueError, match="strategy"):
        custom_locator(strategy="regex")


def test_install_from_config_disabled_by_default():
    assert install_from_config() is None
    assert Locator.classify("$a").is_fuzzy()


def test_install_from_config_reads_settings():
    set_config("locator.custom.enabled", True)
    set_config("locator.custom.prefix", "@")
    set_config("locator.custom.strategy", "css")

    assert install_from_config() is not None
    assert Locator.classify("@save").value == "[data-test-id=save]"


def test_install_from_config_accepts_env_strings(monkeypatch):
    monkeypatch.setenv("LOCATOR__CUSTOM__ENABLED", "true")
    monkeypatch.setenv("LOCATOR__CUSTOM__ATTRIBUTE", "data-qa")

    assert install_from_config() is not None
    assert Locator.classify("$x").value == ".//*[@data-qa='x']"
