"""
Test suites package.

    unit/                  locator model, query tiers and resolution without a browser
    ui_testing/tests/      actions against a real Playwright browser
"""
