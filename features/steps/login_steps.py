"""Step definitions for login.feature.

The browser session is managed by environment.py; page objects are built
on this worker's session through the shared DriverManager.
"""

from behave import given, then, when

from testsuites.ui_testing.pages.login_page import LoginPage
from testsuites.ui_testing.pages.product_page import ProductPage


def _page(context, page_cls):
    return page_cls.for_worker(
        context.driver_manager,
        context.worker_id,
        base_url=context.settings.base_url,
        timeout=context.settings.default_timeout,
    )


@given("I am on the Login page")
def step_open_login_page(context):
    context.login_page = _page(context, LoginPage).open()


@when("I try to login without entering a username")
def step_login_without_username(context):
    context.login_page.login("", "")


@when("I enter a username but no password")
def step_login_without_password(context):
    context.login_page.login("standard_user", "")


@when('I login with username "{username}" and password "{password}"')
def step_login_with_credentials(context, username, password):
    context.login_page.login(username, password)
    context.product_page = _page(context, ProductPage)


@then('I should see "{expected_error}"')
def step_error_shown(context, expected_error):
    assert context.login_page.is_error_displayed(), "Error banner is not displayed"
    error = context.login_page.get_error_text()
    assert expected_error.lower() in error.lower(), \
        f"Expected error containing {expected_error!r}, got {error!r}"


@then("I should see the Swag Labs dashboard")
def step_dashboard_shown(context):
    assert context.product_page.is_loaded(), "Inventory page did not load"
    header = context.product_page.get_header_text()
    assert "Swag Labs" in header, f"Expected 'Swag Labs' header, got {header!r}"
