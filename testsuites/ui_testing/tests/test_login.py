"""
================================================================================
Login Feature UI Tests
================================================================================

Covers:
  - UC-1: credentials typed then cleared -> "Username is required"
  - UC-2: password cleared, username present -> "Password is required"
  - UC-3: every accepted user + "secret_sauce" -> product page "Swag Labs"

Real browser against https://www.saucedemo.com/; run with --run-ui.

================================================================================
"""

import allure
import pytest

from testsuites.ui_testing.pages.login_page import LoginPage
from testsuites.ui_testing.pages.product_page import ProductPage


pytestmark = [pytest.mark.ui, pytest.mark.auth]

ACCEPTED_USERS = [
    "standard_user",
    "problem_user",
    "performance_glitch_user",
    "error_user",
    "visual_user",
]


@allure.epic("UI Testing")
@allure.feature("Authentication")
class TestLogin:
    """Login form UI test suite."""

    @allure.story("Form Validation")
    @allure.title("UC-1: Empty credentials after clearing both fields")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    def test_empty_credentials_show_username_required(self, login_page: LoginPage):
        """Type credentials, clear both fields, submit."""
        with allure.step("Type then clear both fields"):
            login_page.type_username("anything") \
                .type_password("anything") \
                .clear_username() \
                .clear_password() \
                .click_login()

        with allure.step("Verify error banner"):
            error = login_page.get_error_text()
            assert "username is required" in error.lower(), \
                f"Expected 'Username is required' error banner, got: {error!r}"

    @allure.story("Form Validation")
    @allure.title("UC-2: Missing password after clearing password")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    def test_missing_password_shows_password_required(self, login_page: LoginPage):
        """Type credentials, clear the password, submit."""
        login_page.type_username("anything") \
            .type_password("anything") \
            .clear_password() \
            .click_login()

        error = login_page.get_error_text()
        assert "password is required" in error.lower(), \
            f"Expected 'Password is required' error banner, got: {error!r}"

    @allure.story("Happy Path")
    @allure.title("UC-3: Successful login as {user}")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.smoke
    @pytest.mark.parametrize("user", ACCEPTED_USERS)
    def test_accepted_user_reaches_product_page(
        self,
        login_page: LoginPage,
        product_page: ProductPage,
        test_data,
        user: str,
    ):
        """Accepted username + shared password lands on the inventory page."""
        login_page.type_username(user) \
            .type_password(test_data["password"]) \
            .click_login()

        assert product_page.is_loaded(), f"Inventory page did not load for {user}"
        assert product_page.title == "Swag Labs"
        header = product_page.get_header_text()
        assert header == "Swag Labs", \
            f"Expected Product page header to be 'Swag Labs', got: {header!r}"

    @allure.story("Negative Path")
    @allure.title("Locked out user is rejected")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    def test_locked_out_user_is_rejected(self, login_page: LoginPage, test_data):
        login_page.login(test_data["locked_out_user"], test_data["password"])

        assert login_page.is_error_displayed()
        assert "locked out" in login_page.get_error_text().lower()
