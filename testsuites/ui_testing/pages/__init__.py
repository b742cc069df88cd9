"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the Swag Labs pages.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Text/state getters (assertions stay in the tests)

================================================================================
"""

from .login_page import LoginPage
from .product_page import ProductPage

__all__ = [
    "LoginPage",
    "ProductPage",
]
