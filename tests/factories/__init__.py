"""Test data factories."""

from tests.factories.token import TokenDetailsFactory, TokenFactory, TokenImageUrlsFactory

__all__ = ["TokenDetailsFactory", "TokenFactory", "TokenImageUrlsFactory"]
