"""Pytest configuration for the compensation-calculator test suite."""

# The MCP server tests are async; pytest-asyncio runs the ones marked with asyncio
pytest_plugins = ('pytest_asyncio',)


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an async test"
    )
