# cmdcore/cli/plugins/__init__.py
"""Command modules picked up by ``discover_commands`` when the shell starts."""
