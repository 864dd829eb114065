"""Test suite for object_migrations.

This package contains tests for the migrator including:
- Unit tests for individual modules
- Integration tests for complete migration workflows
"""
