"""Authoring checks for configurator definitions."""
