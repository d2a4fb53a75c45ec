"""Data subpackage - file-backed configurator content."""
