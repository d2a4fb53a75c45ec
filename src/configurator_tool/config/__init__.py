"""Configuration subpackage - settings and fallback definitions."""
