"""Upstream service integrations."""
