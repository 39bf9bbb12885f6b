"""Escape-time math and pixel buffers."""
