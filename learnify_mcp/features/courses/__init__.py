"""Courses tools."""
