"""Lessons tools."""
