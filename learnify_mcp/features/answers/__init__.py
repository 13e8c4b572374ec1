"""Answers tools."""
