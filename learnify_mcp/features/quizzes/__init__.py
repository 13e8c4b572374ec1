"""Quizzes tools."""
