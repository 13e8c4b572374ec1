"""Categories tools."""
