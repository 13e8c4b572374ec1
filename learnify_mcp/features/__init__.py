"""Feature slices; each exposes one tool service over the Learnify API."""
