"""Reporters — JSON/YAML serialisation and Rich terminal tables."""
