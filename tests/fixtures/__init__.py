"""Importable test fixtures: canned CLI payloads."""
