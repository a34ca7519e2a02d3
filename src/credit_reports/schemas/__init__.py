"""Pydantic schemas for the engine and the API."""
