"""Catalog business logic: query building, pagination and the content service."""
