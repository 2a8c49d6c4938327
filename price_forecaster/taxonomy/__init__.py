"""Controlled vocabularies shared by models and engine modules."""
