"""Web API for the resume builder service."""
