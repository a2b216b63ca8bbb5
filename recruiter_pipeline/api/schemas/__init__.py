"""Request and response schemas for the console API."""
