"""Pure helpers for formatting applicant data."""
