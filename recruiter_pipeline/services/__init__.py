"""Recruiter pipeline workflows."""
