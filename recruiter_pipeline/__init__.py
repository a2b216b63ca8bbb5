"""Recruiter console for moving job applicants through a hiring pipeline."""
