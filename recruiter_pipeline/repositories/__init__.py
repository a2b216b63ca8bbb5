"""Gateways to the hiring backend's resources."""
