"""Centralized domain-to-HTTP error mapping."""
