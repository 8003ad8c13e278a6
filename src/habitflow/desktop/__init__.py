"""Flet desktop front end."""
