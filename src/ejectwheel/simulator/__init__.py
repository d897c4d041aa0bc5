"""Pygame desktop host for the elimination wheel."""
