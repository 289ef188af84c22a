"""Fitlog - personal exercise log backend."""
