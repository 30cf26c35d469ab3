"""Helpers for scanning, moving, privileges and terminal output."""
