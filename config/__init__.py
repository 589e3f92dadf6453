"""Tuning constants, one module per application."""
