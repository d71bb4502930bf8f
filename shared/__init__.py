"""Utilities shared by the POS client and the POS service."""
