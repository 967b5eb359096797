"""Shared utilities for the equine genetics package."""
