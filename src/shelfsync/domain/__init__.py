"""Catalog reconciliation domain."""
