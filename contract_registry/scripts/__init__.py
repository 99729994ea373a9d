"""Maintenance scripts for artifact bundles."""
