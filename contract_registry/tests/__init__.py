"""Tests for the contract registry."""
