"""Tests package for Advisor Search Hub."""
