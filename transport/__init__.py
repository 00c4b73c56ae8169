"""Inbound transport layers."""
