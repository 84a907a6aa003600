"""Reporters - failure message formatting."""
