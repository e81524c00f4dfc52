"""
Core upload logic.

This package is framework-agnostic - it doesn't import boto3, FastAPI,
or read configuration. Storage backends are reached through protocols
so the logic can be tested with in-memory fakes.
"""
