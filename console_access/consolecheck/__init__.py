"""Validate CloudFormation templates for private AWS Console access."""

__version__ = "0.1.0"
