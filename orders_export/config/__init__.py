"""
Configuration loading and validation for the export.

Provides a strongly typed settings object for the request URL, output path,
and HTTP timeout, with upfront validation.
"""
