"""
Remote data sources.

Holds the thin HTTP client that talks to the OData service and turns every
request outcome into an explicit result value.
"""
