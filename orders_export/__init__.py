"""
orders_export – fetch an OData JSON collection and write it to CSV.

Subpackages:
  - config: settings loaded from environment variables / .env.
  - venues: HTTP client for the remote OData service.
  - data: envelope parsing, column derivation, and CSV writing.
"""
