"""
Recipe Ingest - schema.org recipe extraction for cooking websites.

Functions:
- Recipe request: record a pending import for a user
- Request processor: fetch, parse and persist a pending import
- Fetch: ad-hoc extraction without persistence
"""

__version__ = "1.0.0"
