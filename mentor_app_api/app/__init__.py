"""
Application package initializer.

The project is organised by concern: ``core`` holds configuration,
logging, database access, identifiers and errors; ``services`` holds
the business logic for users, skills and partnerships; ``schemas``
holds request payloads; and ``api/v1/endpoints`` exposes one router per
domain.  Versioning is handled by grouping routers under the
``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401,E402
