"""
Service layer abstraction.

Each service encapsulates business logic for a domain and works
against a database connection handed to it by the caller, so API
handlers never issue SQL themselves.
"""
