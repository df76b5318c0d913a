"""
Service layer abstraction.

Each service encapsulates business logic for a domain so API handlers
stay thin and the storage backend can change without touching them.
"""
