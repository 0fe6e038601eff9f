"""
Service layer abstraction.

Each service encapsulates the business rules and SQL for a domain so
API handlers stay free of storage details.
"""
