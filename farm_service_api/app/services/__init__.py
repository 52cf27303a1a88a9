"""
Service layer.

Each service owns the SQL for one table and is constructed with the
``Database`` handle of the running application.  API handlers never
issue queries themselves.
"""
