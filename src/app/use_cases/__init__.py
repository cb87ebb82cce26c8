"""
Use Cases

Organized by aggregate:
- production_lines/: Production line lifecycle
- processes/: Processes on a production line
- users/: User management
- audit/: Audit trail queries
- operations/: Operations audited through the interceptor
"""
