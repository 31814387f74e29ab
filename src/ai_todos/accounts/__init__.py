"""
Accounts.

- store.py: SQLite users + opaque bearer tokens
- service.py: privileged account deletion
"""
