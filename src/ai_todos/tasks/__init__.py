"""
Task subsystem.

Components:
- task_models.py: data structures (NewTask, TaskRecord)
- task_store.py: SQLite-backed, owner-scoped storage
"""
