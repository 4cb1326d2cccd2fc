"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus)
- task_errors.py: error hierarchy shared by the store and the CLI
- task_store.py: JSON-file-backed storage + find/add/update/delete
- task_api.py: small helpers used by the CLI layer (parsing, rendering)
"""
