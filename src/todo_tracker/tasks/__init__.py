"""
Task subsystem.

Components:
- task_models.py: data structures (Task, User) and their JSON records
- json_store.py: one JSON file per collection (load / full-rewrite save)
- task_store.py: account-scoped store enforcing session and ownership rules
"""
