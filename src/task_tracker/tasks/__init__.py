"""
Task subsystem.

Components:
- task_models.py: data structures (Task, ViewState, Notification, enums)
- task_views.py: pure filter/search/sort/paginate helpers
- task_store.py: optimistic in-memory store mirrored against the task API
- task_api.py: HTTP client for the remote task collection
- task_cache.py: JSON file used as a pre-load cache
"""
