# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening the source.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name used in logs (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING).",
    "TODO_LOG_FILE_ENABLED": "Write full DEBUG logs to <data_dir>/todo.log (true/false, default: true).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory (default: .local/todo).",
    "TODO_TASKS_PATH": "Task collection JSON path (default: <data_dir>/tasks.json).",
    "TODO_USERS_PATH": "User collection JSON path (default: <data_dir>/users.json).",
    # Persistence
    "TODO_ATOMIC_WRITES": (
        "Write each collection to a .tmp file and replace the target (true/false, default: true). "
        "false overwrites the file in place."
    ),
}
