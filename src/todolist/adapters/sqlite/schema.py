"""DDL for the relational task store."""

TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    is_done BOOLEAN DEFAULT 0,
    created_at TIMESTAMP,
    updated_at TIMESTAMP
)
"""

TASK_INDEXES = (
    # Listing is newest first
    "CREATE INDEX IF NOT EXISTS idx_tasks_created_at ON tasks(created_at DESC)",
    # clear-completed filters on it
    "CREATE INDEX IF NOT EXISTS idx_tasks_is_done ON tasks(is_done)",
)

TASK_COLUMNS = "id, title, is_done, created_at, updated_at"
