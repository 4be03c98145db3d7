"""Command 'serve' of todolist: run the REST API server."""

import typer
import uvicorn

from todolist.adapters.sqlite import SqliteTaskRepository, get_connection
from todolist.server import create_app
from todolist.services.config_service import get_config_service
from todolist.services.task_service import TaskService
from todolist.ui.console import get_console
from todolist.utils.logger import get_logger

app = typer.Typer()
console = get_console()


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(
        None, "--port", "-p", envvar="PORT", help="Port to listen on"
    ),
    db: str | None = typer.Option(None, "--db", help="SQLite database file"),
) -> None:
    """Serve the task API backed by the SQLite table."""
    server_config = get_config_service().config.server
    host = host or server_config.host
    port = port or server_config.port
    db_path = db or server_config.db_path

    # Open the shared connection (and run migrations) before accepting requests
    repository = SqliteTaskRepository(connection=get_connection(db_path))

    get_logger().info("serving on %s:%s (database %s)", host, port, db_path or "default")
    console.print(f"[bold green]To-do list server[/bold green] on http://{host}:{port}")
    console.print(f"  API: http://{host}:{port}/api")
    console.print("  Press Ctrl+C to stop")

    uvicorn.run(create_app(TaskService(repository)), host=host, port=port, log_level="warning")
