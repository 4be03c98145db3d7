"""Main entry point for the todolist CLI."""

import typer

from todolist.commands import (
    config_command,
    serve_command,
    shell_command,
    tasks_command,
    version_command,
)

app = typer.Typer(
    name="todolist",
    help="A small to-do list manager with local or server-backed storage",
    no_args_is_help=True,
)

# Task commands live at the top level: `todolist add "Buy milk"`
app.command("list")(tasks_command.list_tasks)
app.command("add")(tasks_command.add)
app.command("toggle")(tasks_command.toggle)
app.command("edit")(tasks_command.edit)
app.command("delete")(tasks_command.delete)
app.command("clear-completed")(tasks_command.clear_completed)
app.command("shell")(shell_command.shell)
app.command("serve")(serve_command.serve)
app.command("version")(version_command.version)

app.add_typer(config_command.app, name="config", help="Configuration management")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
