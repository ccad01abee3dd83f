# willowbank/cli.py
"""
CLI interface for willowbank.

Thin presentation layer over the HTTP API client: lists records grouped the
way the API groups them and sends form-style edits.
"""

import asyncio
import os
from typing import Any

import typer

from willowbank.client.api import DEFAULT_API_URL, ApiClientError, WillowbankClient
from willowbank.logging_config import configure_cli_logging

app = typer.Typer(
    name="willowbank",
    help="Landscape project planner: requirements, phases, plants and compliance.",
    no_args_is_help=True,
)
requirements_app = typer.Typer(help="Manage requirements (needs, wants, nice-to-haves).")
phases_app = typer.Typer(help="Manage project phases and their tasks.")
plants_app = typer.Typer(help="Browse and seed the plant catalogue.")
compliance_app = typer.Typer(help="Browse compliance requirements.")

app.add_typer(requirements_app, name="requirements")
app.add_typer(phases_app, name="phases")
app.add_typer(plants_app, name="plants")
app.add_typer(compliance_app, name="compliance")


def _run(coro):
    """Run async function from sync CLI context."""
    return asyncio.run(coro)


def _get_client() -> WillowbankClient:
    """Client for the API at WILLOWBANK_API_URL (default localhost:3001)."""
    return WillowbankClient(os.environ.get("WILLOWBANK_API_URL", DEFAULT_API_URL))


def _call(action) -> dict[str, Any]:
    """
    Run one API action with a fresh client.

    Args:
        action: Callable taking the client and returning a coroutine

    Exits with status 1 and prints the API error on failure.
    """
    configure_cli_logging()

    async def _go():
        client = _get_client()
        try:
            return await action(client)
        finally:
            await client.close()

    try:
        return _run(_go())
    except ApiClientError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(1)


def _console():
    from rich.console import Console

    return Console()


def _check(done: bool) -> str:
    return "[green]✓[/green]" if done else "·"


# ---------------------------------------------------------------------------
# Top-level commands
# ---------------------------------------------------------------------------


@app.command()
def serve():
    """Start the HTTP API server."""
    from willowbank.server import run

    run()


@app.command()
def health():
    """Check that the API server is up."""
    result = _call(lambda client: client.health_check())
    typer.echo(f"{result['status']} (version {result['version']}, {result['timestamp']})")


# ---------------------------------------------------------------------------
# Requirements
# ---------------------------------------------------------------------------


@requirements_app.command("list")
def requirements_list(
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
    search: str = typer.Option(None, "--search", "-s", help="Text in description or notes"),
):
    """List requirements grouped by category."""
    from rich.table import Table

    result = _call(lambda client: client.requirements.get_all(category=category, search=search))
    console = _console()

    for name, items in result["data"].items():
        if category and name != category:
            continue
        table = Table(title=f"{name} ({len(items)})", title_justify="left")
        table.add_column("ID", justify="right")
        table.add_column("#", justify="right")
        table.add_column("Done")
        table.add_column("Description")
        for item in items:
            table.add_row(
                str(item["id"]), str(item["priority"]), _check(item["completed"]), item["description"]
            )
        console.print(table)

    typer.echo(f"Total: {result['total']}")


@requirements_app.command("add")
def requirements_add(
    category: str = typer.Argument(..., help="needs, wants or nice-to-haves"),
    description: str = typer.Argument(..., help="What is required"),
    priority: int = typer.Option(0, "--priority", "-p", help="Position within the category"),
    notes: str = typer.Option(None, "--notes", "-n", help="Optional notes"),
):
    """Create a requirement."""
    data = {"category": category, "description": description, "priority": priority}
    if notes is not None:
        data["notes"] = notes

    result = _call(lambda client: client.requirements.create(data))
    typer.echo(f"Created requirement {result['data']['id']} in {category}.")


@requirements_app.command("done")
def requirements_done(
    requirement_id: int = typer.Argument(..., help="Requirement ID"),
    undo: bool = typer.Option(False, "--undo", help="Mark as not completed"),
):
    """Mark a requirement completed (or not, with --undo)."""
    result = _call(
        lambda client: client.requirements.update(requirement_id, {"completed": not undo})
    )
    state = "completed" if result["data"]["completed"] else "open"
    typer.echo(f"Requirement {requirement_id} is now {state}.")


@requirements_app.command("remove")
def requirements_remove(requirement_id: int = typer.Argument(..., help="Requirement ID")):
    """Delete a requirement."""
    _call(lambda client: client.requirements.delete(requirement_id))
    typer.echo(f"Deleted requirement {requirement_id}.")


@requirements_app.command("reorder")
def requirements_reorder(
    category: str = typer.Argument(..., help="Category being reordered"),
    ids: list[int] = typer.Argument(..., help="Requirement IDs in the new order"),
):
    """Set priorities within a category to follow the given order."""
    result = _call(lambda client: client.requirements.reorder(category, ids))
    typer.echo(f"Reordered {result['data']['updated']} requirement(s) in {category}.")


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------


def _months(phase: dict[str, Any]) -> str:
    start, end = phase.get("start_month"), phase.get("end_month")
    if start is None and end is None:
        return "-"
    return f"{start or '?'}-{end or '?'}"


@phases_app.command("list")
def phases_list(
    tasks: bool = typer.Option(False, "--tasks", "-t", help="Show each phase's tasks"),
):
    """List phases in order."""
    from rich.table import Table

    result = _call(lambda client: client.phases.get_all())
    console = _console()

    table = Table(title=f"Phases ({result['total']})", title_justify="left")
    table.add_column("ID", justify="right")
    table.add_column("#", justify="right")
    table.add_column("Done")
    table.add_column("Title")
    table.add_column("Months")
    table.add_column("Tasks", justify="right")
    for phase in result["data"]:
        finished = sum(1 for task in phase["tasks"] if task["completed"])
        table.add_row(
            str(phase["id"]),
            str(phase["order_index"]),
            _check(phase["completed"]),
            phase["title"],
            _months(phase),
            f"{finished}/{len(phase['tasks'])}",
        )
    console.print(table)

    if tasks:
        for phase in result["data"]:
            if not phase["tasks"]:
                continue
            typer.echo(f"\n{phase['title']}:")
            for task in phase["tasks"]:
                mark = "x" if task["completed"] else " "
                typer.echo(f"  [{mark}] {task['id']}: {task['description']}")


@phases_app.command("add")
def phases_add(
    title: str = typer.Argument(..., help="Phase title"),
    order_index: int = typer.Option(..., "--order", "-o", help="Position among phases (0-based)"),
    description: str = typer.Option(None, "--description", "-d"),
    start_month: int = typer.Option(None, "--start", help="Start month (1-12)"),
    end_month: int = typer.Option(None, "--end", help="End month (1-12)"),
):
    """Create a phase."""
    data: dict[str, Any] = {"title": title, "order_index": order_index}
    optional = {"description": description, "start_month": start_month, "end_month": end_month}
    data.update({key: value for key, value in optional.items() if value is not None})

    result = _call(lambda client: client.phases.create(data))
    typer.echo(f"Created phase {result['data']['id']}: {title}")


@phases_app.command("done")
def phases_done(
    phase_id: int = typer.Argument(..., help="Phase ID"),
    undo: bool = typer.Option(False, "--undo", help="Mark as not completed"),
):
    """Mark a phase completed."""
    _call(lambda client: client.phases.update(phase_id, {"completed": not undo}))
    typer.echo(f"Phase {phase_id} updated.")


@phases_app.command("remove")
def phases_remove(phase_id: int = typer.Argument(..., help="Phase ID")):
    """Delete a phase and all of its tasks."""
    result = _call(lambda client: client.phases.delete(phase_id))
    typer.echo(f"Deleted phase {phase_id} and {result['data']['tasks_deleted']} task(s).")


@phases_app.command("reorder")
def phases_reorder(ids: list[int] = typer.Argument(..., help="Phase IDs in the new order")):
    """Set phase order to follow the given IDs."""
    result = _call(lambda client: client.phases.reorder(ids))
    typer.echo(f"Reordered {result['data']['updated']} phase(s).")


@phases_app.command("add-task")
def phases_add_task(
    phase_id: int = typer.Argument(..., help="Phase ID"),
    description: str = typer.Argument(..., help="Task description"),
    order_index: int = typer.Option(0, "--order", "-o", help="Position within the phase"),
    notes: str = typer.Option(None, "--notes", "-n"),
):
    """Add a task to a phase."""
    data: dict[str, Any] = {"description": description, "order_index": order_index}
    if notes is not None:
        data["notes"] = notes

    result = _call(lambda client: client.phases.add_task(phase_id, data))
    typer.echo(f"Added task {result['data']['id']} to phase {phase_id}.")


@phases_app.command("done-task")
def phases_done_task(
    phase_id: int = typer.Argument(..., help="Phase ID"),
    task_id: int = typer.Argument(..., help="Task ID"),
    undo: bool = typer.Option(False, "--undo", help="Mark as not completed"),
):
    """Mark a task completed."""
    _call(lambda client: client.phases.update_task(phase_id, task_id, {"completed": not undo}))
    typer.echo(f"Task {task_id} updated.")


# ---------------------------------------------------------------------------
# Plants
# ---------------------------------------------------------------------------


@plants_app.command("list")
def plants_list(
    category: str = typer.Option(None, "--category", "-c"),
    water_needs: str = typer.Option(None, "--water", help="low, moderate or high"),
    sun_requirements: str = typer.Option(None, "--sun", help="full-sun, partial-sun or shade"),
    native: bool = typer.Option(None, "--native/--non-native", help="Native status"),
    drought_tolerant: bool = typer.Option(None, "--drought-tolerant", help="Only drought tolerant"),
    search: str = typer.Option(None, "--search", "-s", help="Text in common or scientific name"),
):
    """List plants matching the filters, grouped by category."""
    from rich.table import Table

    filters = {
        "category": category,
        "water_needs": water_needs,
        "sun_requirements": sun_requirements,
        "native": native,
        "drought_tolerant": drought_tolerant,
        "search": search,
    }
    result = _call(lambda client: client.plants.get_all(**filters))
    console = _console()

    for name, items in result["data"].items():
        if not items:
            continue
        table = Table(title=f"{name} ({len(items)})", title_justify="left")
        table.add_column("ID", justify="right")
        table.add_column("Name")
        table.add_column("Water")
        table.add_column("Sun")
        table.add_column("Native")
        for plant in items:
            table.add_row(
                str(plant["id"]),
                plant["common_name"],
                plant.get("water_needs") or "-",
                plant.get("sun_requirements") or "-",
                _check(plant["native"]),
            )
        console.print(table)

    typer.echo(f"Total: {result['total']}")


@plants_app.command("seed")
def plants_seed(
    force: bool = typer.Option(False, "--force", help="Replace existing plants"),
):
    """Seed the default plant catalogue."""
    result = _call(lambda client: client.plants.seed(force=force))
    typer.echo(result["message"])


# ---------------------------------------------------------------------------
# Compliance
# ---------------------------------------------------------------------------


@compliance_app.command("list")
def compliance_list(
    requirement_type: str = typer.Option(None, "--type", "-t", help="setback, water, fence, plant or permit"),
):
    """List compliance requirements grouped by type."""
    result = _call(lambda client: client.compliance.get_all(type=requirement_type))

    for name, items in result["data"].items():
        if not items:
            continue
        typer.echo(f"{name}:")
        for item in items:
            reference = f" [{item['code_reference']}]" if item.get("code_reference") else ""
            typer.echo(f"  {item['id']}: {item['title']} ({item['status']}){reference}")

    typer.echo(f"Total: {result['total']}")


if __name__ == "__main__":
    app()
