"""API CLI commands for the Rules Engine Editor."""

import asyncio
import sys

import click
import uvicorn
from ruleseditor_common.config import get_settings
from ruleseditor_common.exceptions import StorageError


@click.group()
def cli():
    """Rules Engine Editor CLI - API server, storage checks and RulesEngine import/export."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind the server to")  # noqa: S104
@click.option("--port", default=8000, help="Port to bind the server to")
@click.option("--reload/--no-reload", default=False, help="Enable/disable auto-reload")
@click.option("--log-level", default="info", help="Logging level")
def serve(host: str, port: int, reload: bool, log_level: str):
    """Start the API server."""
    click.echo(f"Starting Rules Engine Editor API on {host}:{port}")
    click.echo(f"   Reload: {reload}, Log Level: {log_level}")

    uvicorn.run(
        app="ruleseditor_api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


def _create_storage(provider: str | None):
    from ruleseditor_workflows.storage_provider_factory import StorageProviderFactory

    settings = get_settings()
    factory = StorageProviderFactory(settings.storage, aws_settings=settings.aws)
    return factory.create_provider(provider)


@cli.command()
@click.option("--provider", default=None, help="Provider to check; configured default if omitted")
def validate(provider: str | None):
    """Validate storage configuration by initializing a provider."""
    click.echo("Validating storage configuration...")

    try:
        storage = _create_storage(provider)
        click.echo(f"{storage.provider_name} initialized successfully")
    except StorageError as e:
        click.echo(f"Validation failed: {e}")
        sys.exit(1)


@cli.command("export")
@click.argument("name")
@click.option("--provider", default=None, help="Storage provider; configured default if omitted")
@click.option("--output", "-o", type=click.File("w", encoding="utf-8"), default="-", help="Output file")
def export_workflow(name: str, provider: str | None, output):
    """Write a stored workflow as a RulesEngine workflow array."""
    from ruleseditor_workflows.converters import (
        dump_rules_engine_workflows,
        to_rules_engine_workflows,
    )

    try:
        storage = _create_storage(provider)
        workflow = asyncio.run(storage.get_workflow(name))
    except StorageError as e:
        click.echo(f"Export failed: {e}", err=True)
        sys.exit(1)

    output.write(dump_rules_engine_workflows(to_rules_engine_workflows(workflow)))
    output.write("\n")


@cli.command("import")
@click.argument("source", type=click.File("rb"))
@click.option("--provider", default=None, help="Storage provider; configured default if omitted")
def import_workflow(source, provider: str | None):
    """Save the first workflow of a RulesEngine JSON file."""
    from ruleseditor_workflows.converters import (
        from_rules_engine_workflows,
        load_rules_engine_workflows,
        summarize_rules_engine_workflows,
    )

    try:
        workflows = load_rules_engine_workflows(source.read())
        workflow = from_rules_engine_workflows(workflows)
        if workflow is None:
            click.echo("Import failed: no workflows in file", err=True)
            sys.exit(1)

        storage = _create_storage(provider)
        asyncio.run(storage.save_workflow(workflow))
    except StorageError as e:
        click.echo(f"Import failed: {e}", err=True)
        sys.exit(1)

    summary = summarize_rules_engine_workflows(workflows)
    click.echo(
        f"Imported '{summary.name}' into {storage.provider_name}: "
        f"{summary.rule_count} rules, {summary.global_param_count} global params"
    )


if __name__ == "__main__":
    cli()
