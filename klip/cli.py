import click
from flask import current_app
from flask.cli import with_appcontext

from klip.extensions import db
from klip.importer import TopoStore, WorkbookOpenError, import_workbook
from klip.seed import seed_demo_data


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create missing tables."""
    db.create_all()
    click.echo("Database tables ready.")


@click.command("seed-demo")
@with_appcontext
def seed_demo_command():
    """Load the demo crags, routes and users."""
    db.create_all()
    seed_demo_data()
    click.echo("Demo data loaded.")


@click.command("import-excel")
@with_appcontext
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--fresh",
    is_flag=True,
    default=False,
    help="Required: delete every crag, sector, route, pitch and report before importing.",
)
def import_excel_command(path, fresh):
    """Rebuild the topo from a maintenance workbook (.xlsx)."""
    if not fresh:
        raise click.UsageError(
            "This import deletes all crags, sectors, routes, pitches and reports first. "
            "Re-run with --fresh to confirm."
        )

    db.create_all()
    store = TopoStore()

    try:
        results = import_workbook(
            path,
            store=store,
            skip_sheets=current_app.config.get("IMPORT_SKIP_SHEETS", ["Sheet2"]),
            header_sentinel=current_app.config.get("IMPORT_HEADER_SENTINEL", "VOIE"),
        )
    except WorkbookOpenError as exc:
        raise click.ClickException(str(exc))
    except Exception as exc:
        store.rollback()
        current_app.logger.exception("Import failed")
        raise click.ClickException(f"Import failed: {exc}")

    counts = store.counts()
    click.echo("=== Import Summary ===")
    click.echo(f"Sheets: {len(results)}")
    click.echo(f"Crags: {counts['crags']}")
    click.echo(f"Sectors: {counts['sectors']}")
    click.echo(f"Routes: {counts['routes']}")
    click.echo(f"Pitches: {counts['pitches']}")
    click.echo("Import completed successfully!")


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_demo_command)
    app.cli.add_command(import_excel_command)
