"""
Flask CLI Commands
Custom commands for setting up the database and bulk-loading a booklist.
"""

import click
from flask import current_app
from pathlib import Path
from models import db, Category
from services.catalog import DEFAULT_CATEGORIES
from services.import_service import BookListImporter


def seed_categories():
    """Insert the default categories that are missing; returns the names added."""
    existing = {name for (name,) in db.session.query(Category.name).all()}
    added = []
    for data in DEFAULT_CATEGORIES:
        if data['name'] in existing:
            continue
        db.session.add(Category(**data))
        added.append(data['name'])
    db.session.commit()
    return added


def register_commands(app):
    """Register custom CLI commands with the Flask app"""

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop all tables before creating them')
    def init_db(drop):
        """Create the database tables"""
        if drop:
            click.confirm('This deletes every book in the library. Continue?', abort=True)
            db.drop_all()
            click.echo("🗑  Dropped all tables")

        db.create_all()
        click.echo(f"✅ Database ready: {current_app.config['SQLALCHEMY_DATABASE_URI']}")

    @app.cli.command('seed-categories')
    def seed_categories_command():
        """Add the default categories"""
        added = seed_categories()
        if added:
            for name in added:
                click.echo(f"  ✅ {name}")
            click.echo(f"\n✅ Added {len(added)} categories")
        else:
            click.echo("✅ All default categories already exist")

    @app.cli.command('import-books')
    @click.argument('file', type=click.Path(exists=True, dir_okay=False))
    @click.option('--dry-run', is_flag=True, help='Validate rows without writing to the database')
    def import_books(file, dry_run):
        """Import books from a booklist CSV file"""
        file_path = Path(file)
        importer = BookListImporter(default_rating=current_app.config.get('IMPORT_DEFAULT_RATING'))

        click.echo(f"\n📚 Importing {file_path.name}{' (dry run)' if dry_run else ''}...")
        results = importer.import_file(str(file_path), dry_run=dry_run)

        for item in results.skipped:
            click.echo(f"  ⏭  Row {item['row']}: {item['title'] or '-'} ({item['reason']})")
        for item in results.errors:
            click.echo(f"  ❌ Row {item['row']}: {item['title']} ({item['error']})", err=True)

        verb = 'Would import' if dry_run else 'Imported'
        click.echo(f"\n✅ {verb}: {results.imported_count} books ({results.read_count} read)")
        if results.skipped_count:
            click.echo(f"⏭  Skipped: {results.skipped_count}")
        if results.error_count:
            click.echo(f"❌ Failed: {results.error_count}")
