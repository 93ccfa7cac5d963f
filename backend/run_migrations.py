#!/usr/bin/env python3
"""
Apply the Debatrix schema to a Supabase PostgreSQL database.

Runs the SQL files in migrations/ in name order, recording each applied
file and its checksum in a tracking table.

Usage:
    python run_migrations.py             # Apply pending migrations
    python run_migrations.py --status    # Show applied and pending migrations
    python run_migrations.py --dry-run   # List what would be applied

Configuration:
    SUPABASE_DB_URL must hold the database connection URI
    (Supabase Dashboard → Settings → Database → Connection string → URI).
"""

import argparse
import hashlib
import sys
from dataclasses import dataclass
from pathlib import Path

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
TRACKING_TABLE = "schema_migrations"


@dataclass(frozen=True)
class Migration:
    """A migration file on disk."""

    name: str
    path: Path
    checksum: str

    @classmethod
    def from_path(cls, path: Path) -> "Migration":
        content = path.read_text()
        return cls(
            name=path.name,
            path=path,
            checksum=hashlib.sha256(content.encode()).hexdigest()[:16],
        )


def connect():
    """Open a connection to the configured database or exit."""
    db_url = get_settings().supabase_db_url
    if not db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        sys.exit(1)

    try:
        return psycopg2.connect(db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def ensure_tracking_table(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                """
                CREATE TABLE IF NOT EXISTS {} (
                    name TEXT PRIMARY KEY,
                    checksum VARCHAR(16) NOT NULL,
                    applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                )
                """
            ).format(sql.Identifier(TRACKING_TABLE))
        )
    conn.commit()


def load_migrations() -> list[Migration]:
    if not MIGRATIONS_DIR.exists():
        console.print(f"[yellow]Warning:[/yellow] No migrations directory at {MIGRATIONS_DIR}")
        return []
    return [Migration.from_path(p) for p in sorted(MIGRATIONS_DIR.glob("*.sql"))]


def applied_checksums(conn) -> dict[str, tuple[str, object]]:
    """Map of applied migration name to (checksum, applied_at)."""
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum, applied_at FROM {} ORDER BY name").format(
                sql.Identifier(TRACKING_TABLE)
            )
        )
        return {row[0]: (row[1], row[2]) for row in cur.fetchall()}


def pending_migrations(conn) -> list[Migration]:
    applied = applied_checksums(conn)
    pending = []
    for migration in load_migrations():
        if migration.name not in applied:
            pending.append(migration)
        elif applied[migration.name][0] != migration.checksum:
            console.print(
                f"[yellow]Warning:[/yellow] {migration.name} changed after it was applied"
            )
    return pending


def apply_migration(conn, migration: Migration) -> None:
    console.print(f"[blue]Applying:[/blue] {migration.name}")
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                    sql.Identifier(TRACKING_TABLE)
                ),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]✗[/red] {migration.name} failed: {e}")
        raise
    console.print(f"[green]✓[/green] {migration.name}")


def show_status(conn) -> None:
    applied = applied_checksums(conn)
    pending = pending_migrations(conn)

    if not applied and not pending:
        console.print("[dim]No migrations found.[/dim]")
        return

    table = Table(title="Debatrix schema")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Applied At")
    table.add_column("Checksum")

    for name, (checksum, applied_at) in applied.items():
        when = applied_at.strftime("%Y-%m-%d %H:%M:%S") if applied_at else ""
        table.add_row(name, "[green]applied[/green]", when, checksum)
    for migration in pending:
        table.add_row(migration.name, "[yellow]pending[/yellow]", "", migration.checksum)

    console.print(table)


def main():
    parser = argparse.ArgumentParser(description="Apply Debatrix database migrations")
    parser.add_argument("--status", action="store_true", help="Show migration status only")
    parser.add_argument("--dry-run", action="store_true", help="List pending migrations only")
    args = parser.parse_args()

    conn = connect()
    try:
        ensure_tracking_table(conn)

        if args.status:
            show_status(conn)
            return

        pending = pending_migrations(conn)
        if not pending:
            console.print("[green]Schema is up to date.[/green]")
            return

        for migration in pending:
            if args.dry_run:
                console.print(f"[cyan]Would apply:[/cyan] {migration.name}")
            else:
                apply_migration(conn, migration)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
