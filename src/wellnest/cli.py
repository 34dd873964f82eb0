"""Flask CLI commands for Wellnest."""

from __future__ import annotations

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("wellnest-init-db")
    def wellnest_init_db() -> None:
        """Create any missing tables."""

        from .extensions import get_context
        from .infra.database import init_database

        ctx = get_context()
        init_database(ctx.engine)
        click.echo(f"Database ready: {ctx.config.DATABASE_URL}")

    @app.cli.command("wellnest-seed-defaults")
    @click.argument("username")
    def wellnest_seed_defaults(username: str) -> None:
        """Insert the default habits a user is missing."""

        from .extensions import get_context
        from .services.auth import get_user_by_username
        from .services.habits import ensure_defaults

        ctx = get_context()
        user = get_user_by_username(username, ctx.session_factory)
        if user is None or user.id is None:
            raise click.ClickException(f"No user named {username!r}")
        inserted = ensure_defaults(ctx.habit_store, user_id=user.id)
        if inserted:
            click.echo(f"Seeded: {', '.join(inserted)}")
        else:
            click.echo("Nothing to seed; all default habits exist.")
