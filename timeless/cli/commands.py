"""
CLI commands for local administration
"""

import asyncio
from datetime import timedelta

import typer
from rich.console import Console
from rich.table import Table

from timeless.core.database import db_manager, init_db
from timeless.core.security import Role, create_access_token
from timeless.repositories import BrandRepository, WatchRepository
from timeless.services import WatchService

app = typer.Typer(help="Timeless watch rental administration")
console = Console()


@app.command("init-db")
def init_database():
    """Create the brand and watch tables"""
    asyncio.run(init_db())
    console.print("[green]Database tables created[/green]")


@app.command("create-token")
def create_token(
    subject: str = typer.Option("dev-user", help="Subject (user id) claim"),
    role: Role = typer.Option(Role.USER, help="Role claim"),
    expires_minutes: int = typer.Option(60, min=1, help="Minutes until the token expires"),
):
    """Mint a signed access token for local testing"""
    token = create_access_token(subject, role.value, timedelta(minutes=expires_minutes))
    typer.echo(token)


async def _load_watches():
    async with db_manager.session() as session:
        service = WatchService(WatchRepository(session), BrandRepository(session))
        return await service.list_watches()


@app.command("list-watches")
def list_watches():
    """Show all watches with their brands"""
    watches = asyncio.run(_load_watches())

    table = Table(title="Watches")
    table.add_column("ID", style="dim")
    table.add_column("Brand", style="cyan")
    table.add_column("Model", style="green")
    table.add_column("Year", justify="right")
    table.add_column("Condition", style="yellow")
    table.add_column("Price/day", justify="right")
    table.add_column("Qty", justify="right")

    for watch in watches:
        table.add_row(
            str(watch.id),
            watch.brand.brand_name,
            watch.model,
            str(watch.year),
            watch.condition,
            f"{watch.rental_day_price:.2f}",
            str(watch.quantity),
        )

    console.print(table)


if __name__ == "__main__":
    app()
