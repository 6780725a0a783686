"""
Commandes CLI de diagnostic: configuration effective, capacites, version.

Ces commandes n'executent pas de session: elles interrogent le container
et affichent le resultat.
"""

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from playercore.container import Container
from playercore.core.value_objects import CpuCapability
from playercore.services.capability_prober import CapabilityProber
from playercore.services.usage import UsageRenderer

app = typer.Typer(
    name="playercore-tools",
    help="Outils de diagnostic de playercore",
    no_args_is_help=True,
)
console = Console()


@app.command()
def info() -> None:
    """Affiche la configuration effective."""
    config = Container().config()
    typer.echo(f"Niveau de log : {config.log_level}")
    typer.echo(f"Fichier de log : {config.log_file}")
    typer.echo(f"Rotation : {config.log_rotation_size} ({config.log_retention_count} fichiers)")
    typer.echo(f"Interface par defaut : {config.default_interface}")
    typer.echo(f"Serveur de canaux : {config.channel_server or 'non configure'}")
    typer.echo(f"Port de canaux : {config.channel_port}")
    typer.echo(f"Source CPU : {config.cpuinfo_path}")


@app.command()
def capabilities(
    machine: Annotated[
        Optional[str],
        typer.Option(
            "--machine",
            "-m",
            help="Famille de machine a simuler (masque fixe, sans sondage)",
        ),
    ] = None,
) -> None:
    """Affiche les capacites processeur detectees."""
    if machine is not None:
        prober = CapabilityProber(source=None, machine=machine)
    else:
        prober = Container().capability_prober()
    detected = prober.detect()

    table = Table(title="Capacites processeur")
    table.add_column("Capacite", style="cyan")
    table.add_column("Detectee")
    for flag in CpuCapability:
        if not flag.value:
            continue
        present = detected & flag == flag
        table.add_row(flag.name, "[green]oui[/green]" if present else "[dim]non[/dim]")
    console.print(table)

    if not detected:
        typer.echo("Aucune capacite detectee")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(UsageRenderer.version())
