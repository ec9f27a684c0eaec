from typing import Optional

import click
from pathlib import Path

from rulelink import __version__
from rulelink.config import Config
from rulelink.errors import SourceNotFound
from rulelink.symlinkmirror import LinkTask, link_tasks, mirror, source_root_for

CONFIG = Config()


@click.version_option(version=__version__)
@click.group()
def cli():
    pass


@cli.command()
@click.option("-s", "--save", is_flag=True, default=False, help="Write the current config to disk")
def config(save: bool) -> None:
    """
    Show the rulelink config
    """
    click.echo(CONFIG)
    if save:
        CONFIG.save()


@click.command()
@click.version_option(version=__version__)
@click.argument("target", required=False)
@click.option("-r", "--rules-root", default=None, help="Directory holding one rules directory per project.")
@click.option(
    "--force/--no-force",
    default=None,
    help="Replace anything already at a link destination. --no-force refuses to overwrite.",
)
@click.option("-n", "--dry-run", is_flag=True, default=False, help="List the links without creating them.")
@click.option("-q", "--quiet", is_flag=True, default=False, help="Only print the summary.")
def link(target: Optional[str], rules_root: Optional[str], force: Optional[bool], dry_run: bool, quiet: bool) -> None:
    """
    Mirror the rules directory named after TARGET into TARGET as symbolic links.
    """

    base = Path(rules_root) if rules_root is not None else CONFIG.rules_directory()
    _force = CONFIG.force if force is None else force

    src = source_root_for(target, cwd=base)

    def report(task: LinkTask) -> None:
        if not quiet:
            click.echo(f"[{click.style('*', fg='green')}] {task}")

    count = mirror(src, Path(str(target)), force=_force, dry_run=dry_run, ignore=CONFIG.ignore, echo=report)

    if dry_run:
        click.secho(f"Dry run: {count} links would be created", bold=True)
    else:
        click.secho(f"Symlinks created successfully ({count} linked)", fg="green")


cli.add_command(link)


@cli.command()
@click.option("-r", "--rules-root", default=None, help="Directory holding one rules directory per project.")
def projects(rules_root: Optional[str]) -> None:
    """
    List the projects that have a rules directory
    """

    base = Path(rules_root) if rules_root is not None else CONFIG.rules_directory()
    if not base.is_dir():
        raise SourceNotFound(f"Rules directory {base} does not exist")

    dirs = sorted(p for p in base.iterdir() if p.is_dir() and not p.name.startswith("."))

    click.secho(f"Projects in {base}\n", bold=True)
    for d in dirs:
        files = link_tasks(d, d, ignore=CONFIG.ignore)
        click.echo(f"  {d.name}  ({len(files)} files)")
