"""
DOM Screen CLI - try locators and matchers against an HTML file.
"""

import logging
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from domscreen import __version__

console = Console()

STEP_KINDS = ("locate", "role", "text", "text-re", "filter", "filter-re", "first")


def _load_screen(path):
    """Render an HTML file into a fresh in-process session."""
    from domscreen.core.screen import DomScreenSession
    from domscreen.trees.soup_tree import SoupLifecycle

    with open(path, encoding="utf-8") as f:
        html = f.read()

    hooks = []
    session = DomScreenSession.init_test(SoupLifecycle(), after_each=hooks.append)
    screen = session.render(html)
    titles = screen.locate("title").all_elements()
    if titles:
        session.lifecycle.document.title = "".join(titles[0].text_nodes()).strip()
    return session, screen, hooks


def _apply_steps(screen, steps):
    """Apply ``kind:argument`` steps in the order given."""
    import re

    loc = screen.locate("")
    for raw in steps:
        kind, _, arg = raw.partition(":")
        if kind == "locate":
            loc = loc.locate(arg)
        elif kind == "role":
            loc = loc.locate_role(arg)
        elif kind == "text":
            loc = loc.locate_text(arg)
        elif kind == "text-re":
            loc = loc.locate_text(re.compile(arg))
        elif kind == "filter":
            loc = loc.filter_text(arg)
        elif kind == "filter-re":
            loc = loc.filter_text(re.compile(arg))
        elif kind == "first":
            loc = loc.first()
        else:
            raise click.BadParameter(
                f"unknown step kind '{kind}' (expected one of: {', '.join(STEP_KINDS)})",
                param_hint="--step",
            )
    return loc


def _elements_table(elements):
    from domscreen.core.strategies import get_normalized_text

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Tag", style="green")
    table.add_column("Id", style="yellow")
    table.add_column("Class", style="blue", max_width=30)
    table.add_column("Own text", max_width=50)
    for i, elem in enumerate(elements):
        text = get_normalized_text(elem)
        table.add_row(
            str(i),
            elem.tag,
            escape(elem.get_attribute("id") or ""),
            escape(elem.get_attribute("class") or ""),
            escape(text[:50] + "..." if len(text) > 50 else text),
        )
    return table


@click.group()
@click.version_option(version=__version__, prog_name="domscreen")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """DOM Screen - locate and assert against HTML fragments."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("-s", "--step", "steps", multiple=True,
              help="Locator step as kind:argument, applied in order. "
                   "Kinds: locate, role, text, text-re, filter, filter-re, first")
def query(path, steps):
    """
    Print the elements a locator chain finds in an HTML file.

    \b
    Examples:

        domscreen query page.html -s locate:ul -s text:milk

        domscreen query page.html -s role:button -s first
    """
    session, screen, hooks = _load_screen(path)
    try:
        loc = _apply_steps(screen, steps)
        elements = loc.all_elements()
        console.print(f"[bold]Locator:[/bold] {escape(loc.format_description()) or '(screen)'}")
        console.print(f"[bold]Matched:[/bold] {len(elements)} element(s)")
        if elements:
            console.print(_elements_table(elements))
    finally:
        for hook in hooks:
            hook()


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("-s", "--step", "steps", multiple=True, help="Locator step as kind:argument (see query)")
@click.option("--selector", default=None, help="Expect a match for this CSS selector")
@click.option("--class", "class_names", default=None, help="Expect these space-separated class names")
@click.option("--text", default=None, help="Expect an element whose own text contains this")
@click.option("--title", default=None, help="Expect this page title")
@click.option("--in-document", is_flag=True, help="Expect the locator to find something")
@click.option("--not", "negate", is_flag=True, help="Invert every check")
def check(path, steps, selector, class_names, text, title, in_document, negate):
    """
    Run matchers against an HTML file. Exits with status 1 on failure.

    \b
    Example:

        domscreen check page.html -s locate:nav --class "menu open" --text Home
    """
    session, screen, hooks = _load_screen(path)
    try:
        loc = _apply_steps(screen, steps)
        checks = []
        if selector is not None:
            checks.append(("to_match_selector", (selector,)))
        if class_names is not None:
            checks.append(("to_have_class", (class_names,)))
        if text is not None:
            checks.append(("to_contain_text", (text,)))
        if title is not None:
            checks.append(("to_have_title", (title,)))
        if in_document:
            checks.append(("to_be_in_document", ()))
        if not checks:
            raise click.UsageError("nothing to check; pass --selector, --class, --text, --title or --in-document")

        failures = 0
        for name, args in checks:
            expectation = session.expect(loc)
            if negate:
                expectation = expectation.not_
            try:
                getattr(expectation, name)(*args)
                console.print(f"[green]PASS[/green] {name}{escape(repr(args)) if args else '()'}")
            except AssertionError as e:
                failures += 1
                console.print(f"[red]FAIL[/red] {name}{escape(repr(args)) if args else '()'}")
                click.echo(str(e))
                click.echo()
    finally:
        for hook in hooks:
            hook()

    if failures:
        console.print(f"\n[bold red]{failures} of {len(checks)} check(s) failed[/bold red]")
        sys.exit(1)
    console.print(f"\n[bold green]All {len(checks)} check(s) passed[/bold green]")


@cli.command()
def doctor():
    """Check that the tree backends can be imported."""
    console.print(Panel.fit(
        "[bold cyan]DOM Screen Doctor[/bold cyan]\n"
        "[dim]Dependency Check[/dim]",
        border_style="cyan"
    ))

    dependencies = [
        ("bs4", "In-process tree"),
        ("soupsieve", "CSS selectors for the in-process tree"),
        ("selenium", "Browser tree"),
        ("pytest", "Test fixtures"),
    ]

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Package", style="blue")
    table.add_column("Role", style="dim")
    table.add_column("Status", justify="center")

    all_good = True
    for package, role in dependencies:
        try:
            __import__(package)
            status = "[green]Installed[/green]"
        except ImportError:
            status = "[yellow]Missing[/yellow]"
            all_good = False
        table.add_row(package, role, status)

    console.print(table)
    if all_good:
        console.print("[bold green]All dependencies installed.[/bold green]")
    else:
        console.print("[yellow]Some dependencies are missing.[/yellow]")


@cli.command()
def version():
    """Show version information."""
    console.print(f"DOM Screen v{__version__}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
