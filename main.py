import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from collector import collect
from expr_parser import ExpressionSyntaxError, parse
from sympy_bridge import equivalent

app = typer.Typer()
console = Console()


def read_expressions(path: Path) -> list[str]:
    """One expression per line; blank lines and `#` comments are skipped."""
    lines = []
    for line in path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            lines.append(line)
    return lines


def groups_table(status) -> Table:
    table = Table(title="Groups")
    table.add_column("Group", justify="right")
    table.add_column("Collected terms")
    table.add_column("Becomes")
    for group_id in sorted(set(status.groups.values())):
        inputs = [n for n in status.old_node.args if status.group_of(n) == group_id]
        outputs = [n for n in status.new_node.args if status.group_of(n) == group_id]
        table.add_row(
            str(group_id),
            ", ".join(escape(str(n)) for n in inputs),
            ", ".join(escape(str(n)) for n in outputs),
        )
    return table


def process_expression(source: str, show_groups: bool, verify: bool) -> bool:
    """
    1) Parse the expression
    2) Collect like terms on its root node
    3) Show before/after, and optionally the groups and an equivalence check
    Returns False if the expression could not be processed.
    """
    try:
        node = parse(source)
    except ExpressionSyntaxError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        return False

    status = collect(node)
    if not status.has_changed():
        console.print(Panel(
            f"{escape(str(node))}\n[italic]No changes[/italic]",
            title=escape(source), border_style="blue",
        ))
        return True

    console.print(Panel(
        f"{escape(str(status.old_node))}\n→ {escape(str(status.new_node))}",
        title=escape(source), subtitle=status.change_type.value, border_style="green",
    ))
    if show_groups:
        console.print(groups_table(status))
    if verify:
        if equivalent(status.old_node, status.new_node):
            console.print("✅ Equivalent")
        else:
            console.print("[red]❌ Not equivalent[/red]")
            return False
    return True


@app.command()
def main(
    expressions: list[str] = typer.Argument(
        None, help="Expressions to collect like terms in, e.g. 'x + 3 + x + 2'"
    ),
    file: Path = typer.Option(
        None, "--file", "-f", exists=True, file_okay=True, dir_okay=False,
        help="Read expressions from FILE, one per line"
    ),
    groups: bool = typer.Option(
        False, "--groups/--no-groups",
        help="Show which input terms went into which group"
    ),
    verify: bool = typer.Option(
        False, "--verify/--no-verify",
        help="Check with SymPy that the rewrite keeps the value"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Log classification and decisions"
    ),
):
    """
    Collect like terms in each EXPRESSION (and each line of --file).
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    sources = list(expressions or [])
    if file is not None:
        sources.extend(read_expressions(file))
    if not sources:
        console.print("[yellow]No expressions given[/yellow]")
        raise typer.Exit(code=2)

    ok = True
    for source in sources:
        ok = process_expression(source, groups, verify) and ok
    if not ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
