"""nodestore CLI - script runner and interactive shell."""
import json
import shlex
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set, Tuple, Union

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from nodestore.core.config import StoreConfig
from nodestore.core.errors import StoreError
from nodestore.core.logging import LogLevel, configure_logging, get_logger
from nodestore.core.store import Node, NodeStore, Result

app = typer.Typer(
    name="nodestore",
    help="In-memory hierarchical key/value store",
    add_completion=False
)
console = Console()
logger = get_logger('cli')

HELP_TEXT = """Commands:
  get KEY [-r] [-s]      read a node (-r subtree, -s sorted)
  ls [KEY]               list a directory
  tree [KEY]             show a subtree
  set KEY VALUE          create or replace a leaf
  mkdir KEY              create a directory
  create KEY VALUE       create a leaf
  update KEY VALUE       change a leaf value
  rm KEY [-r] [-d]       delete (-r recursive, -d expect directory)
  stats                  operation counters"""

Output = Union[Result, Dict[str, Any]]


def _split_flags(args: List[str], allowed: Set[str]) -> Tuple[List[str], Set[str]]:
    positional, flags = [], set()
    for arg in args:
        if arg.startswith('-') and len(arg) > 1:
            if arg not in allowed:
                raise ValueError(f"Unknown flag: {arg}")
            flags.add(arg)
        else:
            positional.append(arg)
    return positional, flags


def _expect(positional: List[str], names: List[str], command: str) -> List[str]:
    if len(positional) != len(names):
        raise ValueError(f"Usage: {command} {' '.join(n.upper() for n in names)}")
    return positional


def _cmd_get(store: NodeStore, args: List[str]) -> Output:
    positional, flags = _split_flags(args, {'-r', '-s'})
    key, = _expect(positional, ['key'], 'get')
    return store.get(key, recursive='-r' in flags, sorted='-s' in flags)


def _cmd_ls(store: NodeStore, args: List[str]) -> Output:
    key, = _expect(args or ['/'], ['key'], 'ls')
    return store.get(key, recursive=False, sorted=True)


def _cmd_tree(store: NodeStore, args: List[str]) -> Output:
    key, = _expect(args or ['/'], ['key'], 'tree')
    return store.get(key, recursive=True, sorted=True)


def _cmd_set(store: NodeStore, args: List[str]) -> Output:
    key, value = _expect(args, ['key', 'value'], 'set')
    return store.set(key, False, value)


def _cmd_mkdir(store: NodeStore, args: List[str]) -> Output:
    key, = _expect(args, ['key'], 'mkdir')
    return store.create(key, True)


def _cmd_create(store: NodeStore, args: List[str]) -> Output:
    key, value = _expect(args, ['key', 'value'], 'create')
    return store.create(key, False, value)


def _cmd_update(store: NodeStore, args: List[str]) -> Output:
    key, value = _expect(args, ['key', 'value'], 'update')
    return store.update(key, value)


def _cmd_rm(store: NodeStore, args: List[str]) -> Output:
    positional, flags = _split_flags(args, {'-r', '-d'})
    key, = _expect(positional, ['key'], 'rm')
    return store.delete(key, recursive='-r' in flags, dir='-d' in flags)


def _cmd_stats(store: NodeStore, args: List[str]) -> Output:
    _expect(args, [], 'stats')
    return store.stats.to_dict()


COMMANDS: Dict[str, Callable[[NodeStore, List[str]], Output]] = {
    'get': _cmd_get,
    'ls': _cmd_ls,
    'tree': _cmd_tree,
    'set': _cmd_set,
    'mkdir': _cmd_mkdir,
    'create': _cmd_create,
    'update': _cmd_update,
    'rm': _cmd_rm,
    'stats': _cmd_stats,
}


def execute(store: NodeStore, line: str) -> Optional[Tuple[str, Output]]:
    """
    Runs one command line against store.

    Returns:
        (command, output), or None for blank and comment lines

    Raises:
        ValueError: unknown command or bad arguments
        StoreError: the store rejected the operation
    """
    argv = shlex.split(line, comments=True)
    if not argv:
        return None
    command, args = argv[0], argv[1:]
    handler = COMMANDS.get(command)
    if handler is None:
        raise ValueError(f"Unknown command: {command}")
    return command, handler(store, args)


def _label(node: Node) -> str:
    if node.is_root:
        return "[blue]/[/blue]"
    if node.is_dir:
        return f"[blue]{escape(node.name)}/[/blue]"
    return f"{escape(node.name)} = {escape(repr(node.value))}"


def _add_branch(tree: Tree, node: Node):
    for child in node.get_children():
        branch = tree.add(_label(child))
        _add_branch(branch, child)


def render(command: str, output: Output, as_json: bool = False):
    """Prints a command output."""
    if as_json:
        payload = output.to_dict() if isinstance(output, Result) else output
        typer.echo(json.dumps(payload))
        return

    if isinstance(output, dict):
        table = Table("Counter", "Value")
        for name, count in output.items():
            table.add_row(name, str(count))
        console.print(table)
        return

    node = output.curr_node
    if command == 'tree':
        tree = Tree(_label(node))
        _add_branch(tree, node)
        console.print(tree)
    elif node.is_dir and output.action == 'get':
        table = Table(title=escape(node.key))
        table.add_column("Type", style="cyan")
        table.add_column("Key")
        table.add_column("Value")
        for child in node.get_children():
            value = "" if child.is_dir else escape(repr(child.value))
            table.add_row("D" if child.is_dir else "F", escape(child.key), value)
        console.print(table)
    else:
        line = f"[green]{output.action}[/green] {_label(node)}"
        if output.prev_node is not None and output.action != 'delete':
            line += f" [dim](was {_label(output.prev_node)})[/dim]"
        console.print(line, soft_wrap=True)


def _run_line(store: NodeStore, line: str, as_json: bool) -> bool:
    try:
        outcome = execute(store, line)
    except StoreError as err:
        logger.debug("command failed: %s", line)
        if as_json:
            typer.echo(err.json_string())
        else:
            console.print(f"[red]error[/red] {escape(str(err))}", soft_wrap=True)
        return False
    except ValueError as err:
        console.print(f"[red]{escape(str(err))}[/red]", soft_wrap=True)
        return False

    if outcome is not None:
        render(*outcome, as_json=as_json)
    return True


def _make_store(config_file: Optional[Path], log_level: Optional[str]) -> NodeStore:
    if log_level:
        try:
            configure_logging(LogLevel[log_level.upper()])
        except KeyError:
            raise typer.BadParameter(f"Unknown log level: {log_level}", param_hint="--log-level")
    config = StoreConfig.default()
    if config_file is not None:
        try:
            config = StoreConfig.from_dict(json.loads(config_file.read_text()))
        except ValueError as err:
            raise typer.BadParameter(str(err), param_hint="--config")
    return NodeStore(config)


@app.command()
def run(
    script: Path = typer.Argument(..., help="File with one command per line", exists=True, dir_okay=False),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="JSON store configuration", exists=True),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
):
    """Run a command script against a fresh store."""
    store = _make_store(config_file, log_level)

    failures = 0
    for line in script.read_text().splitlines():
        if not _run_line(store, line, as_json):
            failures += 1

    if failures:
        raise typer.Exit(1)


@app.command()
def shell(
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="JSON store configuration", exists=True),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
):
    """Interactive shell over an in-memory store."""
    store = _make_store(config_file, log_level)
    console.print("nodestore shell - 'help' for commands, 'exit' to quit")

    while True:
        try:
            line = console.input("nodestore> ")
        except (EOFError, KeyboardInterrupt):
            break
        stripped = line.strip()
        if stripped in ('exit', 'quit'):
            break
        if stripped == 'help':
            console.print(HELP_TEXT, markup=False)
            continue
        _run_line(store, line, as_json)


def main():
    app()


if __name__ == "__main__":
    main()
