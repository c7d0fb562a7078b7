"""groupgrid CLI - render grouped tables with subtotals and selection."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from groupgrid import __version__, render_view
from groupgrid.config import (
    ConfigLoadError,
    ConfigValidationError,
    GridConfig,
    VALID_OUTPUT_FORMATS,
    generate_config_template,
    get_config,
    get_global_config_path,
    get_project_config_path,
    load_config_file,
)
from groupgrid.mock import generate_mock_rows
from groupgrid.records import RecordLoadError, filter_records, load_records
from groupgrid.renderers import OutputFormat
from groupgrid.tree import GroupingError, build_tree
from groupgrid.tree.model import iter_tree_groups, iter_tree_leaves
from groupgrid.view import (
    GridState,
    add_group_key,
    compute_view,
    expand_all as expand_all_groups,
    toggle_all_selection,
    toggle_expansion,
    toggle_selection,
)

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _fail(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(1)


def _load_config(ctx: click.Context) -> GridConfig:
    try:
        config = get_config(config_path=ctx.obj.get("config_path"))
        config.validate()
    except (ConfigLoadError, ConfigValidationError) as e:
        _fail(str(e))
    return config


@click.group()
@click.version_option(__version__, prog_name="groupgrid")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="GROUPGRID_LOG_LEVEL",
    help="Logging level (default: WARNING)",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file to use instead of ./.groupgrid.json",
)
@click.pass_context
def main(ctx: click.Context, log_level: str, config_path: Path | None) -> None:
    """groupgrid - grouped tables with subtotals and tri-state selection."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@main.command()
@click.argument(
    "records_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--demo", type=int, default=None, help="Use N generated sample rows")
@click.option("--seed", type=int, default=0, show_default=True, help="Seed for --demo rows")
@click.option("--group-by", "-g", multiple=True, help="Column id to group by (repeatable)")
@click.option("--expand", "-e", multiple=True, help="Group id to expand (repeatable)")
@click.option("--expand-all", is_flag=True, help="Expand every group")
@click.option("--select", "-s", "toggles", multiple=True,
              help="Node id to toggle selection of: leaf or group (repeatable)")
@click.option("--select-all", is_flag=True, help="Toggle the header checkbox")
@click.option("--search", default=None, help="Case-insensitive search over the search fields")
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(VALID_OUTPUT_FORMATS),
    default=None,
    help="Output format (default from config: table)",
)
@click.pass_context
def render(
    ctx: click.Context,
    records_file: Path | None,
    demo: int | None,
    seed: int,
    group_by: tuple[str, ...],
    expand: tuple[str, ...],
    expand_all: bool,
    toggles: tuple[str, ...],
    select_all: bool,
    search: str | None,
    output_format: str | None,
) -> None:
    """Render RECORDS_FILE (JSON or YAML) grouped, with subtotals.

    Group ids look like root/Germany/Lila, leaf ids like root/Germany|row-3.
    """
    config = _load_config(ctx)
    columns = config.columns

    if records_file is not None:
        try:
            records = load_records(records_file, columns)
        except RecordLoadError as e:
            _fail(str(e))
    elif demo is not None:
        records = generate_mock_rows(demo, seed=seed)
    else:
        _fail("Provide a RECORDS_FILE or --demo N")

    records = filter_records(records, search, config.search_fields)

    known = {c.id for c in columns}
    state = GridState()
    for key in group_by or config.grouping.keys:
        if key not in known:
            _fail(f"Unknown column '{key}'. Valid columns: {', '.join(sorted(known))}")
        state = add_group_key(state, key)

    options = config.grouping.to_options()
    try:
        tree = build_tree(records, state.group_keys, columns, options=options)
    except GroupingError as e:
        _fail(str(e))

    if expand_all:
        state = expand_all_groups(state, tree)
    for node_id in expand:
        state = toggle_expansion(state, node_id)

    nodes_by_id = {g.id: g for g in iter_tree_groups(tree)}
    nodes_by_id.update({leaf.id: leaf for leaf in iter_tree_leaves(tree)})
    for node_id in toggles:
        node = nodes_by_id.get(node_id)
        if node is None:
            logger.warning("No node with id %s, ignoring selection", node_id)
            continue
        state = toggle_selection(state, node)
    if select_all:
        state = toggle_all_selection(state, tree)

    view = compute_view(records, columns, state, options=options, tree=tree)
    fmt = OutputFormat(output_format or config.display.output_format)
    output = render_view(
        view,
        columns,
        format=fmt,
        expanded=state.expanded,
        width=config.display.width,
        show_footer=config.display.show_footer,
    )
    click.echo(output.rstrip("\n"))


@main.command()
@click.pass_context
def columns(ctx: click.Context) -> None:
    """List configured columns."""
    config = _load_config(ctx)
    table = Table(title="Columns")
    table.add_column("Id")
    table.add_column("Label")
    table.add_column("Kind")
    table.add_column("Aggregated")
    for column in config.columns:
        table.add_row(
            column.id,
            column.label,
            column.value_kind.value,
            "yes" if column.is_aggregable else "",
        )
    console.print(table)


@main.group("config")
def config_group() -> None:
    """Configuration management."""
    pass


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show effective configuration (merged from all sources).

    Displays the configuration after merging the global config
    (~/.groupgrid.json), the project config (./.groupgrid.json) and
    environment variables. Output is JSON.
    """
    config = _load_config(ctx)
    click.echo(json.dumps(config.to_dict(), indent=2))


@config_group.command("init")
@click.option("--global", "is_global", is_flag=True, help="Create global config at ~/.groupgrid.json")
@click.option("--force", is_flag=True, help="Overwrite existing config file")
def config_init(is_global: bool, force: bool) -> None:
    """Write a configuration template.

    By default, creates the project config ./.groupgrid.json.
    """
    config_path = get_global_config_path() if is_global else get_project_config_path()

    if config_path.exists() and not force:
        _fail(f"Config file already exists: {config_path}. Use --force to overwrite")

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(generate_config_template(), indent=2))
    console.print(f"[green]Created config file:[/green] {config_path}")


@config_group.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate configuration files.

    Checks the global and project config files for valid JSON, unknown
    fields and invalid values. Exits non-zero if errors are found.
    """
    explicit = ctx.obj.get("config_path")
    paths = [get_global_config_path(), explicit or get_project_config_path()]

    errors = []
    for path in paths:
        try:
            config = load_config_file(path, strict=True)
            if config is None:
                continue
            config.validate()
            console.print(f"[green]✓[/green] {path}")
        except (ConfigLoadError, ConfigValidationError) as e:
            errors.append(f"{path}: {e}")

    if errors:
        for error in errors:
            err_console.print(f"[red]✗[/red] {error}")
        raise SystemExit(1)
