import typing

import click
import rich
import rich.console
import rich.table
import toolz

import tagmap
import tagmap.core
import tagmap.core.collection
import tagmap.core.configuration
import tagmap.core.scenario
import tagmap.log

_SNAPSHOT_CHOICE = click.Choice(
    [
        tagmap.core.configuration.SNAPSHOT_EACH,
        tagmap.core.configuration.SNAPSHOT_LAST,
        tagmap.core.configuration.SNAPSHOT_NONE,
    ]
)


@click.option(
    "--log-level",
    "log_level",
    envvar=tagmap.log.LOG_LEVEL_VARIABLE,
    default=tagmap.log.DEFAULT_LOG_LEVEL,
    help="Logging level.",
    show_default=True,
)
@click.group()
def main(log_level: str):
    tagmap.log.setup_logging(log_level)


def _sorted(values: typing.Iterable[typing.Any]) -> typing.List[typing.Any]:
    return sorted(values, key=str)


def _print_snapshot(
    console: "rich.console.Console",
    snapshot: "tagmap.core.scenario.Snapshot",
):
    keys = snapshot.keys

    key_table = rich.table.Table(title="Key to Value")
    key_table.add_column("Key")
    key_table.add_column("Value")

    for key in _sorted(keys):
        key_table.add_row(str(key), str(keys[key]))

    tag_table = rich.table.Table(title="Tag to Value")
    tag_table.add_column("Tag")
    tag_table.add_column("Value")

    tags = toolz.valmap(_sorted, snapshot.tags)

    for tag in _sorted(tags):
        for value in tags[tag]:
            tag_table.add_row(str(tag), str(value))

    console.print(key_table)
    console.print(tag_table)


def _run_scenario(
    scenario: "tagmap.core.scenario.Scenario",
    snapshot_mode: typing.Optional[str],
):
    console = rich.console.Console()
    console.rule(scenario.name)

    try:
        for step in scenario.run(snapshot_mode=snapshot_mode):
            console.print(
                "{} -> {}".format(step.describe(), step.result),
                markup=False,
                highlight=False,
            )

            if step.snapshot is not None:
                _print_snapshot(console, step.snapshot)
    except tagmap.core.collection.Error as error:
        raise click.ClickException(str(error)) from error


def _load_scenario(path: str) -> "tagmap.core.scenario.Scenario":
    try:
        return tagmap.core.scenario.Scenario.load(path)
    except tagmap.core.configuration.Error as error:
        raise click.ClickException(str(error)) from error


@main.command(
    name="demo",
    help="Run the built-in demonstration scenario.",
)
@click.option(
    "--snapshot",
    "snapshot_mode",
    type=_SNAPSHOT_CHOICE,
    default=None,
    help="When to print the map.",
)
def _demo(snapshot_mode: typing.Optional[str]):
    _run_scenario(
        tagmap.core.scenario.Scenario(tagmap.core.scenario.DEMO),
        snapshot_mode,
    )


@main.command(
    name="run",
    help="Run a scenario file.",
)
@click.option(
    "--snapshot",
    "snapshot_mode",
    type=_SNAPSHOT_CHOICE,
    default=None,
    help="When to print the map.",
)
@click.argument(
    "path",
    type=click.Path(dir_okay=False),
)
def _run(path: str, snapshot_mode: typing.Optional[str]):
    _run_scenario(_load_scenario(path), snapshot_mode)


@main.command(
    name="validate",
    help="Validate a scenario file.",
)
@click.argument(
    "path",
    type=click.Path(dir_okay=False),
)
def _validate(path: str):
    scenario = _load_scenario(path)
    click.echo("{}: {} step(s)".format(scenario.name, len(scenario)))


if __name__ == "__main__":
    main()
