"""Rule set CLI commands: rules, lint and check."""

import json
from pathlib import Path

import click
import yaml

from paramguard.engine import ValidationEngine
from paramguard.exceptions import ConfigurationError, InvalidRequestError
from paramguard.messages import MessageCatalog
from paramguard.rules import default_rules
from paramguard.ruleset import load_ruleset
from paramguard.schema import validate_ruleset_file


def _load_data(path: Path) -> dict:
    """Read a parameter mapping from a JSON or YAML file."""
    with path.open() as fh:
        if path.suffix.lower() == ".json":
            data = json.load(fh)
        else:
            data = yaml.safe_load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping of parameters")
    return data


@click.command()
def rules():
    """List the registered rules and their default messages."""
    catalog = MessageCatalog.from_env()
    for name in default_rules.list_registered():
        click.echo(f"  {click.style(name, bold=True)}: {catalog.template_for(name)}")
    click.echo(f"\n{len(default_rules)} rules registered.")


@click.command()
@click.argument("ruleset_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def lint(ruleset_path: Path):
    """Check a rule set YAML file against the rule set schema."""
    issues = validate_ruleset_file(ruleset_path)
    error_count = sum(1 for issue in issues if issue.is_error)

    for issue in issues:
        click.secho(str(issue), fg="red" if issue.is_error else "yellow")

    if error_count:
        summary = f"{error_count} error(s) found"
        if len(issues) > error_count:
            summary += f", {len(issues) - error_count} warning(s)"
        click.secho(f"\n{summary}", fg="red", bold=True)
        raise SystemExit(1)

    click.secho(f"{ruleset_path} is a valid rule set.", fg="green", bold=True)


@click.command()
@click.argument("ruleset_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("data_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--messages",
    "messages_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML message catalog overriding the default templates.",
)
def check(ruleset_path: Path, data_path: Path, messages_path: Path | None):
    """Validate the parameters in DATA_PATH (JSON or YAML) against a rule set."""
    try:
        catalog = (
            MessageCatalog.from_yaml(messages_path)
            if messages_path
            else MessageCatalog.from_env()
        )
        ruleset = load_ruleset(ruleset_path)
        data = _load_data(data_path)
        ruleset.validate(data, engine=ValidationEngine(catalog=catalog))
    except InvalidRequestError as e:
        click.echo(click.style(e.message, fg="red"), err=True)
        raise SystemExit(1)
    except (ConfigurationError, json.JSONDecodeError, yaml.YAMLError) as e:
        click.echo(click.style(f"Configuration error: {e}", fg="red", bold=True), err=True)
        raise SystemExit(2)

    click.echo(click.style("Parameters are valid.", fg="green", bold=True))
