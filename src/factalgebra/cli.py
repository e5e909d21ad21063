from __future__ import annotations

import json
from pathlib import Path

import typer
from pydantic import ValidationError

app = typer.Typer(name="factalgebra", help="Compose and render assertion facts")
schema_app = typer.Typer(name="schema", help="Generate schema tooling")
app.add_typer(schema_app, name="schema")

EXAMPLE_DOCUMENT = """\
facts:
  list-is-empty:
    and:
      - leaf:
          holds: true
          failure: "{0} was not a list"
          negated: "{0} was a list"
          args: [[1, 2, 3]]
      - leaf:
          holds: false
          failure: "{0} was not empty"
          negated: "{0} was empty"
          args: [[1, 2, 3]]
  name-or-alias:
    or:
      - leaf: {holds: false, failure: "name was missing", negated: "name was present"}
      - leaf: {holds: true, failure: "alias was missing", negated: "alias was present"}
"""


def _load_facts(document: str, name: str | None):
    from factalgebra.loader import load_document

    path = Path(document)
    if not path.exists():
        typer.echo(f"Error: fact document not found: {document}", err=True)
        raise typer.Exit(1)

    try:
        facts = load_document(path).build()
    except (ValidationError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if name is not None:
        if name not in facts:
            typer.echo(f"Error: no fact named '{name}' in {document}", err=True)
            raise typer.Exit(1)
        facts = {name: facts[name]}
    return facts


@app.command()
def render(
    document: str = typer.Argument(help="Path to fact document YAML"),
    name: str | None = typer.Option(None, help="Render only this fact"),
    check: bool = typer.Option(
        False, "--check", help="Exit with code 1 if any fact is No"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(None, help="Write debug output to this file"),
):
    """Render the facts of a document."""
    from factalgebra.verbose import setup_logger

    logger = setup_logger(
        Path(debug_log) if debug_log else None, verbose=verbose
    )

    facts = _load_facts(document, name)
    for fact_name, fact in facts.items():
        logger.info(f"Rendering {fact_name}: is_yes={fact.is_yes}")
        try:
            rendered = fact.as_string
        except ValueError as e:
            typer.echo(f"Error: {fact_name}: {e}", err=True)
            raise typer.Exit(1)
        typer.echo(f"{fact_name}: {rendered}")

    if check and any(fact.is_no for fact in facts.values()):
        raise typer.Exit(1)


@app.command()
def report(
    document: str = typer.Argument(help="Path to fact document YAML"),
    out: str = typer.Option("junit.xml", help="Output path for the JUnit report"),
    suite: str = typer.Option("facts", help="Test suite name"),
):
    """Export the facts of a document as a JUnit report."""
    from factalgebra.reporting.junit import write_junit

    facts = _load_facts(document, None)
    try:
        report_path = write_junit(Path(out), facts, suite_name=suite)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Report: {report_path}")


@app.command()
def params(
    config: str = typer.Argument(help="Path to property check YAML config"),
):
    """Print the effective property check parameters as JSON."""
    from factalgebra.prop.configuration import load_property_config

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        parameters = load_property_config(config_path)
    except (ValidationError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps(parameters.to_dict(), indent=2))


@app.command()
def init(
    dir: str = typer.Option(
        "factalgebra", "--dir", help="Directory to write the example document in"
    ),
):
    """Write an example fact document."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "facts.yaml"
    if example.exists():
        typer.echo(f"facts.yaml already exists in {dir}, skipping.")
        return

    example.write_text(EXAMPLE_DOCUMENT)
    typer.echo(f"Initialized {example}")


@schema_app.command("generate")
def schema_generate(
    dir: str = typer.Option(
        "factalgebra", "--dir", help="Project directory for default schema/doc outputs"
    ),
    out: str | None = typer.Option(
        None,
        help="Output path for JSON Schema (defaults to <dir>/schemas/facts.schema.json)",
    ),
    doc: str | None = typer.Option(
        None, help="Output path for schema docs (defaults to <dir>/docs/schema.md)"
    ),
):
    """Generate JSON Schema and docs for the fact document format."""
    from factalgebra.schema import write_json_schema, write_schema_doc

    project_dir = Path(dir)
    out_path = (
        Path(out)
        if out is not None
        else project_dir / "schemas" / "facts.schema.json"
    )
    doc_path = Path(doc) if doc is not None else project_dir / "docs" / "schema.md"
    write_json_schema(out_path)
    write_schema_doc(doc_path)
    typer.echo(f"Wrote schema: {out_path}")
    typer.echo(f"Wrote docs: {doc_path}")
