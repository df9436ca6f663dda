"""CLI interface for the Ralph bundle generator."""

import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .cli_utils import (
    SYM_FAIL, SYM_OK, SYM_WARN,
    configure_logging, load_reference_docs, read_features_file,
)
from .config import ConfigError, load_config
from .export import bundle_archive_name, bundle_files, write_directory, write_zip
from .models import ArchiveFormat, BundleConfig, BundleRequest, LlmProvider, Prd
from .pipeline import InputIncompleteError, SchemaViolationError, generate_bundle
from .providers import LLM_CONFIGS
from .rendering import parse_prd
from .validators import ValidationReport, validate_prd

console = Console()


def _print_report(report: ValidationReport) -> None:
    """Print every violation and warning in a report."""
    for message in report.violations:
        console.print(f"  [red]{SYM_FAIL}[/red] {escape(message)}")
    for message in report.warnings:
        console.print(f"  [yellow]{SYM_WARN}[/yellow] {escape(message)}")


def _print_stories(prd: Prd) -> None:
    table = Table(title=f"User Stories ({prd.branch_name})")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Priority", justify="right")
    table.add_column("Criteria", justify="right")

    for story in prd.user_stories:
        table.add_row(
            story.id,
            escape(story.title),
            str(story.priority),
            str(len(story.acceptance_criteria)),
        )

    console.print(table)


@click.group()
@click.version_option(version=__version__, prog_name="ralph-bundle")
def main():
    """Ralph Bundle - Generate autonomous agent-loop bundles from a project brief."""
    pass


@main.command()
def providers():
    """List the supported LLM providers."""
    table = Table(title="LLM Providers")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("CLI")
    table.add_column("Model")
    table.add_column("Max Tokens", justify="right")
    table.add_column("Description")

    for key, profile in LLM_CONFIGS.items():
        table.add_row(
            key.value,
            profile.display_name,
            profile.cli_command,
            profile.model_id,
            f"{profile.max_tokens:,}",
            profile.description,
        )

    console.print(table)


@main.command()
@click.option('--name', prompt='Project name', help='Name of the project')
@click.option('--description', default='', help='Project goal written into prd.json and prompt.md')
@click.option('--feature', '-f', 'features', multiple=True,
              help='Feature line (repeatable); each becomes a user story')
@click.option('--features-file', type=click.Path(exists=True, dir_okay=False),
              help='File with one feature per line')
@click.option('--provider', type=click.Choice([p.value for p in LlmProvider]),
              help='LLM provider (default: from config, else CLAUDE_4_5)')
@click.option('--output', '-o', type=click.Path(file_okay=False), default='.',
              help='Directory to write the bundle into')
@click.option('--format', 'archive_format', type=click.Choice([f.value for f in ArchiveFormat]),
              help='zip archive or plain directory (default: from config, else zip)')
@click.option('--max-iterations', type=click.IntRange(min=1),
              help='Default iteration ceiling baked into ralph.sh')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='JSON file with BundleConfig overrides')
@click.option('--reference-doc', 'reference_docs', multiple=True,
              type=click.Path(exists=True, dir_okay=False),
              help='Document copied verbatim into docs/ (repeatable)')
@click.option('--dry-run', is_flag=True, help='Preview without saving')
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
def generate(
    name: str,
    description: str,
    features: tuple[str, ...],
    features_file: Optional[str],
    provider: Optional[str],
    output: str,
    archive_format: Optional[str],
    max_iterations: Optional[int],
    config_path: Optional[str],
    reference_docs: tuple[str, ...],
    dry_run: bool,
    verbose: bool,
):
    """Generate a Ralph bundle (prd.json, prompt.md, ralph.sh).

    \b
    Examples:
        ralph-bundle generate --name "My App" -f "Add login form" -f "Add API endpoint for export"
        ralph-bundle generate --name "My App" --features-file features.txt --provider GPT_4O
        ralph-bundle generate --name "My App" --features-file features.txt --format dir -o ./out
    """
    configure_logging(verbose)

    try:
        config = load_config(config_path) if config_path else BundleConfig()
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {escape(str(e))}")
        sys.exit(1)

    overrides = {}
    if max_iterations is not None:
        overrides["max_iterations"] = max_iterations
    if archive_format is not None:
        overrides["archive_format"] = archive_format
    if overrides:
        config = BundleConfig.model_validate({**config.model_dump(), **overrides})

    feature_lines = list(features)
    if features_file:
        try:
            feature_lines.extend(read_features_file(features_file))
        except (UnicodeDecodeError, OSError) as e:
            console.print(f"[red]Error:[/red] Cannot read {escape(features_file)}: {escape(str(e))}")
            sys.exit(1)

    request = BundleRequest(
        project_name=name,
        description=description,
        features=feature_lines,
        llm_provider=LlmProvider(provider) if provider else config.default_provider,
    )
    profile = LLM_CONFIGS[request.llm_provider]

    console.print(f"\n[bold]Generating Ralph Bundle[/bold]")
    console.print(f"  Project: {escape(name)}")
    console.print(f"  Provider: {profile.display_name} ({profile.model_id})")
    console.print(f"  Max iterations: {config.max_iterations}")
    if dry_run:
        console.print(f"  [yellow]DRY RUN - no files will be saved[/yellow]")
    console.print("")

    try:
        result = generate_bundle(request, config)
    except InputIncompleteError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    except SchemaViolationError as e:
        console.print(f"[red]PRD validation failed ({e.report.error_count} problem(s)):[/red]")
        _print_report(e.report)
        sys.exit(1)

    _print_report(result.report)
    _print_stories(result.prd)

    if dry_run:
        console.print(f"\n[green]{SYM_OK}[/green] Rendered {result.story_count} stories "
                      f"(prd.json {len(result.bundle.prd_json)} chars, "
                      f"prompt.md {len(result.bundle.prompt_md)} chars, "
                      f"ralph.sh {len(result.bundle.ralph_sh)} chars)")
        return

    try:
        files = bundle_files(
            result.bundle,
            name,
            started_at=result.generation_time,
            reference_docs=load_reference_docs(reference_docs),
        )
    except (ValueError, OSError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    archive_name = bundle_archive_name(name)
    if config.archive_format == ArchiveFormat.ZIP:
        written = write_zip(files, Path(output) / archive_name, timestamp=result.generation_time)
    else:
        written = write_directory(files, Path(output) / archive_name.removesuffix(".zip"))

    console.print(f"\n[green]{SYM_OK}[/green] Wrote {written}")
    console.print(f"\nNext steps:")
    if config.archive_format == ArchiveFormat.ZIP:
        console.print(f"  1. Unzip into your project: unzip {written.name}")
    else:
        console.print(f"  1. Copy the contents of {written} into your project")
    console.print(f"  2. Run the loop: ./scripts/ralph/ralph.sh {config.max_iterations}")


@main.command('validate')
@click.argument('prd_file', type=click.Path(exists=True, dir_okay=False))
def validate_command(prd_file: str):
    """Validate an existing prd.json.

    Reports every problem at once and exits with status 1 if any blocks the PRD.
    """
    try:
        content = Path(prd_file).read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        console.print(f"[red]Error:[/red] Cannot read {escape(prd_file)}: {escape(str(e))}")
        sys.exit(1)

    try:
        prd = parse_prd(content)
    except ValidationError as e:
        console.print(f"[red]{SYM_FAIL} Not a valid PRD document:[/red]")
        console.print(escape(str(e)))
        sys.exit(1)

    report = validate_prd(prd)
    _print_report(report)

    if not report.accepted:
        console.print(f"\n[red]{SYM_FAIL} {report.error_count} problem(s) in {prd_file}[/red]")
        sys.exit(1)

    console.print(f"[green]{SYM_OK}[/green] {prd_file} is valid "
                  f"({len(prd.user_stories)} stories, branch {prd.branch_name})")


if __name__ == '__main__':
    main()
