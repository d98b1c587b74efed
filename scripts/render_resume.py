#!/usr/bin/env python3
"""
Resume Rendering CLI

Renders a résumé input file (YAML or JSON) to PDF through the full pipeline,
or stops earlier to inspect the markup or the resolved layout parameters.

Input file keys:
    fullName      Name shown in the header (or pass --name)
    aiContent     AI-generated content
    userProfile   User profile

Commands:
    build  - Render to PDF and report page count and fill ratio
    markup - Write the HTML document only (no browser needed)
    layout - Print resolved layout parameters for a page count and density

Examples:\n

    render_resume.py build data/ada.yaml -o outs/ada.pdf --pages 2

    render_resume.py markup data/ada.yaml --template classic -o outs/ada.html

    render_resume.py layout --pages 1 --density 5
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from dossier.contexts.content import normalize_content
from dossier.contexts.layout import LayoutProfile, resolve_layout
from dossier.contexts.rendering import (
    RenderEngineError,
    RenderRequestError,
    build_resume_sync,
    validate_render_request,
)
from dossier.contexts.rendering.logger import setup_rendering_logger
from dossier.contexts.rendering.pipeline import render_request_markup
from dossier.contexts.templating import TemplateRenderError
from dossier.utils import load_settings, now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Render résumé content to a page-fitted PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def load_input(input_file: Path) -> Dict[str, Any]:
    """Load a YAML or JSON input file into plain containers."""
    if not input_file.exists():
        typer.secho(f"Error: input file not found: {input_file}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    data = OmegaConf.to_container(OmegaConf.load(input_file), resolve=True)
    if not isinstance(data, dict):
        typer.secho("Error: input file must contain a mapping\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return data


def _request_from_options(data: Dict[str, Any], name, template, pages, density):
    try:
        return validate_render_request(
            full_name=name or data.get("fullName") or (data.get("userProfile") or {}).get("fullName"),
            template_id=template or data.get("templateId"),
            target_pages=pages if pages is not None else data.get("targetPages"),
            density=density if density is not None else data.get("density"),
        )
    except RenderRequestError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


InputArgument = Annotated[Path, typer.Argument(help="Input YAML/JSON file")]
NameOption = Annotated[
    Optional[str], typer.Option("--name", "-n", help="Full name (overrides the input file)")
]
TemplateOption = Annotated[
    Optional[str],
    typer.Option("--template", "-t", help="Template: modern, classic, minimal, compact"),
]
PagesOption = Annotated[
    Optional[int], typer.Option("--pages", "-p", help="Target page count (1-3)", min=1, max=3)
]
DensityOption = Annotated[
    Optional[int], typer.Option("--density", "-d", help="Density 1 (spacious) to 5 (compact)")
]
SettingsOption = Annotated[
    Optional[Path], typer.Option("--settings", "-s", help="Settings YAML layered over defaults")
]


@app.command("build")
def build_command(
    input_file: InputArgument,
    output: Annotated[Path, typer.Option("--output", "-o", help="PDF output path")] = Path(
        "resume.pdf"
    ),
    name: NameOption = None,
    template: TemplateOption = None,
    pages: PagesOption = None,
    density: DensityOption = None,
    settings_file: SettingsOption = None,
):
    """
    Render an input file to PDF.

    Examples:\n

        $ render_resume.py build data/ada.yaml -o outs/ada.pdf

        $ render_resume.py build data/ada.yaml --pages 2 --density 4
    """
    data = load_input(input_file)
    request = _request_from_options(data, name, template, pages, density)
    settings = load_settings(settings_file)
    log_file = setup_rendering_logger(
        LOGS_PATH / f"render_{now()}",
        settings,
        extra_provenance={
            "Input": input_file,
            "Template": request.template_id,
            "Target pages": request.target_pages,
            "Density": request.density,
        },
    )

    typer.secho(f"\nRendering: {request.full_name}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Template: {request.template_id}, pages: {request.target_pages}, density: {request.density}")
    typer.echo("")

    try:
        outcome = build_resume_sync(
            request, data.get("aiContent"), data.get("userProfile"), settings
        )
    except (TemplateRenderError, RenderEngineError) as e:
        typer.secho(f"✗ Render failed: {e}\n", fg=typer.colors.RED, bold=True, err=True)
        typer.echo(f"  Log: {log_file}")
        raise typer.Exit(code=1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(outcome.artifact)

    color = typer.colors.GREEN if outcome.diagnostics.is_valid else typer.colors.YELLOW
    typer.secho(
        f"✓ {outcome.actual_pages} page(s) for target {outcome.target_pages}",
        fg=color,
        bold=True,
    )
    typer.echo(f"  Fill ratio: {outcome.fill_ratio:.2f}")
    typer.echo(f"  Density: {outcome.applied_density} (requested {outcome.density})")
    typer.echo(f"  Adjustment passes: {outcome.passes}")
    for issue in outcome.diagnostics.get_inherited_issues():
        typer.secho(f"  - {issue}", fg=typer.colors.YELLOW)
    typer.echo(f"  PDF: {output}")
    typer.echo(f"  Log: {log_file}")
    typer.echo("")


@app.command("markup")
def markup_command(
    input_file: InputArgument,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="HTML output path (stdout if omitted)")
    ] = None,
    name: NameOption = None,
    template: TemplateOption = None,
    pages: PagesOption = None,
    density: DensityOption = None,
    settings_file: SettingsOption = None,
):
    """
    Render an input file to HTML without paginating it.

    Examples:\n

        $ render_resume.py markup data/ada.yaml --template minimal -o outs/ada.html
    """
    data = load_input(input_file)
    request = _request_from_options(data, name, template, pages, density)
    settings = load_settings(settings_file)
    content = normalize_content(data.get("aiContent"), data.get("userProfile"))

    try:
        markup, _, _ = render_request_markup(request, content, page_format=settings.page.format)
    except TemplateRenderError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(markup)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(markup, encoding="utf-8")
    typer.secho(f"✓ Markup written to {output}", fg=typer.colors.GREEN)


@app.command("layout")
def layout_command(
    pages: Annotated[int, typer.Option("--pages", "-p", help="Target page count", min=1, max=3)] = 1,
    density: Annotated[int, typer.Option("--density", "-d", help="Density 1-5", min=1, max=5)] = 3,
    compact: Annotated[
        bool, typer.Option("--compact", help="Use the fixed compact profile")
    ] = False,
):
    """
    Print resolved layout parameters as JSON.

    Examples:\n

        $ render_resume.py layout --pages 2 --density 4
    """
    profile = LayoutProfile.COMPACT if compact else LayoutProfile.STANDARD
    layout = resolve_layout(pages, density, profile)
    typer.echo(json.dumps(layout.to_dict(), indent=2))


if __name__ == "__main__":
    app()
