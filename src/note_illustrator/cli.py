"""
Command-line interface for Note Illustrator.

Analyzes markdown notes, shows the style and use-case catalogs, and
optionally generates images and writes an illustrated copy of the note.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import ASPECT_RATIOS, DEFAULT_IMAGE_COUNT, AnalysisConfig
from .embeds import IMAGE_SIZES, attachment_folder, generate_image_filename, size_value, wiki_image_link
from .image_client import API_KEY_ENV_VAR, ImageClient, ImageClientError
from .insertion import insert_images
from .models import IllustrationPlan
from .notes import NoteLoadError, load_note, note_title, save_note
from .pipeline import NoteIllustrator
from .placement import SmartPlacement
from .styles import STYLE_TIERS, format_style_option, get_style_description, get_styles_by_tier, get_tier_label
from .use_cases import list_use_cases

console = Console()

PRESETS = ("default", "strict", "lenient")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_config(preset: str, aspect_ratio: str, **overrides) -> AnalysisConfig:
    overrides = {key: value for key, value in overrides.items() if value is not None}
    overrides["aspect_ratio"] = aspect_ratio

    if preset == "strict":
        return AnalysisConfig.strict(**overrides)
    if preset == "lenient":
        return AnalysisConfig.lenient(**overrides)
    return AnalysisConfig(**overrides)


def _load_or_exit(note: Path) -> str:
    try:
        return load_note(note)
    except NoteLoadError as e:
        console.print(f"[red]Note loading error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(package_name="note-illustrator")
def main() -> None:
    """
    Note Illustrator - Plan and place illustrations for markdown notes.

    Examples:

        note-illustrate analyze notes/cells.md --images 3

        note-illustrate place notes/cells.md --prompt "a dividing cell"

        note-illustrate generate notes/cells.md -o illustrated/
    """


@main.command()
@click.argument("note", type=click.Path(path_type=Path))
@click.option("--images", "-n", type=int, default=DEFAULT_IMAGE_COUNT, help="Number of images to plan (default: 3).")
@click.option("--style", "style_id", type=str, default=None, help="Style id (see 'styles').")
@click.option("--use-case", "use_case_id", type=str, default=None, help="Use-case id or 'auto_detect'.")
@click.option("--preset", type=click.Choice(PRESETS), default="default", help="Threshold preset.")
@click.option("--min-confidence", type=int, default=None, help="Use-case confidence floor (0-100).")
@click.option("--min-score", type=int, default=None, help="Placement score floor (0-100).")
@click.option("--aspect-ratio", type=click.Choice(ASPECT_RATIOS), default="16:9", help="Aspect ratio hint.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the plan as JSON.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output.")
def analyze(
    note: Path,
    images: int,
    style_id: Optional[str],
    use_case_id: Optional[str],
    preset: str,
    min_confidence: Optional[int],
    min_score: Optional[int],
    aspect_ratio: str,
    as_json: bool,
    verbose: bool,
) -> None:
    """Analyze NOTE and show concepts, use case, prompts and placements."""
    _configure_logging(verbose)
    content = _load_or_exit(note)

    try:
        config = _build_config(
            preset,
            aspect_ratio,
            min_confidence_score=min_confidence,
            min_placement_score=min_score,
        )
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)

    plan = NoteIllustrator(config).plan(content, images, style_id=style_id, use_case_id=use_case_id)

    if as_json:
        click.echo(json.dumps(plan.to_dict(), indent=2, ensure_ascii=False))
        return

    console.print(Panel.fit(
        f"[bold blue]Note Illustrator[/bold blue]\n{note}",
        border_style="blue",
    ))
    _display_plan(plan, verbose)


@main.command()
@click.argument("note", type=click.Path(path_type=Path))
@click.option("--prompt", "-p", type=str, required=True, help="Image prompt or description.")
@click.option("--images", "-n", type=int, default=1, help="Number of images being placed.")
@click.option("--min-score", type=int, default=None, help="Placement score floor (0-100).")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output.")
def place(note: Path, prompt: str, images: int, min_score: Optional[int], verbose: bool) -> None:
    """Suggest where an image described by --prompt belongs in NOTE."""
    _configure_logging(verbose)
    content = _load_or_exit(note)

    try:
        config = AnalysisConfig() if min_score is None else AnalysisConfig(min_placement_score=min_score)
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)

    placement = SmartPlacement(
        min_placement_score=config.min_placement_score,
        top_suggestions=config.top_placement_suggestions,
    )
    suggestions = placement.analyze_placement_options(content, prompt, images)

    if not suggestions:
        console.print(
            f"[yellow]No section scored {config.min_placement_score} or more.[/yellow] "
            "Insert at the cursor instead."
        )
        return

    table = Table(title="Placement Suggestions", show_header=True)
    table.add_column("Line", style="cyan", justify="right")
    table.add_column("Score", style="green", justify="right")
    table.add_column("Anchor", style="yellow")
    table.add_column("Reasoning")

    for suggestion in suggestions:
        table.add_row(
            str(suggestion.location.line_number),
            f"{suggestion.score}%",
            escape(suggestion.location.anchor),
            escape(suggestion.reasoning),
        )

    console.print(table)

    if verbose:
        for suggestion in suggestions:
            console.print(f"\n[dim]{escape(suggestion.context_preview)}[/dim]")


@main.command()
def styles() -> None:
    """List the available visual styles by tier."""
    table = Table(title="Styles", show_header=True)
    table.add_column("Id", style="cyan")
    table.add_column("Style", style="green")
    table.add_column("Tier")
    table.add_column("Best for")

    for tier in STYLE_TIERS:
        for style in get_styles_by_tier(tier):
            table.add_row(style.id, format_style_option(style), get_tier_label(tier), get_style_description(style))

    console.print(table)


@main.command(name="use-cases")
def use_cases() -> None:
    """List the use-case templates."""
    table = Table(title="Use Cases", show_header=True)
    table.add_column("Id", style="cyan")
    table.add_column("Use case", style="green")
    table.add_column("Description")

    for template in list_use_cases():
        table.add_row(template.id, f"{template.icon} {template.name}", template.description)

    console.print(table)


@main.command()
@click.argument("note", type=click.Path(path_type=Path))
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    required=True,
    help="Directory for the illustrated note and its images.",
)
@click.option("--images", "-n", type=int, default=DEFAULT_IMAGE_COUNT, help="Number of images (default: 3).")
@click.option("--style", "style_id", type=str, default=None, help="Style id (see 'styles').")
@click.option("--use-case", "use_case_id", type=str, default=None, help="Use-case id or 'auto_detect'.")
@click.option("--size", type=click.Choice(list(IMAGE_SIZES)), default="large", help="Embed display width.")
@click.option("--attachments", type=str, default="attachments", help="Image folder inside the output dir.")
@click.option("--monthly", is_flag=True, default=False, help="Store images in YYYY-MM subfolders.")
@click.option("--timestamp", is_flag=True, default=False, help="Add a timestamp to image filenames.")
@click.option("--cursor-line", type=int, default=None, help="Line for images without a placement.")
@click.option(
    "--api-key",
    type=str,
    envvar=API_KEY_ENV_VAR,
    help=f"Image API key. Can also be set via {API_KEY_ENV_VAR} env var.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output.")
def generate(
    note: Path,
    output_dir: Path,
    images: int,
    style_id: Optional[str],
    use_case_id: Optional[str],
    size: str,
    attachments: str,
    monthly: bool,
    timestamp: bool,
    cursor_line: Optional[int],
    api_key: Optional[str],
    verbose: bool,
) -> None:
    """Generate images for NOTE and write an illustrated copy to --output-dir."""
    _configure_logging(verbose)
    content = _load_or_exit(note)

    try:
        client = ImageClient(api_key=api_key)
        illustrator = NoteIllustrator()
        plan = illustrator.plan(content, images, style_id=style_id, use_case_id=use_case_id)

        now = datetime.now()
        folder = attachment_folder(attachments, monthly_subfolders=monthly, when=now)
        embeds: list[str] = []

        for index, prompt in enumerate(plan.prompts):
            with console.status(f"[bold green]Generating image {index + 1}/{len(plan.prompts)}..."):
                generated = client.generate_images(
                    prompt,
                    count=1,
                    aspect_ratio=illustrator.config.aspect_ratio,
                )
                if not generated:
                    raise ImageClientError("Image service returned no images")
                payload = client.download(generated[0])

            filename = generate_image_filename(
                note_title(note),
                plan.style.id,
                index,
                timestamp=now if timestamp else None,
            )
            image_path = output_dir / folder / filename
            image_path.parent.mkdir(parents=True, exist_ok=True)
            image_path.write_bytes(payload)
            embeds.append(wiki_image_link(f"{folder}/{filename}" if folder else filename, size_value(size)))

            if verbose:
                console.print(f"  Saved {image_path}")

        illustrated = insert_images(content, embeds, plan.placements, cursor_line=cursor_line)
        output_path = save_note(output_dir / note.name, illustrated)

        _display_plan(plan, verbose)
        console.print(f"\n[bold green]Success![/bold green] Illustrated note saved to: {output_path}")

    except ImageClientError as e:
        console.print(f"[red]Image generation error:[/red] {e}")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]File error:[/red] {e}")
        sys.exit(1)


def _display_plan(plan: IllustrationPlan, verbose: bool) -> None:
    """Display an illustration plan."""
    console.print("\n[bold]Analysis[/bold]")
    console.print(f"[cyan]Concepts:[/cyan] {escape(', '.join(plan.concepts)) or '(none)'}")
    console.print(f"[cyan]Content type:[/cyan] {plan.content_type}  [cyan]Language:[/cyan] {plan.language}")
    console.print(
        f"[cyan]Use case:[/cyan] {plan.use_case.template.icon} {plan.use_case.template.name} "
        f"({plan.use_case.confidence}%) - {plan.use_case.reasoning}"
    )
    console.print(f"[cyan]Style:[/cyan] {format_style_option(plan.style)}")

    table = Table(title="Images", show_header=True)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Placement", style="green")
    table.add_column("Prompt")

    for index, prompt in enumerate(plan.prompts):
        suggestion = plan.placements.get(index)
        where = (
            f"line {suggestion.location.line_number} ({suggestion.score}%)"
            if suggestion else "cursor"
        )
        shown = prompt if verbose or len(prompt) <= 80 else prompt[:80] + "..."
        table.add_row(str(index + 1), where, escape(shown))

    console.print(table)

    for index, validation in enumerate(plan.validations):
        for issue in validation.issues:
            console.print(f"[yellow]Prompt {index + 1}:[/yellow] {escape(issue)}")


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
