"""CLI interface for gemma-prompt.

Requires the 'cli' extra: pip install gemma-prompt[cli]
"""

from __future__ import annotations

import sys
from importlib import metadata
from pathlib import Path

try:
    import typer
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table
except ImportError:
    print(
        "CLI dependencies not installed. Install with: pip install gemma-prompt[cli]",
        file=sys.stderr,
    )
    sys.exit(1)

from gemma_prompt import __version__
from gemma_prompt.constants import BOS_ID, EOS_ID, IMAGE_PLACEHOLDER_ID
from gemma_prompt.exceptions import GemmaPromptError
from gemma_prompt.models import ModelInfo, PromptWrapping, known_models, model_info_for
from gemma_prompt.tokens import SentencePieceTokenizer
from gemma_prompt.wrapping import count_placeholders, wrap_prompt, wrap_vlm

app = typer.Typer(
    name="gemma-prompt",
    help="Build Gemma prompt token sequences.",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
) -> None:
    if version:
        console.print(f"gemma-prompt {__version__}")
        raise typer.Exit()


@app.command()
def info() -> None:
    """Show information about the gemma-prompt installation."""
    table = Table(title="gemma-prompt info")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Version", __version__)
    table.add_row("sentencepiece", _dist_version("sentencepiece"))
    table.add_row("Model presets", str(len(known_models())))
    for wrapping in PromptWrapping:
        names = [n for n in known_models() if model_info_for(n).wrapping is wrapping]
        table.add_row(f"  {wrapping.value}", str(len(names)))
    table.add_row("BOS / EOS ids", f"{BOS_ID} / {EOS_ID}")
    table.add_row("Image placeholder id", str(IMAGE_PLACEHOLDER_ID))

    console.print(table)


def _dist_version(name: str) -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "[red]not installed[/red]"


@app.command()
def models() -> None:
    """List the preset model names and their wrapping modes."""
    table = Table(title="Known models")
    table.add_column("Model", style="cyan")
    table.add_column("Wrapping", style="green")
    table.add_column("Max image batch", justify="right")
    for name in known_models():
        preset = model_info_for(name)
        batch = "-" if preset.max_image_batch_size is None else str(preset.max_image_batch_size)
        table.add_row(name, preset.wrapping.value, batch)
    console.print(table)


@app.command()
def tokenize(
    prompt: str = typer.Argument(..., help="Prompt text"),
    tokenizer_path: Path = typer.Option(  # noqa: B008
        ..., "--tokenizer", "-t", help="Path to the SentencePiece model file"
    ),
    model: str | None = typer.Option(None, "--model", "-m", help="Preset model name"),
    wrapping: PromptWrapping = typer.Option(  # noqa: B008
        PromptWrapping.PRETRAINED, "--wrapping", "-w", help="Wrapping mode (ignored with --model)"
    ),
    pos: int = typer.Option(0, "--pos", "-p", min=0, help="Conversation position"),
    images: int = typer.Option(0, "--images", min=0, help="Image tokens per block"),
    max_images: int | None = typer.Option(
        None, "--max-images", min=1, help="Max image batch size (defaults to the preset's)"
    ),
    pieces: bool = typer.Option(
        False, "--pieces", help="Also print the pieces of the wrapped prompt text"
    ),
) -> None:
    """Wrap and tokenize a prompt, printing the resulting token ids."""
    try:
        model_info = model_info_for(model) if model else ModelInfo(wrapping=wrapping)
        tokenizer = SentencePieceTokenizer(tokenizer_path)
        wrapped = wrap_prompt(tokenizer, model_info, pos, prompt)
        tokens = wrapped.tokens
        if images:
            max_batch = max_images or model_info.max_image_batch_size
            if max_batch is None:
                console.print("[red]Error: --max-images is required for this model[/red]")
                raise typer.Exit(code=1)
            wrap_vlm(tokenizer, model_info, pos, tokens, images, max_batch)
        piece_list = tokenizer.encode_pieces(wrapped.text) if pieces else None
    except GemmaPromptError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    console.print(f"[dim]Wrapping: {model_info.wrapping.value}, pos={pos}[/dim]")
    console.print(
        f"Tokens ({len(tokens)}): {tokens}", soft_wrap=True, highlight=False, markup=False
    )
    if images:
        console.print(f"Image placeholders: {count_placeholders(tokens)}")
    if piece_list is not None:
        console.print(
            f"Prompt text pieces ({len(piece_list)}, excludes BOS, separator and image blocks): "
            f"{piece_list}",
            soft_wrap=True,
            highlight=False,
            markup=False,
        )


if __name__ == "__main__":
    app()
