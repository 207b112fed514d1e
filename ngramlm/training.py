"""
Training Module with Rich Terminal UI

This module provides training, evaluation and sampling with terminal
progress bars and status displays using the Rich library.
"""

import logging
import random
from typing import Dict, List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import (
    BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn, TimeElapsedColumn
)
from rich.table import Table

from .corpus import load_brown_corpus, load_text_corpus, split_corpus
from .model import LanguageModel
from .registry import get_model


console = Console()
logger = logging.getLogger(__name__)


def setup_logging(level: str = "WARNING") -> None:
    """Route log records through Rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def create_stats_table(stats: Dict) -> Table:
    """Create a Rich table displaying training statistics."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="green")
    table.add_column("Value", style="yellow", justify="right")

    for key, value in stats.items():
        display_key = key.replace('_', ' ').title()

        if isinstance(value, bool):
            display_value = str(value)
        elif isinstance(value, float):
            display_value = f"{value:,.4f}"
        elif isinstance(value, int):
            display_value = f"{value:,}"
        elif isinstance(value, list):
            if len(value) <= 5:
                display_value = ", ".join(str(v) for v in value)
            else:
                display_value = f"{len(value)} items"
        else:
            display_value = str(value)

        table.add_row(display_key, display_value)

    return table


def _progress() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console
    )


def train_model_cli(
    model_type: str = "trigram",
    categories: Optional[List[str]] = None,
    corpus_file: Optional[str] = None,
    test_fraction: float = 0.1,
    seed: Optional[int] = None,
    params: Optional[Dict] = None
) -> Tuple[LanguageModel, List[List[str]]]:
    """
    Load a corpus and train a language model with terminal output.

    Args:
        model_type: Model name (see ModelType)
        categories: Brown corpus categories to use
        corpus_file: Plain text corpus to use instead of the Brown corpus
        test_fraction: Share of sentences held out for evaluation
        seed: Seed for the corpus split and the model's random source
        params: Smoothing parameters forwarded to the model

    Returns:
        Tuple of (trained model, held-out sentences)
    """
    rng = random.Random(seed)
    model = get_model(model_type, rng=rng, **(params or {}))

    console.print()
    console.print(Panel.fit(
        f"[bold blue]{model.name} Language Model Training[/bold blue]",
        border_style="blue"
    ))
    console.print()

    config_table = Table(box=box.SIMPLE, show_header=False)
    config_table.add_column("Setting", style="cyan")
    config_table.add_column("Value", style="white")
    config_table.add_row("Model", model.name)
    if corpus_file:
        config_table.add_row("Corpus File", corpus_file)
    else:
        config_table.add_row("Categories", ", ".join(categories) if categories else "All")
    config_table.add_row("Test Fraction", f"{test_fraction:.2f}")
    config_table.add_row("Seed", str(seed) if seed is not None else "None")
    for key, value in (params or {}).items():
        config_table.add_row(key, str(value))

    console.print(Panel(config_table, title="[bold]Configuration[/bold]", border_style="green"))
    console.print()

    with _progress() as progress:
        task = progress.add_task("[cyan]Loading corpus...", total=None)
        if corpus_file:
            sentences, corpus_stats = load_text_corpus(corpus_file)
        else:
            sentences, corpus_stats = load_brown_corpus(categories=categories)
        progress.update(task, completed=100, total=100)
        progress.remove_task(task)

        console.print(f"[green]✓[/green] Loaded {corpus_stats['num_sentences']:,} sentences "
                      f"({corpus_stats['total_tokens']:,} tokens)")

        train_sentences, test_sentences = split_corpus(sentences, test_fraction, rng)
        console.print(f"[green]✓[/green] {len(train_sentences):,} training / "
                      f"{len(test_sentences):,} held-out sentences")
        console.print()

        train_task = progress.add_task(
            "[cyan]Counting n-grams...",
            total=len(train_sentences)
        )

        def update_progress(current, total):
            progress.update(train_task, completed=current)

        stats = model.train(train_sentences, progress_callback=update_progress)
        progress.remove_task(train_task)

    stats['check_model'] = model.check_model()

    console.print("[green]✓[/green] Training complete!")
    console.print()
    console.print(Panel(
        create_stats_table(stats),
        title="[bold]Training Statistics[/bold]",
        border_style="yellow"
    ))

    return model, test_sentences


def evaluate_model_cli(model: LanguageModel, test_sentences: List[List[str]]) -> Dict:
    """
    Evaluate a model with terminal output.

    Args:
        model: Trained language model
        test_sentences: Held-out sentences

    Returns:
        Dictionary of evaluation metrics
    """
    console.print()
    console.print(Panel.fit("[bold blue]Model Evaluation[/bold blue]", border_style="blue"))
    console.print()

    if not test_sentences:
        logger.warning("No held-out sentences; skipping evaluation")
        return {}

    with console.status("[cyan]Computing perplexity..."):
        perplexity = model.perplexity(test_sentences)

    results = {
        'perplexity': perplexity,
        'test_sentences': len(test_sentences)
    }

    console.print(Panel(
        create_stats_table(results),
        title="[bold]Evaluation Results[/bold]",
        border_style="green"
    ))

    return results


def sample_sentences_cli(model: LanguageModel, count: int = 5,
                         max_length: int = 50) -> List[List[str]]:
    """Generate and print sentences sampled from the model."""
    console.print()
    console.print(Panel.fit("[bold]Sample Sentences[/bold]", border_style="magenta"))

    samples = []
    for i in range(count):
        sentence = model.generate_sentence(max_length=max_length)
        samples.append(sentence)
        log_prob = model.sentence_log_probability(sentence)
        console.print(f"  {i + 1:2}. {' '.join(sentence)} [dim](log p = {log_prob:.2f})[/dim]")

    console.print()
    return samples
