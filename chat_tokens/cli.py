# chat_tokens/cli.py
"""
CLI entry point for chat-tokens.

Available commands:
  chat-tokens estimate PROMPT_FILE [--model M] [--config chat_tokens.yaml] [--breakdown]
  chat-tokens render PROMPT_FILE
  chat-tokens count TEXT [--model M]

PROMPT_FILE is a JSON (or YAML) document shaped like a chat completion
request: ``messages``, and optionally ``functions`` and ``function_call``.

Requires: pip install "chat-tokens[cli]"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

try:
    import typer
    from rich.console import Console
    from rich.table import Table
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "CLI dependencies missing. Install with: pip install 'chat-tokens[cli]'"
    ) from exc

from .config import EstimatorConfig
from .engine.estimator import PromptEstimator
from .engine.functions import render_function_definitions
from .models import PromptTokenBreakdown

app = typer.Typer(
    name="chat-tokens",
    help="Estimate chat completion prompt tokens offline.",
    add_completion=False,
)
console = Console()


def _load_prompt(path: Path) -> dict[str, Any]:
    raw = path.read_text()
    if path.suffix in (".yaml", ".yml"):
        try:
            import yaml  # type: ignore[import]
        except ImportError as exc:
            raise ImportError(
                "PyYAML is required for YAML prompts. Install it with: pip install pyyaml"
            ) from exc
        data = yaml.safe_load(raw)
    else:
        data = json.loads(raw)
    if not isinstance(data, dict) or "messages" not in data:
        raise typer.BadParameter(f"{path} must contain a 'messages' list")
    return data


def _load_estimator(config_path: Optional[str], model: Optional[str]) -> PromptEstimator:
    cfg = EstimatorConfig.from_yaml(config_path) if config_path else EstimatorConfig.from_env()
    if model:
        cfg = cfg.model_copy(update={"model": model})
    return PromptEstimator(cfg)


def _build_table(breakdown: PromptTokenBreakdown, messages: list[dict[str, Any]]) -> Table:
    """Render a prompt breakdown as a Rich table."""
    table = Table(title="Prompt Token Estimate", show_lines=False)
    table.add_column("Component", style="bold cyan", no_wrap=True)
    table.add_column("Tokens", justify="right")

    for i, (message, tokens) in enumerate(zip(messages, breakdown.messages)):
        role = message.get("role", "?")
        name = message.get("name")
        label = f"[{i}] {role}" + (f" ({name})" if name else "")
        table.add_row(label, str(tokens))

    table.add_row("reply primer", str(breakdown.completion))
    if breakdown.functions:
        table.add_row("functions", str(breakdown.functions))
    if breakdown.system_with_functions:
        table.add_row("system + functions", str(breakdown.system_with_functions))
    if breakdown.function_call:
        table.add_row("function_call", str(breakdown.function_call))
    table.add_row("[bold]total[/bold]", f"[bold]{breakdown.total}[/bold]")
    return table


@app.command()
def estimate(
    prompt_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Request JSON/YAML"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model to estimate for"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to chat_tokens.yaml"),
    breakdown: bool = typer.Option(False, "--breakdown", "-b", help="Itemise the estimate"),
) -> None:
    """Estimate the prompt tokens of a chat completion request."""
    data = _load_prompt(prompt_file)
    estimator = _load_estimator(config, model)
    result = estimator.estimate_prompt_breakdown(
        data["messages"],
        functions=data.get("functions"),
        function_call=data.get("function_call"),
    )
    if breakdown:
        console.print(_build_table(result, data["messages"]))
    else:
        typer.echo(result.total)


@app.command()
def render(
    prompt_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Request JSON/YAML"),
) -> None:
    """Print the function definitions block as it is injected into the prompt."""
    data = _load_prompt(prompt_file)
    functions = data.get("functions")
    if not functions:
        typer.echo(f"{prompt_file} has no functions", err=True)
        raise typer.Exit(1)
    typer.echo(render_function_definitions(functions))


@app.command()
def count(
    text: str = typer.Argument(..., help="Text to tokenise"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model whose tokenizer to use"),
) -> None:
    """Count the raw BPE tokens in TEXT."""
    estimator = _load_estimator(None, model)
    typer.echo(estimator.count_string_tokens(text))
