"""CLI for tierroute.

Inspect routing decisions from the terminal. Settings come from
~/.tierroute/config.yaml unless overridden by flags.

Quick start:
    tierroute route "fix the login bug"             # Route one prompt
    tierroute route "hello" --preference quality    # With context
    tierroute score "hi" "design a distributed db"  # Compare scores
    tierroute calibrate --target 30                 # Pick a threshold
    tierroute models --provider openai              # Known models
"""

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tierroute import __version__
from tierroute.calibration import SAMPLE_QUERIES_BY_INTENT, calibrate_threshold, generate_calibration_report
from tierroute.config import load_settings
from tierroute.controller import RouterController, create_router_from_settings
from tierroute.errors import RouterConfigError
from tierroute.models import ALL_ROUTING_PAIRS, BEDROCK_MODELS, OPENAI_MODELS
from tierroute.routing.features import extract_features
from tierroute.types import Attachment, ModelTier, RoutingContext, Tool, UserPreference

app = typer.Typer(
    name="tierroute",
    help="Complexity-based LLM routing across five model tiers",
    no_args_is_help=True,
)

console = Console()

TIER_COLORS = {
    ModelTier.EXPERT: "magenta",
    ModelTier.COMPLEX: "red",
    ModelTier.MODERATE: "yellow",
    ModelTier.SIMPLE: "green",
    ModelTier.TRIVIAL: "cyan",
}


def _load_controller(
    config_path: Path | None,
    endpoint: str | None,
    preset: str | None,
) -> RouterController:
    """Settings from YAML, with CLI flags taking precedence."""
    try:
        settings = load_settings(config_path)
        overrides = {}
        if endpoint:
            overrides["endpoint"] = endpoint
            overrides["models"] = None
        if preset:
            overrides["preset"] = preset
        if overrides:
            settings = settings.model_copy(update=overrides)
        return create_router_from_settings(settings)
    except RouterConfigError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1)


def _build_context(
    preference: str | None,
    tools: list[str],
    attachments: list[str],
    message_count: int,
    continuation: bool,
) -> RoutingContext | None:
    if not (preference or tools or attachments or message_count or continuation):
        return None
    try:
        user_preference = UserPreference(preference) if preference else None
    except ValueError:
        console.print(f"[red]Unknown preference: {preference}[/red]")
        raise typer.Exit(1)
    return RoutingContext(
        tools=tuple(Tool(name=t) for t in tools),
        attachments=tuple(Attachment(type=a) for a in attachments),
        user_preference=user_preference,
        message_count=message_count,
        is_continuation=continuation,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log routing decisions"),
) -> None:
    """Complexity-based LLM routing across five model tiers."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"tierroute {__version__}")


@app.command()
def route(
    prompt: str = typer.Argument(..., help="Prompt to route"),
    config: Path = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    provider: str = typer.Option(None, "--provider", help="bedrock or openai"),
    preset: str = typer.Option(None, "--preset", "-p", help="Model preset for the endpoint"),
    preference: str = typer.Option(None, "--preference", help="quality|cost|balanced"),
    tool: list[str] = typer.Option(None, "--tool", "-t", help="Available tool (repeatable)"),
    attachment: list[str] = typer.Option(
        None, "--attachment", "-a", help="Attachment type, e.g. application/pdf (repeatable)"),
    message_count: int = typer.Option(0, "--messages", help="Messages so far in the conversation"),
    continuation: bool = typer.Option(False, "--continuation", help="Continuing a previous answer"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Route a prompt and show the decision.

    Examples:
        tierroute route "What is Python?"
        tierroute route "Analyze this" -a application/pdf
        tierroute route "Write a sorting algorithm" --preference cost
    """
    controller = _load_controller(config, provider, preset)
    context = _build_context(preference, tool or [], attachment or [], message_count, continuation)
    result = controller.route(prompt, context)

    if as_json:
        console.print_json(json.dumps(result.to_dict()))
        return

    color = TIER_COLORS[result.tier]
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Tier", f"[{color}]{result.tier.value}[/{color}]")
    table.add_row("Model", result.model)
    table.add_row("Score", f"{result.strong_win_rate:.3f}")
    table.add_row("Confidence", f"{result.confidence:.3f}")
    table.add_row("Reason", f"{result.reason} [dim]({result.reason_category.value})[/dim]")
    if result.estimated_cost is not None:
        table.add_row("Est. cost", f"${result.estimated_cost:.6f}")
    else:
        table.add_row("Est. cost", "[dim]unknown model[/dim]")
    table.add_row("Took", f"{result.routing_duration_ms} ms")

    console.print(Panel(table, title="Routing decision", border_style=color))


@app.command()
def score(
    prompts: list[str] = typer.Argument(..., help="Prompts to score"),
    show_features: bool = typer.Option(False, "--features", "-f", help="Show extracted features"),
) -> None:
    """Score prompts with the rule-based router, side by side."""
    from tierroute.routing import RuleBasedRouter, select_tier

    router = RuleBasedRouter()

    table = Table(title="Complexity scores")
    table.add_column("Prompt", style="cyan", max_width=60)
    table.add_column("Score", justify="right")
    table.add_column("Tier")
    if show_features:
        table.add_column("Tokens", justify="right")
        table.add_column("Signals")

    for prompt in prompts:
        value = router.calculate_strong_win_rate(prompt)
        tier = select_tier(value)
        color = TIER_COLORS[tier]
        row = [prompt, f"{value:.3f}", f"[{color}]{tier.value}[/{color}]"]
        if show_features:
            features = extract_features(prompt)
            signals = [
                name for name, on in (
                    ("code", features.has_code),
                    ("math", features.has_math),
                    ("reasoning", features.has_reasoning),
                    ("creative", features.has_creative_writing),
                    ("technical", features.has_technical_terms),
                    ("multi-step", features.has_multi_step),
                    ("simple", features.is_simple),
                ) if on
            ]
            row += [str(features.token_count), ", ".join(signals) or "-"]
        table.add_row(*row)

    console.print(table)


@app.command()
def calibrate(
    target: float = typer.Option(50.0, "--target", "-t", help="Target strong percentage (0-100)"),
    file: Path = typer.Option(None, "--file", "-f", help="Sample queries, one per line"),
    report: bool = typer.Option(False, "--report", "-r", help="Full per-intent report"),
) -> None:
    """Calibrate a threshold on sample queries.

    Uses the built-in sample corpus unless --file is given.
    """
    from tierroute.routing import RuleBasedRouter

    router = RuleBasedRouter()

    if file is not None:
        if not file.exists():
            console.print(f"[red]File not found: {file}[/red]")
            raise typer.Exit(1)
        queries = [line.strip() for line in file.read_text().splitlines() if line.strip()]
    else:
        queries = [q for qs in SAMPLE_QUERIES_BY_INTENT.values() for q in qs]

    try:
        result = calibrate_threshold(router, queries, target)
    except RouterConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    dist = result.win_rate_distribution
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Samples", str(result.sample_size))
    table.add_row("Threshold", f"[cyan]{result.threshold:.3f}[/cyan]")
    table.add_row("Target strong", f"{result.target_percentage:.1f}%")
    table.add_row("Actual strong", f"{result.actual_percentage:.1f}%")
    table.add_row("Min / Max", f"{dist.min:.3f} / {dist.max:.3f}")
    table.add_row("Mean / Median", f"{dist.mean:.3f} / {dist.median:.3f}")
    table.add_row("P25 / P75", f"{dist.p25:.3f} / {dist.p75:.3f}")
    console.print(Panel(table, title="Calibration", border_style="cyan"))

    if report:
        full = generate_calibration_report(router, queries if file is not None else None)
        intent_table = Table(title="By intent (50% target)")
        intent_table.add_column("Intent", style="cyan")
        intent_table.add_column("Threshold", justify="right")
        intent_table.add_column("Mean", justify="right")
        for intent, res in full["by_intent"].items():
            intent_table.add_row(
                intent, f"{res.threshold:.3f}", f"{res.win_rate_distribution.mean:.3f}")
        console.print(intent_table)
        for rec in full["recommendations"]:
            console.print(f"  • {rec}")


@app.command()
def models(
    provider: str = typer.Option(None, "--provider", "-p", help="bedrock or openai"),
) -> None:
    """List known models with tier and pricing."""
    registries = {"bedrock": BEDROCK_MODELS, "openai": OPENAI_MODELS}
    if provider and provider not in registries:
        console.print(f"[red]Unknown provider: {provider}[/red]")
        raise typer.Exit(1)

    table = Table(title="Known models")
    table.add_column("Model", style="cyan")
    table.add_column("Name")
    table.add_column("Tier")
    table.add_column("Input $/1K", justify="right", style="green")
    table.add_column("Output $/1K", justify="right", style="green")

    for name, registry in registries.items():
        if provider and name != provider:
            continue
        for model in registry.values():
            color = TIER_COLORS[model.tier]
            table.add_row(
                model.id,
                model.name,
                f"[{color}]{model.tier.value}[/{color}]",
                f"{model.cost_per_1k.input:.6f}",
                f"{model.cost_per_1k.output:.6f}",
            )

    console.print(table)


@app.command()
def presets() -> None:
    """Show the five-tier model mapping of every preset."""
    for provider, pairs in ALL_ROUTING_PAIRS.items():
        table = Table(title=f"{provider} presets")
        table.add_column("Preset", style="cyan")
        for tier in ModelTier:
            table.add_column(tier.value)
        for preset, pair in pairs.items():
            table.add_row(preset, *(pair.for_tier(tier) for tier in ModelTier))
        console.print(table)


if __name__ == "__main__":
    app()
