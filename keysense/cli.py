"""
keysense CLI - adaptive piano practice planner.

Usage:
    keysense plan profile.json          # Today's session plan
    keysense next profile.json          # Next skill to learn
    keysense review profile.json        # Skills needing review
    keysense skills --category scales   # Browse the curriculum
    keysense validate                   # Check the skill graph
    keysense practice profile.json white-keys [--failed] [--exercise ID]
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from keysense.config import get_settings
from keysense.content import load_content
from keysense.curriculum import (
    SKILL_TREE,
    SkillCategory,
    SkillGraph,
    SkillGraphError,
    get_skill_graph,
)
from keysense.learning import (
    DecayConfig,
    LearnerProfile,
    MasteryEventBus,
    MasteryTracker,
    SkillMasteredEvent,
    add_recent_exercise,
    days_since,
)
from keysense.planning import PlannerConfig, ResolutionPolicy, SessionPlanner
from keysense.planning.exercise_resolver import ExerciseRef
from keysense.profile_io import ProfileFormatError, load_profile, save_profile

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="keysense",
    help="Adaptive piano practice planner",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

ProfileArg = Annotated[Path, typer.Argument(help="Learner profile JSON snapshot")]
PolicyOpt = Annotated[
    ResolutionPolicy | None,
    typer.Option("--policy", "-p", help="Exercise resolution policy"),
]
ContentDirOpt = Annotated[
    Path | None,
    typer.Option("--content-dir", "-c", help="Directory of authored exercise JSON"),
]


def _load(path: Path, missing_ok: bool = False) -> LearnerProfile:
    try:
        return load_profile(path, missing_ok=missing_ok)
    except ProfileFormatError as e:
        console.print(f"[red]✗ {e}[/]")
        raise typer.Exit(1)


def _tracker() -> MasteryTracker:
    return MasteryTracker(get_skill_graph(), DecayConfig.from_settings())


def _planner(policy: ResolutionPolicy | None, content_dir: Path | None) -> SessionPlanner:
    settings = get_settings()
    loader = load_content(content_dir or settings.content_dir)
    return SessionPlanner(
        graph=get_skill_graph(),
        loader=loader,
        policy=policy or settings.resolution_policy,
        config=PlannerConfig.from_settings(settings),
        tracker=_tracker(),
    )


# =============================================================================
# Planning Commands
# =============================================================================


@app.command()
def plan(
    profile_path: ProfileArg,
    policy: PolicyOpt = None,
    content_dir: ContentDirOpt = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the plan as JSON")] = False,
) -> None:
    """
    Show today's practice session.

    Examples:
        keysense plan me.json
        keysense plan me.json --policy ai-first-with-fallback -c ./content
    """
    profile = _load(profile_path)
    session = _planner(policy, content_dir).generate_session_plan(profile)

    if as_json:
        console.print_json(data=session.to_dict())
        return

    console.print(
        Panel(
            f"[bold]{session.session_type.value}[/] session, "
            f"{len(session.exercises)} exercises",
            title="🎹 Today's Practice",
        )
    )
    for title, refs in (
        ("Warm-up", session.warm_up),
        ("Lesson", session.lesson),
        ("Challenge", session.challenge),
    ):
        console.print(_section_table(title, refs))

    console.print("[bold]Why this plan:[/]")
    for line in session.reasoning:
        console.print(f"  • {line}")


def _section_table(title: str, refs: tuple[ExerciseRef, ...]) -> Table:
    table = Table(title=title, title_justify="left")
    table.add_column("#", style="dim", width=3)
    table.add_column("Exercise", style="cyan")
    table.add_column("Source", style="magenta")
    table.add_column("Skill", style="yellow")
    table.add_column("Reason")
    for i, ref in enumerate(refs, 1):
        exercise = ref.exercise_id
        if ref.fallback_exercise_id:
            exercise += f" (fallback {ref.fallback_exercise_id})"
        table.add_row(str(i), exercise, ref.source.value, ref.skill_node_id, ref.reason)
    return table


@app.command("next")
def next_skill(profile_path: ProfileArg) -> None:
    """Show the next skill to learn."""
    profile = _load(profile_path)
    graph = get_skill_graph()
    skill = SessionPlanner(graph=graph, tracker=_tracker()).get_next_skill_to_learn(
        profile.mastered_skills
    )
    if skill is None:
        console.print("[green]✓ Every skill is mastered.[/]")
        return

    console.print(f"[bold cyan]{skill.name}[/] ({skill.id})")
    console.print(
        f"  {skill.category.display_name}, tier {skill.tier}, depth {graph.get_depth(skill.id)}"
    )
    if skill.description:
        console.print(f"  [dim]{skill.description}[/]")


@app.command()
def review(profile_path: ProfileArg) -> None:
    """List mastered skills that need review, most decayed first."""
    profile = _load(profile_path)
    tracker = _tracker()
    stale = tracker.get_skills_needing_review(profile.mastered_skills, profile.skill_mastery_data)

    if not stale:
        console.print("[green]✓ No skills need review.[/]")
        return

    table = Table(title=f"Skills Needing Review ({len(stale)})")
    table.add_column("Skill", style="cyan")
    table.add_column("Days idle", justify="right")
    table.add_column("Decay", justify="right", style="yellow")
    for node in stale:
        record = profile.skill_mastery_data[node.id]
        table.add_row(
            node.name,
            f"{days_since(record.last_practiced_at):.0f}",
            f"{tracker.decay(record):.2f}",
        )
    console.print(table)


# =============================================================================
# Curriculum Commands
# =============================================================================


@app.command()
def skills(
    category: Annotated[
        SkillCategory | None, typer.Option("--category", help="Only this category")
    ] = None,
) -> None:
    """Browse the curriculum."""
    graph = get_skill_graph()
    nodes = graph.get_skills_by_category(category) if category else graph.nodes

    table = Table(title=f"Curriculum ({len(nodes)} skills)")
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    table.add_column("Category", style="yellow")
    table.add_column("Tier", justify="right")
    table.add_column("Depth", justify="right", style="dim")
    for node in nodes:
        table.add_row(
            node.id,
            node.name,
            node.category.value,
            str(node.tier),
            str(graph.get_depth(node.id)),
        )
    console.print(table)


@app.command()
def validate(content_dir: ContentDirOpt = None) -> None:
    """
    Validate the skill graph.

    With --content-dir, also report skills that have no authored exercise.

    Exit codes:
        0 - Graph valid
        1 - Structural error found
    """
    graph = SkillGraph(SKILL_TREE)
    try:
        graph.validate()
    except SkillGraphError as e:
        console.print(f"[red]✗ Invalid skill graph: {e}[/]")
        raise typer.Exit(1)

    deepest = max((graph.get_depth(node.id) for node in graph), default=0)
    console.print(
        f"[green]✓ Skill graph valid:[/] {len(graph)} skills, "
        f"{len(graph.get_roots())} root, max depth {deepest}"
    )

    if content_dir is not None:
        loader = load_content(content_dir)
        missing = [
            node.id
            for node in graph
            if not any(loader.get_exercise(eid) for eid in node.target_exercise_ids)
        ]
        console.print(
            f"[yellow]{len(missing)} skills without authored exercises "
            f"(AI generation will be requested)[/]"
        )


# =============================================================================
# Progress Commands
# =============================================================================


@app.command()
def practice(
    profile_path: ProfileArg,
    skill_id: Annotated[str, typer.Argument(help="Skill practised")],
    failed: Annotated[bool, typer.Option("--failed", help="Attempt did not pass")] = False,
    exercise: Annotated[
        str | None, typer.Option("--exercise", "-e", help="Exercise played (kept in the recent list)")
    ] = None,
) -> None:
    """
    Record one practice attempt and save the profile.

    A missing profile file starts a new learner. With --exercise, the
    exercise joins the recent list the planner avoids repeating.
    """
    profile = _load(profile_path, missing_ok=True)
    result = _tracker().record_practice(profile, skill_id, passed=not failed)

    if result.record is None:
        console.print(f"[red]✗ Unknown skill: {skill_id}[/]")
        raise typer.Exit(1)

    updated = result.profile
    if exercise:
        updated = add_recent_exercise(updated, exercise, get_settings().recent_exercise_limit)
    save_profile(updated, profile_path)
    console.print(
        f"Recorded {'failed' if failed else 'passed'} practice of {skill_id} "
        f"({result.record.completion_count} completions)"
    )

    bus = MasteryEventBus()
    bus.subscribe(_announce_mastery)
    bus.publish(result.events)


def _announce_mastery(event: SkillMasteredEvent) -> None:
    console.print(f"[bold green]🎉 Mastered: {event.skill_name}[/]")


# =============================================================================
# Entry Point
# =============================================================================


def configure_logging(level: str, log_file: str | None = None) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level, format="<level>{message}</level>")
    if log_file:
        logger.add(log_file, level="DEBUG", rotation="10 MB", retention=3)


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file)
    app()


if __name__ == "__main__":
    main()
