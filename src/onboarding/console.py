"""
Terminal front end for the onboarding wizard.

Renders each step with Rich and maps typed lines onto draft mutators and
sequencer transitions:

    /back           previous step
    /skip           skip an optional step
    /quit           leave without saving
    <blank line>    next step (submits on the last step)

Step input:
    name            any text
    goal            option number or id
    restrictions    comma-separated ids or numbers to toggle; `vegan:honey` toggles a sub-option
    favorites/avoid comma-separated searches to add the first match; `-name` removes
"""

import logging
from typing import Any

from rich.console import Console
from rich.panel import Panel

from .errors import StepNotSkippable, SubmissionFailed, ValidationFailed
from .forms import (
    DIETARY_GOAL_OPTIONS,
    DIETARY_RESTRICTION_OPTIONS,
    RESTRICTION_SUB_OPTIONS,
    is_known_restriction,
    is_known_restriction_option,
)
from .ingredients import IngredientCatalog
from .sequencer import StepSequencer
from .state import IngredientList, ProfileDraft
from .steps import Step

logger = logging.getLogger(__name__)

QUIT_COMMANDS = {"/quit", "/exit"}

_DOTS = {"done": "[green]●[/green]", "current": "[bold blue]●[/bold blue]", "pending": "[dim]○[/dim]"}


# =============================================================================
# Rendering
# =============================================================================

def render_step(sequencer: StepSequencer, catalog: IngredientCatalog, console: Console) -> None:
    """Print the step indicator and the current step's screen."""
    meta = sequencer.metadata
    draft = sequencer.draft

    indicator = " ".join(_DOTS[state] for _, state in sequencer.progress())
    lines = [f"[dim]{meta.subtitle}[/dim]", ""]

    if meta.step == Step.NAME:
        if draft.display_name:
            lines.append(f"Current: {draft.display_name}")

    elif meta.step == Step.GOAL:
        for i, goal in enumerate(DIETARY_GOAL_OPTIONS, 1):
            marker = "[bold green]✓[/bold green]" if goal["id"] == draft.dietary_goal.value else " "
            lines.append(f"{marker} {i}. {goal['label']} [dim]- {goal['description']}[/dim]")

    elif meta.step == Step.RESTRICTIONS:
        for i, restriction in enumerate(DIETARY_RESTRICTION_OPTIONS, 1):
            options = draft.options_for(restriction["id"])
            marker = "[bold green]✓[/bold green]" if options is not None else " "
            line = f"{marker} {i}. {restriction['icon']} {restriction['label']} [dim]({restriction['id']})[/dim]"
            if options is not None and RESTRICTION_SUB_OPTIONS.get(restriction["id"]):
                subs = ", ".join(
                    f"[green]{o['id']}[/green]" if o["id"] in options else o["id"]
                    for o in RESTRICTION_SUB_OPTIONS[restriction["id"]]
                )
                line += f"  [dim]options:[/dim] {subs}"
            lines.append(line)

    else:
        which = _ingredient_list_for(meta.step)
        selected = draft.favorite_ingredients if which == "favorites" else draft.disliked_ingredients
        if selected:
            lines.append("Selected: " + ", ".join(i.name for i in selected))
        else:
            lines.append("[dim]Nothing selected yet[/dim]")
        if catalog.fallback_active:
            lines.append("[dim](offline catalog)[/dim]")
        lines.append("Available: " + ", ".join(i.name for i in catalog.ingredients))

    console.print()
    console.print(indicator)
    console.print(
        Panel(
            "\n".join(lines),
            title=f"{meta.icon} {meta.title}",
            subtitle=f"[dim]enter = {sequencer.advance_label}[/dim]",
            border_style="green",
        )
    )


# =============================================================================
# Input Handling
# =============================================================================

def _ingredient_list_for(step: Step) -> IngredientList:
    return "favorites" if step == Step.FAVORITES else "avoid"


def _split(line: str) -> list[str]:
    return [part.strip() for part in line.split(",") if part.strip()]


def apply_goal(draft: ProfileDraft, value: str) -> None:
    """Set the goal from an option number or id."""
    if value.isdigit():
        index = int(value) - 1
        if not 0 <= index < len(DIETARY_GOAL_OPTIONS):
            raise ValueError(f"Pick a goal between 1 and {len(DIETARY_GOAL_OPTIONS)}")
        value = DIETARY_GOAL_OPTIONS[index]["id"]
    try:
        draft.set_goal(value.lower())
    except ValueError:
        raise ValueError(f"Unknown goal: {value}")


def apply_restrictions(draft: ProfileDraft, line: str) -> None:
    """Toggle restrictions (`vegan`, `2`) and sub-options (`vegan:honey`)."""
    for item in _split(line):
        restriction_id, _, option = item.partition(":")
        restriction_id = restriction_id.strip().lower()
        if restriction_id.isdigit():
            index = int(restriction_id) - 1
            if not 0 <= index < len(DIETARY_RESTRICTION_OPTIONS):
                raise ValueError(f"No restriction number {restriction_id}")
            restriction_id = DIETARY_RESTRICTION_OPTIONS[index]["id"]

        if option:
            option = option.strip().lower()
            is_known_restriction_option(restriction_id, option)
            draft.toggle_restriction_option(restriction_id, option)
        else:
            is_known_restriction(restriction_id)
            draft.toggle_restriction(restriction_id)


def apply_ingredients(
    draft: ProfileDraft,
    which: IngredientList,
    catalog: IngredientCatalog,
    line: str,
) -> list[str]:
    """
    Add the first catalog match for each search, or remove `-name` entries.

    Returns messages for searches that matched nothing.
    """
    misses = []
    selected = draft.favorite_ingredients if which == "favorites" else draft.disliked_ingredients

    for item in _split(line):
        if item.startswith("-"):
            target = item[1:].strip().lower()
            for ingredient in list(selected):
                if target in (ingredient.id.lower(), ingredient.name.lower()):
                    draft.remove_ingredient(which, ingredient.id)
            continue

        matches = catalog.search(item)
        if not matches:
            misses.append(f"No ingredients match '{item}'")
            continue
        draft.add_ingredient(which, matches[0])

    return misses


def handle_step_input(
    sequencer: StepSequencer,
    catalog: IngredientCatalog,
    line: str,
    console: Console,
) -> bool:
    """
    Apply one line of step input to the draft.

    Returns True when the wizard should advance right away (single-answer
    steps), False to stay on the step for more input.
    """
    step = sequencer.current_step
    draft = sequencer.draft

    try:
        if step == Step.NAME:
            draft.set_display_name(line)
            return True
        if step == Step.GOAL:
            apply_goal(draft, line)
            return True
        if step == Step.RESTRICTIONS:
            apply_restrictions(draft, line)
            return False

        for miss in apply_ingredients(draft, _ingredient_list_for(step), catalog, line):
            console.print(f"[yellow]{miss}[/yellow]")
        return False
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return False


# =============================================================================
# Main Loop
# =============================================================================

async def run_console_wizard(
    sequencer: StepSequencer,
    catalog: IngredientCatalog,
    console: Console | None = None,
) -> dict[str, Any] | None:
    """
    Run the wizard until the profile is submitted or the user quits.

    Returns the stored profile, or None if the user quit.
    """
    console = console or Console()

    while not sequencer.completed:
        render_step(sequencer, catalog, console)
        line = console.input("[bold blue]>[/bold blue] ").strip()

        if line.lower() in QUIT_COMMANDS:
            console.print("[dim]Profile setup cancelled. Nothing was saved.[/dim]")
            return None

        if line.lower() == "/back":
            sequencer.retreat()
            continue

        if line.lower() == "/skip":
            try:
                sequencer.skip()
            except StepNotSkippable:
                console.print(f"[red]The {sequencer.metadata.label.lower()} step can't be skipped[/red]")
            continue

        if line and not handle_step_input(sequencer, catalog, line, console):
            continue

        try:
            await sequencer.advance()
        except ValidationFailed as e:
            console.print(f"[red]Error: {e.message}[/red]")
        except SubmissionFailed as e:
            console.print(f"[red]Error: {e.message}[/red]")
            console.print("[dim]Your answers are kept. Press enter to try again.[/dim]")

    console.print("\n[bold green]Profile saved![/bold green] Welcome to Mindful Meals.")
    return sequencer.result
