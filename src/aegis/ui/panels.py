"""Rich renderables for condition states and policy decisions."""

from rich.table import Table
from rich.text import Text

from aegis.contracts.condition import ConditionState, LearningCondition
from aegis.contracts.intervention import InterventionDecision

CONDITION_STYLES = {
    LearningCondition.ATTENTIVE: "green",
    LearningCondition.WANDERING: "yellow",
    LearningCondition.CONFUSED: "magenta",
    LearningCondition.OVERLOADED: "red",
    LearningCondition.FATIGUED: "blue",
}


def score_bar(value: float, width: int = 10) -> str:
    """Render a 0..1 value as a block bar with a percentage."""
    filled = int(value * width)
    return "█" * filled + "░" * (width - filled) + f" {value:.0%}"


def condition_table(state: ConditionState) -> Table:
    """Table of condition scores, dominant label highlighted."""
    table = Table(
        title=f"@{state.timestamp:.1f}s  confidence {state.confidence:.2f}"
        + ("" if state.confident else " (low)"),
        box=None,
        padding=(0, 1),
    )
    table.add_column("Condition", style="cyan")
    table.add_column("Score", justify="right")

    for condition in LearningCondition:
        label = condition.value
        if condition == state.dominant:
            label = f"[bold {CONDITION_STYLES[condition]}]{label} *[/]"
        table.add_row(label, score_bar(state.scores.get(condition)))

    return table


def drivers_table(state: ConditionState) -> Table:
    """Table of the signals behind a state, plus what was not used."""
    table = Table(title="Drivers", box=None, padding=(0, 1))
    table.add_column("Weight", justify="right")
    table.add_column("Observation")

    for driver in state.drivers:
        table.add_row(f"{driver.weight:.2f}", driver.description)
    for item in state.not_used:
        table.add_row("-", Text(f"not used: {item}", style="dim"))

    return table


def decision_text(decision: InterventionDecision) -> Text:
    """One-line summary of a policy decision."""
    if not decision.should_intervene or decision.intervention is None:
        text = Text("abstain ", style="dim")
        if decision.gate is not None:
            text.append(f"[{decision.gate.value}] ", style="yellow")
        text.append(decision.reasoning)
        return text

    intervention = decision.intervention
    text = Text("INTERVENE ", style="bold green")
    text.append(f"[{intervention.intervention_class.value}] ", style="cyan")
    text.append(intervention.message)
    options = " / ".join(option.label for option in intervention.options)
    text.append(f"\n  options: {options}", style="dim")
    return text
