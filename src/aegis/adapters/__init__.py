"""Input adapters - sources of feature samples for a session."""

from aegis.adapters.synthetic import (
    ScenarioLine,
    SyntheticFeatureAdapter,
    load_scenario,
)

__all__ = ["ScenarioLine", "SyntheticFeatureAdapter", "load_scenario"]
