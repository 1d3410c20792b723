"""
SyntheticFeatureAdapter

Reads JSONL scenario files and replays them through a LearningSession
in fast-forward, ticking the session on a fixed cadence of the
scenario clock. Used for regression runs and demos.
"""

import json
import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from aegis.contracts.features import FeatureSample, PerceptionTier
from aegis.contracts.intervention import ResponseAction
from aegis.core.session import LearningSession, TickResult
from aegis.errors import ConfigurationError, InputError

logger = logging.getLogger(__name__)

DEFAULT_TICK_S = 2.0


@dataclass
class ScenarioLine:
    """A single line from a JSONL scenario file.

    Exactly one of `sample`, `tier` or `response` is set.
    """

    timestamp: float
    line_number: int = 0
    sample: FeatureSample | None = None
    tier: PerceptionTier | None = None
    response: ResponseAction | None = None

    @classmethod
    def from_dict(cls, data: dict, line_number: int) -> "ScenarioLine":
        """Parse a scenario line.

        Line kinds:
            {"t": 12.0, "interaction": {...}, "gaze": {...}, ...}  -> sample
            {"t": 12.0, "tier": 1}                                 -> tier change
            {"t": 12.0, "response": "dismiss"}                     -> learner response

        Raises:
            InputError: if the line is not one of the above
        """
        t = data.get("t", data.get("timestamp"))
        if not isinstance(t, (int, float)) or isinstance(t, bool):
            raise InputError(f"Line {line_number}: missing numeric timestamp")

        try:
            if "interaction" in data:
                fields = {k: v for k, v in data.items() if k != "t"}
                fields["timestamp"] = float(t)
                return cls(
                    timestamp=float(t),
                    line_number=line_number,
                    sample=FeatureSample(**fields),
                )
            if "response" in data:
                return cls(
                    timestamp=float(t),
                    line_number=line_number,
                    response=ResponseAction(data["response"]),
                )
            if "tier" in data:
                return cls(
                    timestamp=float(t),
                    line_number=line_number,
                    tier=PerceptionTier(data["tier"]),
                )
        except (ValidationError, ValueError) as e:
            raise InputError(f"Line {line_number}: {e}") from e

        raise InputError(f"Line {line_number}: expected interaction, tier or response")


def load_scenario(path: str | Path) -> list[ScenarioLine]:
    """Load and validate every line of a scenario file.

    Raises:
        InputError: on malformed JSON or an unrecognised line
    """
    lines = []
    with open(path) as f:
        for line_number, raw in enumerate(f, start=1):
            raw = raw.strip()
            if not raw or raw.startswith("#"):
                continue
            try:
                data = json.loads(raw)
            except json.JSONDecodeError as e:
                raise InputError(f"Line {line_number}: invalid JSON ({e.msg})") from e
            lines.append(ScenarioLine.from_dict(data, line_number))
    return lines


class SyntheticFeatureAdapter:
    """Replays a scenario through a session.

    Scenario JSONL format:
    ```jsonl
    {"t": 0, "tier": 1}
    {"t": 0.5, "quality": {"face_present": true}, "gaze": {"x": 0.1, "y": 0.0}, "interaction": {"tap_rate_10s": 0.2}}
    {"t": 40, "response": "dismiss"}
    ```

    Ticks run at every multiple of `tick_s` after the first line, up to
    the last line. A tick at time T sees every line stamped <= T.
    Response lines answer the most recent intervention.
    """

    def __init__(self, scenario_path: str | Path, tick_s: float = DEFAULT_TICK_S):
        if not math.isfinite(tick_s) or tick_s <= 0:
            raise ConfigurationError(f"tick_s must be positive, got {tick_s}")
        self.scenario_path = Path(scenario_path)
        self.tick_s = tick_s
        self.stats = {
            "lines": 0,
            "samples": 0,
            "rejected": 0,
            "tier_changes": 0,
            "responses": 0,
            "ticks": 0,
        }

    def replay(self, session: LearningSession) -> Iterator[TickResult]:
        """Replay the scenario, yielding every tick that emitted a state."""
        lines = load_scenario(self.scenario_path)
        if not lines:
            logger.info(f"Scenario {self.scenario_path.name} is empty")
            return

        next_tick = lines[0].timestamp
        last_intervention_id: str | None = None

        for line in lines:
            while next_tick < line.timestamp:
                result = self._tick(session, next_tick)
                next_tick += self.tick_s
                if result.emitted:
                    if result.intervention is not None:
                        last_intervention_id = result.intervention.id
                    yield result

            self.stats["lines"] += 1
            if line.sample is not None:
                explicit_tier = "tier" in line.sample.model_fields_set
                if explicit_tier and line.sample.tier != session.tier:
                    session.set_tier(line.sample.tier)
                    self.stats["tier_changes"] += 1
                if session.ingest(line.sample):
                    self.stats["samples"] += 1
                else:
                    self.stats["rejected"] += 1
            elif line.tier is not None:
                session.set_tier(line.tier)
                self.stats["tier_changes"] += 1
            elif line.response is not None:
                if last_intervention_id is None:
                    logger.warning(
                        f"Line {line.line_number}: response with no intervention to answer"
                    )
                    continue
                session.record_response(last_intervention_id, line.response)
                self.stats["responses"] += 1

        end = lines[-1].timestamp
        while next_tick <= end:
            result = self._tick(session, next_tick)
            next_tick += self.tick_s
            if result.emitted:
                yield result

    def _tick(self, session: LearningSession, now: float) -> TickResult:
        self.stats["ticks"] += 1
        return session.tick(now)

    def get_timeline_summary(self) -> str:
        lines = load_scenario(self.scenario_path)
        if not lines:
            return f"Scenario: {self.scenario_path.name} (empty)"
        duration = lines[-1].timestamp - lines[0].timestamp
        samples = sum(1 for line in lines if line.sample is not None)
        return (
            f"Scenario: {self.scenario_path.name}\n"
            f"  Lines: {len(lines)} ({samples} samples)\n"
            f"  Duration: {duration:.1f}s, tick every {self.tick_s:g}s"
        )
