"""End-to-end tests for the learning session pipeline."""

import logging
import random

from aegis.contracts.condition import LearningCondition
from aegis.contracts.features import PerceptionTier
from aegis.contracts.intervention import InterventionClass
from aegis.core import LearningSession, SessionCallbacks
from aegis.estimator.explain import NOT_USED_CAMERA_OFF

from conftest import ATTENTIVE, CONFUSED, WANDERING, build_sample


def drive(session, profile, start=0, end=60):
    """Ingest one sample and tick once per second; return emitted results."""
    results = []
    for t in range(start, end + 1):
        session.ingest(build_sample(float(t), **profile))
        result = session.tick(float(t))
        if result.emitted:
            results.append(result)
    return results


def camera_session(**kwargs) -> LearningSession:
    session = LearningSession(rng=random.Random(1), synthesize_tier0=False, **kwargs)
    session.set_tier(PerceptionTier.RGB)
    return session


class TestScenarios:
    def test_attentive_learner_left_alone(self):
        session = camera_session()
        results = drive(session, ATTENTIVE)

        assert results
        assert all(r.state.dominant == LearningCondition.ATTENTIVE for r in results)
        assert not any(r.decision.should_intervene for r in results)
        assert session.stats.interventions == 0

    def test_wandering_learner_offered_reset_or_modality(self):
        session = camera_session()
        results = drive(session, WANDERING)

        offered = [r for r in results if r.intervention is not None]
        assert offered
        first = offered[0]
        assert first.state.dominant == LearningCondition.WANDERING
        assert first.state.confidence >= 0.5
        assert first.intervention.intervention_class in {
            InterventionClass.RESET,
            InterventionClass.MODALITY,
        }
        assert results[-1].state.dominant == LearningCondition.WANDERING

    def test_confused_learner_offered_help(self):
        session = camera_session()
        results = drive(session, CONFUSED)

        offered = [r for r in results if r.intervention is not None]
        assert offered
        assert offered[0].state.dominant == LearningCondition.CONFUSED
        assert offered[0].intervention.intervention_class in {
            InterventionClass.HINT,
            InterventionClass.PACE,
            InterventionClass.MODALITY,
        }
        assert "retries in last minute" in " ".join(offered[0].intervention.triggered_by)

    def test_scores_and_confidence_bounded(self):
        session = camera_session()
        results = drive(session, WANDERING, 0, 30) + drive(session, CONFUSED, 31, 90)

        for result in results:
            assert 0.0 <= result.state.confidence <= 1.0
            for value in result.state.scores.to_dict().values():
                assert 0.0 <= value <= 1.0

    def test_one_offer_per_cooldown(self):
        session = camera_session()
        results = drive(session, WANDERING, 0, 300)

        times = [r.state.timestamp for r in results if r.intervention is not None]
        assert len(times) >= 2
        for earlier, later in zip(times, times[1:]):
            assert later - earlier >= 120

    def test_dismiss_backs_off(self):
        session = camera_session()
        results = drive(session, WANDERING)
        offered = next(r.intervention for r in results if r.intervention is not None)

        cooldown = session.record_response(offered.id, "dismiss")

        assert cooldown == 135
        assert session.get_stats()["policy"]["responses"]["dismiss"] == 1


class TestLearningSession:
    def test_tier_zero_synthesizes_samples(self):
        session = LearningSession()

        result = session.tick(0.0)

        assert result.emitted
        assert result.state.not_used == NOT_USED_CAMERA_OFF
        assert not result.decision.should_intervene
        assert session.stats.samples_accepted == 1

    def test_no_emission_between_intervals(self):
        session = LearningSession()
        session.tick(0.0)

        result = session.tick(1.0)

        assert not result.emitted
        assert result.intervention is None
        assert result.to_dict() == {"state": None, "decision": None}

    def test_no_state_without_samples(self):
        session = LearningSession(synthesize_tier0=False)
        assert not session.tick(0.0).emitted

    def test_rejected_sample_logged_not_raised(self, make_sample, caplog):
        session = camera_session()
        assert session.ingest(make_sample(5.0))

        with caplog.at_level(logging.WARNING):
            assert not session.ingest(make_sample(4.0))

        assert session.stats.samples_rejected == 1
        assert "Rejected sample" in caplog.text

    def test_non_finite_tick_ignored(self, caplog):
        session = LearningSession()

        with caplog.at_level(logging.WARNING):
            result = session.tick(float("nan"))

        assert not result.emitted
        assert "non-finite" in caplog.text
        assert session.tick(100.0).emitted

    def test_callbacks(self, make_sample):
        updates, reasons, tiers = [], [], []
        session = LearningSession(
            callbacks=SessionCallbacks(
                on_condition_update=updates.append,
                on_policy_reasoning=reasons.append,
                on_tier_change=tiers.append,
            ),
            synthesize_tier0=False,
        )

        session.set_tier(1)
        session.set_tier(1)
        session.ingest(make_sample(0.0))
        session.tick(0.0)

        assert tiers == [PerceptionTier.RGB]
        assert len(updates) == 1
        assert session.last_condition is updates[0]
        assert reasons and reasons[0]

    def test_intervention_callback(self):
        offered = []
        session = camera_session(callbacks=SessionCallbacks(on_intervention=offered.append))

        drive(session, WANDERING, 0, 30)

        assert len(offered) == 1
        assert session.stats.interventions == 1

    def test_merge_telemetry(self, make_sample):
        session = camera_session(merge_telemetry=True)
        session.record_retry(0.5)
        session.set_content_element("quiz-3")

        session.ingest(make_sample(1.0, retries=0))

        sample = list(session.estimator.buffer)[-1]
        assert sample.interaction.retry_count_60s == 1
        assert sample.interaction.idle_seconds == 0.5
        assert sample.interaction.content_element_id == "quiz-3"

    def test_reset(self):
        session = camera_session()
        drive(session, WANDERING, 0, 30)

        session.reset(now=31.0)

        assert session.last_condition is None
        assert not session.estimator.has_data
        assert session.policy.budget.last_intervention_time is None
        assert session.tier == PerceptionTier.RGB

    def test_stop_discards_state(self, make_sample):
        session = camera_session()
        session.ingest(make_sample(0.0))
        session.tick(0.0)

        session.stop(now=1.0)

        assert session.last_condition is None
        assert len(session.estimator.buffer) == 0
        assert not session.tick(1.0).emitted

    def test_stats(self):
        session = camera_session()
        drive(session, ATTENTIVE, 0, 9)

        stats = session.get_stats()

        assert stats["tier"] == 1
        assert stats["samples_accepted"] == 10
        assert stats["ticks"] == 10
        assert stats["states_emitted"] == 4
        assert stats["policy"]["evaluations"] == 4
