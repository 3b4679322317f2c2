"""AssessmentFlow tests — navigation guards and single-flight submission.

The API client is replaced by FakeApiClient (helpers/fakes.py).  Holding
its ``gate`` closed keeps a submission in flight so a second submit can be
observed while the first is pending.
"""

import asyncio

import pytest

from wellness_engine.client import SUBMIT_FALLBACK
from wellness_engine.errors import TransportError
from wellness_engine.flow import INCOMPLETE_MESSAGE, AssessmentFlow
from wellness_engine.models.session import (
    SubmissionAccepted,
    SubmissionFailed,
    SubmissionRejected,
    SubmissionStatus,
)

from helpers.fakes import FakeApiClient


def _filled_flow(engine, client):
    """A mini-definition flow on its only section, ready to submit."""
    flow = AssessmentFlow(engine, client)
    flow.set_details(first_name="Ann", email="a@x.com")
    flow.next()
    flow.answer("Q1", "Not at all")
    return flow


# =====================================================================
# Navigation
# =====================================================================


class TestNavigation:
    def test_next_blocked_until_details_complete(self, mini_engine):
        flow = AssessmentFlow(mini_engine, FakeApiClient())
        view = flow.next()
        assert view.type == "details", "Incomplete details must not advance"

        flow.set_details(first_name="Ann", email="a@x.com")
        view = flow.next()
        assert view.type == "section"
        assert view.section_id == "S1"

    def test_next_blocked_until_section_answered(self, mini_engine):
        flow = AssessmentFlow(mini_engine, FakeApiClient())
        flow.set_details(first_name="Ann", email="a@x.com")
        flow.next()
        assert flow.next().section_id == "S1"

        flow.answer("Q1", "Nearly every day")
        assert flow.next().section_id == "S2"

    def test_next_on_last_section_stays(self, mini_engine):
        flow = _filled_flow(mini_engine, FakeApiClient())
        view = flow.next()
        assert view.is_last
        assert flow.state.step == 1

    def test_back_keeps_answers(self, mini_engine):
        flow = _filled_flow(mini_engine, FakeApiClient())
        view = flow.back()
        assert view.type == "details"
        assert flow.state.answers == {"Q1": "Not at all"}
        assert flow.back().type == "details"

    def test_changing_trigger_clamps_step(self, mini_engine):
        flow = AssessmentFlow(mini_engine, FakeApiClient())
        flow.set_details(first_name="Ann", email="a@x.com")
        flow.next()
        flow.answer("Q1", "Nearly every day")
        flow.next()
        assert flow.state.step == 2

        # Simulate revisiting S1 from a stale step and closing the branch
        view = flow.answer("Q1", "Several days")
        assert flow.state.step == 1
        assert view.section_id == "S1"


# =====================================================================
# Submission
# =====================================================================


class TestSubmit:
    @pytest.mark.asyncio
    async def test_successful_submission(self, mini_engine):
        client = FakeApiClient(submission_id="abc123")
        flow = _filled_flow(mini_engine, client)

        result = await flow.submit()

        assert isinstance(result, SubmissionAccepted)
        assert result.submission_id == "abc123"
        assert result.report_location == "/?submissionId=abc123"
        assert flow.state.submission == SubmissionStatus.SUCCEEDED

        (request,) = client.calls_to("submit")
        assert request.first_name == "Ann"
        assert request.answers == {"Q1": "Not at all"}

    @pytest.mark.asyncio
    async def test_incomplete_submission_fails_without_request(self, mini_engine):
        client = FakeApiClient()
        flow = AssessmentFlow(mini_engine, client)
        flow.set_details(first_name="Ann", email="a@x.com")

        result = await flow.submit()

        assert isinstance(result, SubmissionFailed)
        assert result.message == INCOMPLETE_MESSAGE
        assert [i.target for i in result.issues] == ["Q1"]
        assert client.calls_to("submit") == []
        assert flow.state.submission == SubmissionStatus.FAILED

    @pytest.mark.asyncio
    async def test_duplicate_submit_while_pending(self, mini_engine):
        gate = asyncio.Event()
        client = FakeApiClient(gate=gate)
        flow = _filled_flow(mini_engine, client)

        first = asyncio.create_task(flow.submit())
        await asyncio.sleep(0)
        assert flow.state.is_submitting

        second = await flow.submit()
        assert isinstance(second, SubmissionRejected)

        gate.set()
        result = await first
        assert isinstance(result, SubmissionAccepted)
        assert len(client.calls_to("submit")) == 1, "Exactly one request may reach the server"

    @pytest.mark.asyncio
    async def test_concurrent_submits_send_one_request(self, mini_engine):
        client = FakeApiClient()
        flow = _filled_flow(mini_engine, client)

        results = await asyncio.gather(flow.submit(), flow.submit(), flow.submit())

        kinds = sorted(r.type for r in results)
        assert kinds == ["rejected", "rejected", "submitted"]
        assert len(client.calls_to("submit")) == 1

    @pytest.mark.asyncio
    async def test_no_resubmit_after_success(self, mini_engine):
        client = FakeApiClient()
        flow = _filled_flow(mini_engine, client)
        await flow.submit()

        result = await flow.submit()
        assert isinstance(result, SubmissionRejected)
        assert len(client.calls_to("submit")) == 1

    @pytest.mark.asyncio
    async def test_transport_failure_then_retry(self, mini_engine):
        client = FakeApiClient(submit_error=TransportError("Server down", status=500))
        flow = _filled_flow(mini_engine, client)

        result = await flow.submit()
        assert isinstance(result, SubmissionFailed)
        assert result.message == "Server down"
        assert flow.state.submission == SubmissionStatus.FAILED
        assert flow.state.error == "Server down"
        assert flow.state.answers == {"Q1": "Not at all"}

        client.submit_error = None
        result = await flow.submit()
        assert isinstance(result, SubmissionAccepted)
        assert flow.state.error is None
        assert len(client.calls_to("submit")) == 2

    @pytest.mark.asyncio
    async def test_unexpected_client_error_is_retryable(self, mini_engine):
        client = FakeApiClient(submit_error=RuntimeError("boom"))
        flow = _filled_flow(mini_engine, client)

        result = await flow.submit()
        assert isinstance(result, SubmissionFailed)
        assert result.message == SUBMIT_FALLBACK
        assert flow.state.submission == SubmissionStatus.FAILED, (
            "An unexpected error must not leave the session in flight"
        )

        client.submit_error = None
        result = await flow.submit()
        assert isinstance(result, SubmissionAccepted)

    @pytest.mark.asyncio
    async def test_cancelled_submission_is_retryable(self, mini_engine):
        client = FakeApiClient(gate=asyncio.Event())
        flow = _filled_flow(mini_engine, client)

        pending = asyncio.create_task(flow.submit())
        await asyncio.sleep(0)
        pending.cancel()
        with pytest.raises(asyncio.CancelledError):
            await pending
        assert flow.state.submission == SubmissionStatus.FAILED

        client.gate = None
        result = await flow.submit()
        assert isinstance(result, SubmissionAccepted)
