"""ReportAssembler tests — fetch ordering, insight merging and outcomes."""

import pytest

from wellness_engine.errors import InsightsError, NotFoundError, TransportError
from wellness_engine.models.report import ReportFailed, ReportReady
from wellness_engine.report import ReportAssembler, merge_insights

from helpers.fakes import FakeApiClient, make_report


class TestMergeInsights:
    def test_short_list_keeps_defaults(self):
        report = make_report(n_domains=3)
        merged = merge_insights(report, ["Fresh insight"])
        assert [d.insights_and_support for d in merged.domains] == [
            "Fresh insight", "Default insight 1", "Default insight 2",
        ]

    def test_empty_and_null_entries_keep_defaults(self):
        report = make_report(n_domains=3)
        merged = merge_insights(report, ["", None, "Third"])
        assert [d.insights_and_support for d in merged.domains] == [
            "Default insight 0", "Default insight 1", "Third",
        ]

    def test_extra_entries_ignored(self):
        report = make_report(n_domains=1)
        merged = merge_insights(report, ["A", "B", "C"])
        assert len(merged.domains) == 1
        assert merged.domains[0].insights_and_support == "A"

    def test_input_not_mutated(self):
        report = make_report(n_domains=1)
        merge_insights(report, ["A"])
        assert report.domains[0].insights_and_support == "Default insight 0"

    def test_other_fields_untouched(self):
        report = make_report(n_domains=2)
        merged = merge_insights(report, ["A", "B"])
        for before, after in zip(report.domains, merged.domains):
            assert (before.score, before.severity, before.summary) == (
                after.score, after.severity, after.summary,
            )


class TestReportAssembler:
    @pytest.mark.asyncio
    async def test_report_then_insights(self):
        client = FakeApiClient(insights=["Fresh insight"])
        report = await ReportAssembler(client).generate("abc123")

        assert [name for name, _ in client.calls] == ["report", "insights"], (
            "Insights must be requested only after the report arrived"
        )
        assert client.calls_to("insights")[0].individual_id == "abc123"
        assert report.domains[0].insights_and_support == "Fresh insight"
        assert report.domains[1].insights_and_support == "Default insight 1"

    @pytest.mark.asyncio
    async def test_empty_id_is_not_found_without_request(self):
        client = FakeApiClient()
        with pytest.raises(NotFoundError, match="Submission ID is required."):
            await ReportAssembler(client).generate("")
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_load_ready(self):
        outcome = await ReportAssembler(FakeApiClient()).load("abc123")
        assert isinstance(outcome, ReportReady)
        assert outcome.report.individual_id == "abc123"

    @pytest.mark.asyncio
    async def test_load_not_found(self):
        client = FakeApiClient(report_error=NotFoundError("zzz"))
        outcome = await ReportAssembler(client).load("zzz")

        assert isinstance(outcome, ReportFailed)
        assert outcome.kind == "not_found"
        assert "zzz" in outcome.message
        assert outcome.restartable
        assert client.calls_to("insights") == [], "No insights request for a missing report"

    @pytest.mark.asyncio
    async def test_load_report_transport_failure(self):
        client = FakeApiClient(report_error=TransportError("Server down", status=500))
        outcome = await ReportAssembler(client).load("abc123")
        assert outcome.kind == "transport"
        assert outcome.message == "Server down"

    @pytest.mark.asyncio
    async def test_rejected_insights_fail_whole_attempt(self):
        client = FakeApiClient(insights_error=InsightsError("Failed to generate AI insights."))
        outcome = await ReportAssembler(client).load("abc123")

        assert isinstance(outcome, ReportFailed)
        assert outcome.kind == "transport"
        assert outcome.message == "Failed to generate AI insights."

    @pytest.mark.asyncio
    async def test_generate_propagates_insights_error(self):
        client = FakeApiClient(insights_error=InsightsError("nope"))
        with pytest.raises(InsightsError):
            await ReportAssembler(client).generate("abc123")
