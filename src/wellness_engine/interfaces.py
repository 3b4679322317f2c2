"""Abstract interface for the narrative-insights stage.

The SDK ships no concrete implementation: building prompts and calling a
language model is left to deployments.  The server accepts any
``InsightGenerator`` and degrades to the default per-domain text when none
is configured.

Typical integration::

    class MyGenerator(InsightGenerator):
        async def generate(self, report):
            return [await my_llm(domain) for domain in report.domains]

    app = create_app(insight_generator=MyGenerator())
"""

from abc import ABC, abstractmethod

from wellness_engine.models.report import ScoredReport


class InsightGenerator(ABC):
    """Produces one narrative string per scored domain."""

    @abstractmethod
    async def generate(self, report: ScoredReport) -> list[str]:
        """Generate insights for ``report.domains``.

        Parameters
        ----------
        report:
            The scored report exactly as persisted at submission time.

        Returns
        -------
        list[str]
            ``result[i]`` replaces ``report.domains[i].insights_and_support``.
            A shorter list (or empty strings) leaves the remaining domains
            with their default text.  Raise to fail the request.
        """
        ...
