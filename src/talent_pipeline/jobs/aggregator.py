"""Cross-job candidate suggestions for the recruiter dashboard."""

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from talent_pipeline.config import settings
from talent_pipeline.core.errors import RecruiterAPIError
from talent_pipeline.core.models import Job, Suggestion
from talent_pipeline.jobs.matcher import MatchScorer, explicit_score
from talent_pipeline.jobs.normalizer import candidate_from_record, dedup_key, job_from_record, text_field
from talent_pipeline.utils.logging import get_logger

logger = get_logger(__name__)


class CandidateAggregator:
    """Scores every applicant across a recruiter's jobs and keeps the best few."""

    def __init__(
        self,
        scorer: Optional[MatchScorer] = None,
        threshold: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        self.scorer = scorer or MatchScorer()
        self.threshold = settings.suggestion_threshold if threshold is None else threshold
        self.limit = settings.suggestion_limit if limit is None else limit
        self.logger = logger.bind(component="candidate_aggregator")

    def rank(self, pairs: Iterable[Tuple[Job, Mapping[str, Any]]]) -> List[Suggestion]:
        """
        Rank (job, applicant record) pairs into dashboard suggestions.

        Scores each pair, keeps scores above the threshold, sorts by score
        descending and drops later duplicates of the same email and name,
        so the highest-scoring copy of a person survives.

        Args:
            pairs: Each applicant record together with the job it applied to

        Returns:
            At most `limit` suggestions, best first
        """
        scored: List[Suggestion] = []
        for job, record in pairs:
            application = self.scorer.build_application(job, record)
            candidate = application.candidate
            scored.append(Suggestion(
                job_id=job.id,
                job_title=job.title,
                application_id=application.id,
                candidate=candidate,
                match_score=application.match_score,
                dedup_key=dedup_key(candidate.email, candidate.name),
            ))

        eligible = [s for s in scored if s.match_score > self.threshold]
        eligible.sort(key=lambda s: s.match_score, reverse=True)

        seen = set()
        ranked: List[Suggestion] = []
        for suggestion in eligible:
            if suggestion.dedup_key in seen:
                continue
            seen.add(suggestion.dedup_key)
            ranked.append(suggestion)

        self.logger.debug(
            "Ranked candidates",
            scored=len(scored),
            eligible=len(eligible),
            unique=len(ranked)
        )

        return ranked[:self.limit]

    async def collect(self, client: Any, recruiter_id: str) -> List[Suggestion]:
        """
        Fetch every job and its applicants, then rank them.

        A job whose applicants cannot be fetched is skipped; failing to list
        the jobs themselves propagates.
        """
        jobs = [job_from_record(record) for record in await client.list_jobs(recruiter_id)]

        pairs: List[Tuple[Job, Mapping[str, Any]]] = []
        failed = 0
        for job in jobs:
            if not job.id:
                continue
            try:
                records = await client.list_applicants(job.id)
            except RecruiterAPIError as e:
                failed += 1
                self.logger.warning("Skipping job during aggregation", job_id=job.id, error=str(e))
                continue
            pairs.extend((job, record) for record in records)

        self.logger.info(
            "Collected applicants for suggestions",
            recruiter_id=recruiter_id,
            job_count=len(jobs),
            failed_jobs=failed,
            applicant_count=len(pairs)
        )

        return self.rank(pairs)

    async def suggest(
        self,
        client: Any,
        recruiter_id: str,
        backend_suggestions: Optional[Sequence[Any]] = None,
    ) -> List[Suggestion]:
        """Use the backend's own suggestions when it has any, otherwise compute them."""
        if backend_suggestions:
            return [self._from_backend(record) for record in backend_suggestions if isinstance(record, Mapping)]
        return await self.collect(client, recruiter_id)

    def _from_backend(self, record: Mapping[str, Any]) -> Suggestion:
        candidate = candidate_from_record(record)
        score = explicit_score(record)
        return Suggestion(
            job_id=text_field(record, ("jobId", "job.id")),
            job_title=text_field(record, ("jobTitle", "job.title")),
            application_id=text_field(record, ("id", "applicationId")),
            candidate=candidate,
            match_score=score if score is not None else 0,
            dedup_key=dedup_key(candidate.email, candidate.name),
        )


def rank_candidates(
    pairs: Iterable[Tuple[Job, Mapping[str, Any]]],
    threshold: Optional[int] = None,
    limit: Optional[int] = None,
) -> List[Suggestion]:
    """Functional shortcut for CandidateAggregator.rank."""
    return CandidateAggregator(threshold=threshold, limit=limit).rank(pairs)
