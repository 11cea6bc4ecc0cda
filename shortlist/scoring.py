"""
Scoring pipeline.

Turns a raw comma-separated skills string into an integer score by looking
each trimmed token up in a WeightedDictionary and summing the weights.
Scoring is pure: no I/O, no shared mutable state beyond the read-only
dictionary, so one pipeline can serve concurrent callers.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .dictionary import WeightedDictionary
from .logger import StructuredLogger
from .normalize import MAX_INPUT_CHARS, split_tokens, truncate_input


class ScoreStatus:
    """
    Outcome of a scoring call. All three render as an integer; only
    MATCHED can be non-zero.
    """

    NO_INPUT = "no_input"
    NO_MATCH = "no_match"
    MATCHED = "matched"


@dataclass
class ScoreResult:
    score: int
    status: str
    matches: List[Tuple[str, int]] = field(default_factory=list)
    unknown: List[str] = field(default_factory=list)
    truncated: bool = False

    @property
    def lookups(self) -> int:
        return len(self.matches) + len(self.unknown)

    def __int__(self) -> int:
        return self.score

    def __str__(self) -> str:
        return str(self.score)


class ScoringPipeline:
    """Score skills strings against a dictionary supplied by the caller."""

    def __init__(
        self,
        dictionary: WeightedDictionary,
        max_input_chars: int = MAX_INPUT_CHARS,
        logger: Optional[StructuredLogger] = None,
    ):
        if max_input_chars < 0:
            raise ValueError(f"max_input_chars must be 0 or more, got {max_input_chars}")
        self.dictionary = dictionary
        self.max_input_chars = max_input_chars
        self.logger = logger

    def score(self, raw_input: str) -> int:
        return self.evaluate(raw_input).score

    def evaluate(self, raw_input: str) -> ScoreResult:
        """
        Score raw_input and keep the per-token breakdown.

        Empty tokens are skipped without a lookup. Unknown tokens add 0.
        Repeated skills are each counted.
        """
        text = truncate_input(raw_input, self.max_input_chars)
        truncated = len(text) < len(raw_input)
        if truncated and self.logger:
            self.logger.record_truncation()
            self.logger.warning(
                "Skills input truncated",
                original_length=len(raw_input),
                limit=self.max_input_chars,
            )

        total = 0
        matches: List[Tuple[str, int]] = []
        unknown: List[str] = []
        for token in split_tokens(text):
            weight = self.dictionary.get(token)
            if weight is not None:
                matches.append((token, weight))
                total += weight
            else:
                unknown.append(token)

        status = ScoreStatus.MATCHED if matches else ScoreStatus.NO_MATCH
        result = ScoreResult(
            score=total,
            status=status,
            matches=matches,
            unknown=unknown,
            truncated=truncated,
        )

        if self.logger:
            self.logger.record_score(status, result.lookups, len(matches), unknown)
            self.logger.debug(
                "Scored skills input",
                status=status,
                score=total,
                lookups=result.lookups,
                matched=len(matches),
            )
        return result


def score_skills(
    raw_input: Optional[str],
    pipeline: Optional[ScoringPipeline] = None,
    logger: Optional[StructuredLogger] = None,
) -> ScoreResult:
    """
    Entry point for callers that may have no skills string at all.

    None means the caller supplied nothing: the result is 0 with status
    NO_INPUT and the dictionary is never consulted. An empty string is
    input, and scores as NO_MATCH.

    The pipeline may be omitted when raw_input is None, so callers need
    not build a dictionary just to report missing input. logger defaults
    to the pipeline's logger.
    """
    if logger is None and pipeline is not None:
        logger = pipeline.logger
    if raw_input is None:
        if logger:
            logger.record_no_input()
            logger.info("No skills input supplied; score defaults to 0")
        return ScoreResult(score=0, status=ScoreStatus.NO_INPUT)
    if pipeline is None:
        raise ValueError("A ScoringPipeline is required to score skills input")
    return pipeline.evaluate(raw_input)
