from __future__ import annotations
from typing import Iterable, Optional
import logging

from licensematch.core.differences import DifferenceDescription
from licensematch.core.errors import UsageError
from licensematch.core.event import TemplateEvent, replay
from licensematch.core.instructions import InstructionTreeBuilder, VariableRule
from licensematch.core.matcher import TemplateMatcher
from licensematch.core.patterns import PatternMatcher
from licensematch.core.tokens import Tokenizer

logger = logging.getLogger(__name__)


class TemplateComparison:
    """
    Receives the events of a parsed license template and checks the compare
    text against them.

    Events are collected into an instruction tree until complete_parsing() is
    called; that call runs the matcher exactly once. matches() and
    get_differences() are only available afterwards.
    """

    def __init__(
        self,
        compare_text: str,
        tokenizer: Optional[Tokenizer] = None,
        pattern_matcher: Optional[PatternMatcher] = None,
    ) -> None:
        self.compare_text = compare_text
        self.tokenizer = tokenizer
        self.pattern_matcher = pattern_matcher
        self._builder = InstructionTreeBuilder()
        self._matcher: Optional[TemplateMatcher] = None
        self._result: Optional[DifferenceDescription] = None

    def literal_text(self, text: str) -> None:
        self._builder.text(text)

    def variable_rule(self, name: str, match: str, example: str = "") -> None:
        self._builder.variable_rule(VariableRule(name=name, match=match, example=example))

    def begin_optional(self) -> None:
        self._builder.begin_optional()

    def end_optional(self) -> None:
        self._builder.end_optional()

    def complete_parsing(self) -> None:
        if self._matcher is not None:
            return
        tree = self._builder.build()
        self._matcher = TemplateMatcher(tree, self.compare_text, self.tokenizer, self.pattern_matcher)
        self._result = self._matcher.run()
        logger.debug("Template comparison complete: matched=%s", self._result.matched)

    @property
    def completed(self) -> bool:
        return self._result is not None

    def _verdict(self) -> DifferenceDescription:
        if self._result is None:
            raise UsageError(
                "Matches was called prior to completing the parsing. "
                "complete_parsing() must be called before matches() or get_differences()"
            )
        return self._result

    def matches(self) -> bool:
        return self._verdict().matched

    def get_differences(self) -> DifferenceDescription:
        return self._verdict()


def compare_template(
    events: Iterable[TemplateEvent],
    compare_text: str,
    tokenizer: Optional[Tokenizer] = None,
    pattern_matcher: Optional[PatternMatcher] = None,
) -> TemplateComparison:
    comparison = TemplateComparison(compare_text, tokenizer=tokenizer, pattern_matcher=pattern_matcher)
    replay(events, comparison)
    return comparison
