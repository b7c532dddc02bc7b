"""
Alignment of a frozen instruction tree against tokenized compare text.

The matcher walks the top level instructions once, in document order, and
stops at the first divergence. All scan state lives in an immutable MatchState;
speculative comparisons (optional blocks, searching for the literal that ends a
variable span) are pure functions of a start position, so a failed attempt is
discarded simply by keeping the previous state.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple
import logging

from licensematch.core.differences import (
    NO_DIFFERENCE,
    DifferenceDescription,
    LineColumn,
    end_of_text_location,
    format_difference_message,
)
from licensematch.core.instructions import InstructionTree, VariableRule, TEXT, OPTIONAL
from licensematch.core.patterns import PatternMatcher, RegexPatternMatcher
from licensematch.core.tokens import Tokenizer, Tokens, default_tokenizer, locate_original_text, token_at, tokenize

logger = logging.getLogger(__name__)

MSG_NORMAL_TEXT = "Difference found in normal text"
MSG_END_OF_TEXT = "End of compare text encountered before the end of the license template"
MSG_UNSUPPORTED = "Unsupported nested optional and var rules within an optional block"
MSG_TRAILING_TEXT = "Additional text found after the end of the license template"


@dataclass(frozen=True)
class MatchState:
    position: int = 0
    diverged: bool = False
    message: str = NO_DIFFERENCE
    locations: Tuple[LineColumn, ...] = ()
    # literal text rewritten by the fused-token repair, as (instruction index, text)
    overrides: Tuple[Tuple[int, str], ...] = ()


class TemplateMatcher:
    def __init__(
        self,
        tree: InstructionTree,
        compare_text: str,
        tokenizer: Tokenizer | None = None,
        pattern_matcher: PatternMatcher | None = None,
    ) -> None:
        self.tree = tree
        self.tokenizer = tokenizer or default_tokenizer()
        self.pattern_matcher = pattern_matcher or RegexPatternMatcher()
        self.compare_text = self.tokenizer.normalize(compare_text)
        self.compare_tokens, self.token_locations = tokenize(self.compare_text)
        self._result: Optional[DifferenceDescription] = None

    @property
    def finished(self) -> bool:
        return self._result is not None

    def run(self) -> DifferenceDescription:
        if self._result is not None:
            return self._result
        roots = self.tree.roots
        state = MatchState()
        blocked = self._first_unsupported_block()
        if blocked is not None:
            logger.debug("Optional block %d holds variable or optional rules", blocked)
            state = replace(state, diverged=True, message=MSG_UNSUPPORTED)
        next_i = 0
        while next_i < len(roots) and not state.diverged:
            idx = roots[next_i]
            next_i += 1
            node = self.tree.node(idx)
            if node.kind == TEXT:
                state, next_i = self._process_normal_text(idx, next_i, state)
            elif node.kind == OPTIONAL:
                state = self._process_optional_text(idx, state)
            elif node.rule is not None:
                state = self._process_variable_rule(node.rule, next_i, state)
        if not state.diverged:
            state = self._check_remaining(state)
        logger.debug("Comparison finished: diverged=%s message=%r", state.diverged, state.message)
        self._result = DifferenceDescription(state.diverged, state.message, list(state.locations))
        return self._result

    # -- token level comparison -------------------------------------------

    def _text_of(self, idx: int, state: MatchState) -> str:
        for overridden, text in state.overrides:
            if overridden == idx:
                return text
        return self.tree.node(idx).text or ""

    def _align(self, text_tokens: Tokens, start: int, trailing_skips: bool = True) -> Tuple[bool, int]:
        """
        Walk text_tokens against the compare tokens from `start`.

        With trailing_skips, a literal whose remaining tokens are all skippable
        matches even though the compare token at that point differs.

        Returns (equivalent, position) where position is the compare index just
        past the matched tokens, or the index of the offending token on failure.
        """
        compare = self.compare_tokens
        n = len(compare)
        skip = self.tokenizer.can_skip
        same = self.tokenizer.tokens_equivalent
        t, c = 0, start
        while t < len(text_tokens):
            if c >= n:
                while t < len(text_tokens) and skip(text_tokens[t]):
                    t += 1
                return t >= len(text_tokens), n
            if same(text_tokens[t], compare[c]):
                t += 1
                c += 1
                continue
            while c < n and skip(compare[c]):
                c += 1
            while t < len(text_tokens) and skip(text_tokens[t]):
                t += 1
            if t >= len(text_tokens) and (trailing_skips or c >= n):
                return True, c
            if not same(token_at(compare, c), token_at(text_tokens, t)):
                return False, c
            t += 1
            c += 1
        return True, c

    def attempt(self, text_tokens: Tokens, start: int, trailing_skips: bool = True) -> Optional[int]:
        """Speculative comparison: the position after a match, or None."""
        ok, position = self._align(text_tokens, start, trailing_skips)
        return position if ok else None

    def _diverge(self, state: MatchState, msg: str, position: int) -> MatchState:
        if position < len(self.compare_tokens):
            location = self.token_locations[position]
        else:
            location = end_of_text_location(self.token_locations)
        message = format_difference_message(msg, location, token_at(self.compare_tokens, position))
        logger.debug("Divergence: %s", message)
        return replace(
            state,
            position=position,
            diverged=True,
            message=message,
            locations=state.locations + (location,),
        )

    # -- instructions -------------------------------------------------------

    def _process_normal_text(self, idx: int, next_i: int, state: MatchState) -> Tuple[MatchState, int]:
        text_tokens, _ = self.tokenizer.tokenize(self._text_of(idx, state))
        ok, position = self._align(text_tokens, state.position)
        if ok:
            return replace(state, position=position), next_i
        repaired = self._repair_fused_optional(text_tokens, position, next_i, state)
        if repaired is not None:
            logger.debug("Literal %d matched by merging the following optional text into one token", idx)
            return repaired
        if position >= len(self.compare_tokens):
            return self._diverge(state, MSG_END_OF_TEXT, position), next_i
        return self._diverge(state, MSG_NORMAL_TEXT, position), next_i

    def _repair_fused_optional(
        self, text_tokens: Tokens, position: int, next_i: int, state: MatchState
    ) -> Optional[Tuple[MatchState, int]]:
        """
        Handle optional text shorter than a token, e.g. template `license<<opt s>>`
        against the single compare token `licenses`.

        Only applies when the instruction right after the failing literal is an
        optional block holding exactly one literal. Returns the state past the fused
        token together with the index of the next instruction to process (past the
        optional block), or None.
        """
        pending = token_at(self.compare_tokens, position)
        roots = self.tree.roots
        if len(text_tokens) <= 1 or pending is None or next_i >= len(roots):
            return None
        opt = self.tree.node(roots[next_i])
        if opt.kind != OPTIONAL or len(opt.children) != 1:
            return None
        child = self.tree.node(opt.children[0])
        if child.kind != TEXT or child.text is None:
            return None
        optional_text = child.text.strip()
        token_with_option = text_tokens[-1] + optional_text
        if pending == token_with_option:
            return replace(state, position=position + 1), next_i + 1

        # the literal after the optional may be fused into the same token as well
        if next_i + 1 >= len(roots) or self.tree.node(roots[next_i + 1]).kind != TEXT:
            return None
        follow_idx = roots[next_i + 1]
        follow_text = self.tokenizer.normalize(self._text_of(follow_idx, state))
        follow_tokens, follow_locations = tokenize(follow_text)
        first = token_at(follow_tokens, 0)
        with_option = token_with_option
        without_option = text_tokens[-1]
        if first is not None:
            with_option += first.strip()
            without_option += first.strip()
        if pending != without_option and pending != with_option:
            return None
        remainder = _drop_first_token(follow_text, follow_locations)
        repaired = replace(
            state,
            position=position + 1,
            overrides=state.overrides + ((follow_idx, remainder),),
        )
        return repaired, next_i + 1

    def _next_literal(self, next_i: int, state: MatchState) -> Optional[str]:
        roots = self.tree.roots
        for i in range(next_i, len(roots)):
            if self.tree.node(roots[i]).kind == TEXT:
                return self._text_of(roots[i], state)
        return None

    def find_next_matching_start(self, text_tokens: Tokens, start: int) -> Optional[int]:
        """
        First compare index at or after `start` where text_tokens align.
        The search is bounded by the end of the compare tokens.
        """
        n = len(self.compare_tokens)
        candidate = start
        while candidate <= n:
            if self.attempt(text_tokens, candidate, trailing_skips=False) is not None:
                return candidate
            candidate += 1
        return None

    def _process_variable_rule(self, rule: VariableRule, next_i: int, state: MatchState) -> MatchState:
        following = self._next_literal(next_i, state)
        if following is None:
            boundary = len(self.compare_tokens)
        else:
            text_tokens, _ = self.tokenizer.tokenize(following)
            found = self.find_next_matching_start(text_tokens, state.position)
            if found is None:
                return self._diverge(
                    state,
                    f"Unable to find the text following a variable template rule '{following}'",
                    state.position,
                )
            boundary = found
        span = locate_original_text(self.compare_text, state.position, boundary - 1, self.token_locations)
        end = self.pattern_matcher.match_prefix(rule.match, span)
        if end is None:
            return self._diverge(
                state, f"Variable text rule {rule.name} did not match the compare text", state.position
            )
        consumed = self._num_tokens_matched(span, end)
        logger.debug("Variable rule %s matched %r (%d tokens)", rule.name, span[:end], consumed)
        return replace(state, position=state.position + consumed)

    def _num_tokens_matched(self, text: str, end: int) -> int:
        if not text.strip() or end == 0:
            return 0
        return len(tokenize(text[:end])[0])

    def _first_unsupported_block(self) -> Optional[int]:
        """Index of the first optional block containing variable or optional rules."""
        for idx in self.tree.roots:
            if self.tree.node(idx).kind == OPTIONAL and self.tree.node(idx).children and not self.tree.only_text(idx):
                return idx
        return None

    def _process_optional_text(self, idx: int, state: MatchState) -> MatchState:
        if not self.tree.node(idx).children:
            return state
        text_tokens, _ = self.tokenizer.tokenize(self.tree.to_text(idx))
        position = self.attempt(text_tokens, state.position)
        if position is None:
            logger.debug("Optional block %d not present in compare text", idx)
            return state
        return replace(state, position=position)

    def _check_remaining(self, state: MatchState) -> MatchState:
        position = state.position
        n = len(self.compare_tokens)
        while position < n and self.tokenizer.can_skip(self.compare_tokens[position]):
            position += 1
        if position < n:
            return self._diverge(state, MSG_TRAILING_TEXT, position)
        return replace(state, position=position)


def _drop_first_token(text: str, locations: List[LineColumn]) -> str:
    """Text of a normalized literal starting at its second token."""
    if len(locations) < 2:
        return ""
    second = locations[1]
    if second.line > 1:
        quote = text.find('"')
        if quote >= 0:
            return text[quote:]
    lines = text.split("\n")
    offset = sum(len(line) + 1 for line in lines[: second.line - 1]) + second.column
    return text[offset:]
