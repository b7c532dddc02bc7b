from .differences import LineColumn, DifferenceDescription
from .errors import LicenseMatchError, UsageError, InvalidPatternError, TemplateFormatError
from .event import TemplateEvent, TemplateEventHandler, replay
from .tokens import Tokenizer, normalize_text, tokenize, can_skip, tokens_equivalent, locate_original_text
from .instructions import Instruction, InstructionTree, InstructionTreeBuilder, VariableRule
from .patterns import PatternMatcher, RegexPatternMatcher
from .matcher import MatchState, TemplateMatcher
from .compare import TemplateComparison, compare_template

__all__ = [
    "LineColumn",
    "DifferenceDescription",
    "LicenseMatchError",
    "UsageError",
    "InvalidPatternError",
    "TemplateFormatError",
    "TemplateEvent",
    "TemplateEventHandler",
    "replay",
    "Tokenizer",
    "normalize_text",
    "tokenize",
    "can_skip",
    "tokens_equivalent",
    "locate_original_text",
    "Instruction",
    "InstructionTree",
    "InstructionTreeBuilder",
    "VariableRule",
    "PatternMatcher",
    "RegexPatternMatcher",
    "MatchState",
    "TemplateMatcher",
    "TemplateComparison",
    "compare_template",
]
