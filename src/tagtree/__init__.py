"""
tagtree — HTML-like markup tokenizer, tree builder and linter

A small hand-written engine: a single-cursor lexer, a stack-based parser
with configurable closing-tag reconciliation, and a detector that runs
independent heuristic checks and reports findings instead of raising.

Quick Start:
    >>> from tagtree import detect, parse, tokenize
    >>> root = parse(tokenize("<div>hi</div>"))
    >>> root.children[0].tag_name
    'div'
    >>> "Unclosed tag: <div>" in detect("<div>")
    True

Strict matching:
    >>> from tagtree import ReconcileMode, parse_markup
    >>> parse_markup("<div><span></div>", mode=ReconcileMode.STRICT)
    Traceback (most recent call last):
    ...
    tagtree.errors.ParseError: Mismatched closing tag: </div> (expected </span>)

Installation:
    pip install tagtree              # zero runtime dependencies
"""

from tagtree.checks import (
    DEFAULT_CHECKS,
    CheckContext,
    CheckRegistry,
    CheckRegistryBuilder,
    Diagnostic,
    NestingRules,
    check,
)
from tagtree.config import (
    ParseConfig,
    ReconcileMode,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from tagtree.detector import Detector, detect
from tagtree.errors import ParseError, SerializationError, TagtreeError, TreeError
from tagtree.lexer import Lexer, tokenize
from tagtree.nodes import Node
from tagtree.parser import ParseResult, Parser, parse, parse_markup, try_parse
from tagtree.renderers import render_levels, render_tree
from tagtree.serialization import from_dict, from_json, to_dict, to_json
from tagtree.tags import VALID_TAGS, VOID_ELEMENTS
from tagtree.tokens import Token, TokenType
from tagtree.visitor import BaseVisitor

__version__ = "0.1.0"

__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Main API
    "tokenize",
    "parse",
    "parse_markup",
    "try_parse",
    "detect",
    # Lexer / tokens
    "Lexer",
    "Token",
    "TokenType",
    # Parser / tree
    "Parser",
    "ParseResult",
    "Node",
    "BaseVisitor",
    "VOID_ELEMENTS",
    "VALID_TAGS",
    # Detector
    "Detector",
    "Diagnostic",
    "CheckContext",
    "CheckRegistry",
    "CheckRegistryBuilder",
    "DEFAULT_CHECKS",
    "NestingRules",
    "check",
    # Configuration
    "ParseConfig",
    "ReconcileMode",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Errors
    "TagtreeError",
    "ParseError",
    "TreeError",
    "SerializationError",
    # Output
    "render_tree",
    "render_levels",
    "to_dict",
    "to_json",
    "from_dict",
    "from_json",
]
