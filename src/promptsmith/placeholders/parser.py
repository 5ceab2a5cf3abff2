"""Scanner for extracting placeholder tokens from templates."""

import logging

from .models import Directive, Segment, Token
from .syntax import (
    CHAIN_SEPARATOR_PATTERN,
    SEGMENT_DIRECTIVE_PATTERN,
    TOKEN_PATTERN,
    DEFAULT_KEY_TABLE,
    KeyTable,
)

logger = logging.getLogger(__name__)


class TokenScanner:
    """Scan templates into immutable token records."""

    def __init__(self, key_table: KeyTable = DEFAULT_KEY_TABLE):
        self.key_table = key_table

    def scan(self, text: str) -> list[Token]:
        """
        Find every placeholder token in a template.

        Args:
            text: The template to scan

        Returns:
            Non-overlapping tokens in left-to-right order
        """
        tokens = []
        if not text:
            return tokens

        for match in TOKEN_PATTERN.finditer(text):
            directive = Directive(match.group(1)) if match.group(1) else None
            body = match.group(2)
            tokens.append(
                Token(
                    syntax=match.group(0),
                    directive=directive,
                    body=body,
                    segments=self._build_segments(directive, body),
                    start_pos=match.start(),
                    end_pos=match.end(),
                )
            )

        logger.debug(f"Scanned {len(tokens)} placeholder token(s)")
        return tokens

    def split_chain(self, body: str) -> list[str]:
        """
        Split a token body into trimmed fallback segments.

        "|" separates segments; "\\|" is a literal pipe.
        """
        return [
            part.replace("\\|", "|").strip() for part in CHAIN_SEPARATOR_PATTERN.split(body)
        ]

    def parse_segment(self, segment: str) -> Segment:
        """
        Parse one chain element.

        Args:
            segment: Trimmed segment text (e.g., "option:tone" or "input")

        Returns:
            Segment with its directive split off, if any
        """
        match = SEGMENT_DIRECTIVE_PATTERN.match(segment)
        if match:
            return Segment(directive=Directive(match.group(1)), reference=match.group(2).strip())
        return Segment(reference=segment)

    def is_recursive(self, token: Token) -> bool:
        """
        Check whether a token belongs to the recursive resolution phase.

        Tokens without a directive whose first segment is not a standard
        key or alias are property references that may expand into further
        tokens. Everything else is resolved exactly once.
        """
        if token.directive is not None:
            return False
        first = token.segments[0] if token.segments else None
        if first is None or first.directive is not None:
            return True
        return not self.key_table.is_standard(first.reference)

    def _build_segments(self, directive, body: str) -> list[Segment]:
        parts = self.split_chain(body)
        segments = [self.parse_segment(part) for part in parts]
        if directive is not None:
            # The token's directive qualifies the first segment only
            segments[0] = Segment(directive=directive, reference=parts[0])
        return segments
