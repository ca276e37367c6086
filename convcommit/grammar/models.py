"""Data models for the convcommit grammar.

Contains:
- Footer: Pydantic model for a single ``token: value`` footer
- CommitMessage: Pydantic model for a structured Conventional Commit message

Both models are frozen. Every invariant of the grammar is checked when a
model is constructed, so a CommitMessage that exists can always be
serialized and parsed back to an equal value.
"""

from typing import Iterable, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, computed_field, field_validator, model_validator

from convcommit.grammar.constants import (
    BREAKING_TOKEN,
    FOOTER_SEPARATORS,
    FOOTER_TOKEN_PATTERN,
    SCOPE_PATTERN,
    CommitType,
    match_footer,
)


def _has_line_break(text: str) -> bool:
    return "\n" in text or "\r" in text


class Footer(BaseModel):
    """A footer (git trailer) of a commit message.

    Attributes:
        token: Footer token (e.g., "Refs", "Co-Authored-By", "BREAKING CHANGE").
        value: Footer value. Continuation lines are joined with newlines.
        separator: ": " for ``Token: value`` or " " for ``Token #value``.
    """

    model_config = ConfigDict(frozen=True)

    token: str
    value: str = ""
    separator: str = ": "

    @field_validator("token")
    @classmethod
    def token_must_be_valid(cls, v: str) -> str:
        """Ensure token is a word of letters and hyphens or BREAKING CHANGE."""
        if not FOOTER_TOKEN_PATTERN.fullmatch(v):
            raise ValueError(f"Invalid footer token: {v!r}")
        return v

    @field_validator("separator")
    @classmethod
    def separator_must_be_known(cls, v: str) -> str:
        """Ensure separator is one of the two trailer forms."""
        if v not in FOOTER_SEPARATORS:
            raise ValueError(f"Invalid footer separator: {v!r}")
        return v

    @field_validator("value")
    @classmethod
    def continuation_lines_must_be_valid(cls, v: str) -> str:
        """Ensure continuation lines cannot be mistaken for blank lines or new footers."""
        if "\r" in v:
            raise ValueError("Footer value cannot contain carriage returns")
        for line in v.split("\n")[1:]:
            if not line.strip():
                raise ValueError("Footer value cannot contain blank lines")
            if match_footer(line) is not None:
                raise ValueError(f"Footer continuation line looks like a footer: {line!r}")
        return v

    @model_validator(mode="after")
    def trailer_form_needs_hash(self) -> "Footer":
        """Ensure the ``Token #value`` form is only used with a #-prefixed value."""
        if self.separator == " " and not self.value.startswith("#"):
            raise ValueError("Footers without a colon must have a value starting with '#'")
        return self

    @property
    def is_breaking(self) -> bool:
        """Whether this footer declares a breaking change."""
        return self.token == BREAKING_TOKEN

    def as_tuple(self) -> tuple[str, str]:
        """Return the footer as a (token, value) pair."""
        return self.token, self.value


FooterLike = Union[Footer, tuple[str, str], str]


def _coerce_footer(footer: FooterLike) -> Footer:
    if isinstance(footer, Footer):
        return footer
    if isinstance(footer, str):
        matched = match_footer(footer)
        if matched is None:
            raise ValueError(f"Not a footer line: {footer!r}")
        token, separator, value = matched
        return Footer(token=token, value=value, separator=separator)
    token, value = footer
    separator = " " if value.startswith("#") and token != BREAKING_TOKEN else ": "
    return Footer(token=token, value=value, separator=separator)


def _split_paragraphs(text: str) -> list[tuple[str, ...]]:
    paragraphs = []
    current: list[str] = []
    for line in text.replace("\r\n", "\n").split("\n"):
        if line.strip():
            current.append(line)
        elif current:
            paragraphs.append(tuple(current))
            current = []
    if current:
        paragraphs.append(tuple(current))
    return paragraphs


class CommitMessage(BaseModel):
    """A structured Conventional Commit message.

    Attributes:
        type: Commit type (feat, fix, docs, etc.).
        description: Single-line description following ``type(scope): ``.
        scope: Optional scope (api, @scope/pkg, pkg:module).
        body: Paragraphs of the body, each a tuple of lines.
        footers: Footers in input order, BREAKING CHANGE footers last.
        breaking_marker: Whether the header carries ``!`` before the colon.
    """

    model_config = ConfigDict(frozen=True)

    type: CommitType
    description: str
    scope: Optional[str] = None
    body: tuple[tuple[str, ...], ...] = ()
    footers: tuple[Footer, ...] = ()
    breaking_marker: bool = False

    @field_validator("description")
    @classmethod
    def description_must_be_single_line(cls, v: str) -> str:
        """Ensure description is non-empty and has no line breaks."""
        if not v or not v.strip():
            raise ValueError("Description cannot be empty")
        if _has_line_break(v):
            raise ValueError("Description must be a single line")
        return v

    @field_validator("scope")
    @classmethod
    def scope_must_match_syntax(cls, v: Optional[str]) -> Optional[str]:
        """Ensure scope, when present, matches the scope syntax."""
        if v is not None and not SCOPE_PATTERN.fullmatch(v):
            raise ValueError(f"Invalid scope: {v!r}")
        return v

    @field_validator("body")
    @classmethod
    def paragraphs_must_be_well_formed(
        cls, v: tuple[tuple[str, ...], ...]
    ) -> tuple[tuple[str, ...], ...]:
        """Ensure paragraphs are non-empty runs of non-blank lines that read back as body."""
        for paragraph in v:
            if not paragraph:
                raise ValueError("Body paragraphs cannot be empty")
            for line in paragraph:
                if not line.strip():
                    raise ValueError("Body paragraphs cannot contain blank lines")
                if _has_line_break(line):
                    raise ValueError("Body lines cannot contain line breaks")
            if match_footer(paragraph[0]) is not None:
                raise ValueError(f"Body paragraph would be read as a footer: {paragraph[0]!r}")
        return v

    @field_validator("footers")
    @classmethod
    def breaking_footers_last(cls, v: tuple[Footer, ...]) -> tuple[Footer, ...]:
        """Move BREAKING CHANGE footers behind the others, keeping relative order."""
        regular = tuple(f for f in v if not f.is_breaking)
        breaking = tuple(f for f in v if f.is_breaking)
        return regular + breaking

    @computed_field
    @property
    def breaking(self) -> bool:
        """Whether this commit is a breaking change (``!`` marker or BREAKING CHANGE footer)."""
        return self.breaking_marker or any(f.is_breaking for f in self.footers)

    @property
    def breaking_description(self) -> Optional[str]:
        """Reason for the breaking change.

        Returns:
            The first BREAKING CHANGE footer value, the description when only
            the ``!`` marker is present, or None for non-breaking commits.
        """
        for footer in self.footers:
            if footer.is_breaking and footer.value.strip():
                return footer.value.strip()
        if self.breaking:
            return self.description
        return None

    def footer_values(self, token: str) -> list[str]:
        """Get the values of all footers with the given token, in order.

        Args:
            token: Footer token to look up (case-sensitive).

        Returns:
            List of footer values.
        """
        return [f.value for f in self.footers if f.token == token]

    @classmethod
    def build(
        cls,
        type: Union[CommitType, str],
        description: str,
        scope: Optional[str] = None,
        body: Union[str, Sequence[str], None] = None,
        footers: Optional[Iterable[FooterLike]] = None,
        breaking: bool = False,
    ) -> "CommitMessage":
        """Build a CommitMessage from plain structured fields.

        Args:
            type: Commit type, as a CommitType or its string value.
            description: The description line.
            scope: Optional scope; empty strings are treated as no scope.
            body: Free text (paragraphs separated by blank lines) or a list
                of paragraph strings.
            footers: Footers as Footer objects, (token, value) pairs or
                ``"Token: value"`` lines.
            breaking: Set the ``!`` marker in the header.

        Returns:
            A validated CommitMessage.

        Raises:
            pydantic.ValidationError: If any field breaks the grammar.
            ValueError: If a footer string is not a footer line.
        """
        if isinstance(type, str):
            type = type.strip().lower()

        paragraphs: list[tuple[str, ...]] = []
        if isinstance(body, str):
            paragraphs = _split_paragraphs(body)
        elif body:
            for paragraph in body:
                paragraphs.extend(_split_paragraphs(paragraph))

        return cls(
            type=type,
            description=description.strip(),
            scope=scope.strip() if scope and scope.strip() else None,
            body=tuple(paragraphs),
            footers=tuple(_coerce_footer(f) for f in footers or ()),
            breaking_marker=breaking,
        )
