"""Canonical serializer for Conventional Commit messages.

Format:
    <type>(<scope>)!: <description>

    <body paragraph>

    <body paragraph>

    <Token>: <value>
    BREAKING CHANGE: <description>

CommitMessage keeps BREAKING CHANGE footers behind the others, so footers
are rendered in stored order. Serialization cannot fail for a constructed
model.
"""

from convcommit.grammar import CommitMessage, Footer


def render_header(message: CommitMessage) -> str:
    """Render the header line.

    Args:
        message: The commit message.

    Returns:
        The header, e.g. ``feat(api)!: add endpoint``.
    """
    header = message.type.value
    if message.scope:
        header += f"({message.scope})"
    if message.breaking_marker:
        header += "!"
    return f"{header}: {message.description}"


def render_footer(footer: Footer) -> str:
    """Render a single footer, including any continuation lines."""
    return f"{footer.token}{footer.separator}{footer.value}"


def serialize(message: CommitMessage) -> str:
    """Render a CommitMessage as canonical commit text.

    Args:
        message: The commit message.

    Returns:
        The commit text, without a trailing newline.
    """
    parts = [render_header(message)]

    for paragraph in message.body:
        parts.append("\n".join(paragraph))

    if message.footers:
        parts.append("\n".join(render_footer(f) for f in message.footers))

    return "\n\n".join(parts)
