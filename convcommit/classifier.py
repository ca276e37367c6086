"""Commit classification from a change-set summary.

Suggests likely (type, scope) pairs for a set of changed files. Every
matching rule contributes a suggestion; ties are returned to the caller
instead of being resolved here.

Rules:
- tests: all paths are test files -> test
- docs: all paths are documentation files -> docs
- ci: all paths are CI configuration -> ci
- build: all paths are build or dependency manifests -> build
- fallback: nothing above fired and a source file changed -> feat and fix
- scope: all paths share one top-level directory -> scoped copy of every
  suggestion above, at medium confidence
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field

from convcommit.exceptions import ConfigError
from convcommit.grammar import SCOPE_PATTERN, CommitType

logger = structlog.get_logger(__name__)


HIGH_CONFIDENCE = 0.9
CONFIG_CONFIDENCE = 0.8
SCOPE_CONFIDENCE = 0.6
FALLBACK_CONFIDENCE = 0.3

# Directories that are too generic to be a scope; the next segment is used instead
DEFAULT_STOP_WORDS = {
    "src",
    "lib",
    "libs",
    "source",
    "sources",
    "pkg",
    "internal",
    "app",
    "main",
    "tests",
    "test",
    "docs",
    "doc",
}

# Monorepo roots; the package directory below them is the scope
DEFAULT_MONOREPO_ROOTS = [
    "packages",
    "apps",
    "modules",
    "services",
    "plugins",
    "workspaces",
]

# Matched against "/" + path, so a leading "/" anchors a directory or file name
DEFAULT_TEST_PATTERNS = [
    "/test_",
    "_test.",
    ".test.",
    "/tests/",
    "/test/",
    "/spec/",
    "/specs/",
    "/__tests__/",
    ".spec.",
    "_spec.",
    "/conftest.py",
]

DEFAULT_DOC_EXTENSIONS = [".md", ".rst", ".txt", ".adoc", ".asciidoc", ".mdx"]

CI_PREFIXES = (".github/workflows/", ".circleci/", ".buildkite/")
CI_FILES = {".gitlab-ci.yml", ".travis.yml", "Jenkinsfile", "azure-pipelines.yml", "bitbucket-pipelines.yml"}

BUILD_FILES = {
    "package.json", "package-lock.json", "yarn.lock", "pnpm-lock.yaml",
    "pyproject.toml", "poetry.lock", "uv.lock", "setup.py", "setup.cfg",
    "requirements.txt", "requirements-dev.txt", "Pipfile", "Pipfile.lock",
    "Makefile", "CMakeLists.txt", "Cargo.toml", "Cargo.lock",
    "go.mod", "go.sum", "Gemfile", "Gemfile.lock", "pom.xml",
    "build.gradle", "build.gradle.kts", "settings.gradle",
    "Dockerfile", "docker-compose.yml", "docker-compose.yaml",
}


class FileChange(BaseModel):
    """One entry of a change-set summary.

    Attributes:
        path: Path of the changed file, relative to the repository root.
        lines_added: Number of added lines.
        lines_removed: Number of removed lines.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str
    lines_added: int = Field(default=0, ge=0, alias="linesAdded")
    lines_removed: int = Field(default=0, ge=0, alias="linesRemoved")


class Suggestion(BaseModel):
    """A suggested commit classification.

    Attributes:
        type: Suggested commit type.
        scope: Suggested scope, or None.
        confidence: Confidence between 0 and 1.
    """

    model_config = ConfigDict(frozen=True)

    type: CommitType
    scope: Optional[str] = None
    confidence: float = Field(ge=0.0, le=1.0)


@dataclass
class ClassifierConfig:
    """Configuration for the classifier."""

    stop_words: set[str] = field(default_factory=lambda: DEFAULT_STOP_WORDS.copy())
    monorepo_roots: list[str] = field(default_factory=lambda: DEFAULT_MONOREPO_ROOTS.copy())
    test_patterns: list[str] = field(default_factory=lambda: DEFAULT_TEST_PATTERNS.copy())
    doc_extensions: list[str] = field(default_factory=lambda: DEFAULT_DOC_EXTENSIONS.copy())


def normalize_path(path: str) -> str:
    """Normalize a file path for consistent processing.

    Args:
        path: The file path to normalize.

    Returns:
        Normalized path with forward slashes.
    """
    return path.replace("\\", "/").strip("/")


def _basename(path: str) -> str:
    return normalize_path(path).rsplit("/", 1)[-1]


def is_test_file(path: str, patterns: Sequence[str] = DEFAULT_TEST_PATTERNS) -> bool:
    """Check if a file is a test file.

    Args:
        path: The file path.
        patterns: Substrings that mark a test file.

    Returns:
        True if the file is a test file.
    """
    normalized = "/" + normalize_path(path).lower()
    return any(pattern in normalized for pattern in patterns)


def is_build_file(path: str) -> bool:
    """Check if a file is a build or dependency manifest."""
    name = _basename(path)
    return name in BUILD_FILES or name.startswith("Dockerfile")


def is_docs_file(path: str, extensions: Sequence[str] = DEFAULT_DOC_EXTENSIONS) -> bool:
    """Check if a file is documentation, judged by its extension.

    Manifests with a documentation extension (requirements.txt) are not docs.
    """
    if is_build_file(path):
        return False
    name = _basename(path).lower()
    return any(name.endswith(ext) for ext in extensions)


def is_ci_file(path: str) -> bool:
    """Check if a file is CI configuration."""
    normalized = normalize_path(path)
    return normalized.startswith(CI_PREFIXES) or normalized in CI_FILES


def infer_scope(paths: Sequence[str], config: ClassifierConfig) -> Optional[str]:
    """Infer a scope when every path lives under one top-level directory.

    Stop-word directories and monorepo roots descend one level, so
    ``packages/auth/index.ts`` gives ``auth``.

    Args:
        paths: Changed file paths.
        config: Classifier configuration.

    Returns:
        The scope, or None if the paths are spread out or at the root.
    """
    segments = [normalize_path(p).split("/")[:-1] for p in paths]
    if not segments or any(not s for s in segments):
        return None

    depth = 0
    while True:
        names = {s[depth] if len(s) > depth else None for s in segments}
        if len(names) != 1 or None in names:
            return None
        name = names.pop()
        descend = name.lower() in config.stop_words or (depth == 0 and name in config.monorepo_roots)
        if not descend:
            return name if SCOPE_PATTERN.fullmatch(name) else None
        depth += 1


def _type_suggestions(changes: Sequence[FileChange], config: ClassifierConfig) -> list[Suggestion]:
    paths = [c.path for c in changes]
    suggestions = []

    if all(is_test_file(p, config.test_patterns) for p in paths):
        suggestions.append(Suggestion(type=CommitType.TEST, confidence=HIGH_CONFIDENCE))
    if all(is_docs_file(p, config.doc_extensions) for p in paths):
        suggestions.append(Suggestion(type=CommitType.DOCS, confidence=HIGH_CONFIDENCE))
    if all(is_ci_file(p) for p in paths):
        suggestions.append(Suggestion(type=CommitType.CI, confidence=CONFIG_CONFIDENCE))
    if all(is_build_file(p) for p in paths):
        suggestions.append(Suggestion(type=CommitType.BUILD, confidence=CONFIG_CONFIDENCE))

    if suggestions:
        return suggestions

    sources = [
        c for c in changes
        if not (is_test_file(c.path, config.test_patterns) or is_docs_file(c.path, config.doc_extensions)
                or is_ci_file(c.path) or is_build_file(c.path))
    ]
    if not sources:
        return []

    # Both are always offered; mostly-deleted code leans towards a fix
    removed = sum(c.lines_removed for c in sources)
    added = sum(c.lines_added for c in sources)
    order = [CommitType.FIX, CommitType.FEAT] if removed > added else [CommitType.FEAT, CommitType.FIX]
    return [Suggestion(type=t, confidence=FALLBACK_CONFIDENCE) for t in order]


def classify(
    changes: Sequence[Union[FileChange, dict]],
    config: Optional[ClassifierConfig] = None,
) -> list[Suggestion]:
    """Suggest commit types and scopes for a change-set summary.

    Args:
        changes: Changed files as FileChange objects or dicts with
            ``path``, ``linesAdded`` and ``linesRemoved``.
        config: Classifier configuration.

    Returns:
        Suggestions ranked by confidence (highest first, ties in rule
        order). Empty when no rule fires.
    """
    if config is None:
        config = ClassifierConfig()
    if not changes:
        return []

    entries = [c if isinstance(c, FileChange) else FileChange.model_validate(c) for c in changes]
    suggestions = _type_suggestions(entries, config)

    scope = infer_scope([e.path for e in entries], config)
    if scope is not None:
        suggestions += [
            Suggestion(type=s.type, scope=scope, confidence=SCOPE_CONFIDENCE)
            for s in suggestions
        ]

    ranked = sorted(suggestions, key=lambda s: s.confidence, reverse=True)
    logger.debug(
        "Classified change set",
        files=len(entries),
        scope=scope,
        suggestions=[s.type.value for s in ranked],
    )
    return ranked


def _string_list(section: dict, key: str, default: Sequence[str]) -> list[str]:
    value = section.get(key)
    if value is None:
        return list(default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"classifier.{key} must be a list of strings")
    return value


def load_classifier_config_from_dict(config_dict: dict) -> ClassifierConfig:
    """Load ClassifierConfig from a configuration dictionary.

    Args:
        config_dict: Dictionary with a ``classifier`` section.

    Returns:
        ClassifierConfig instance.

    Raises:
        ConfigError: If the section is not a mapping or a setting is not a
            list of strings.
    """
    section = config_dict.get("classifier")
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ConfigError("'classifier' must be a mapping of setting name to value")

    for key in section:
        if key not in ("stop_words", "monorepo_roots", "test_patterns", "doc_extensions"):
            logger.debug("Ignoring unknown classifier setting", setting=key)

    return ClassifierConfig(
        stop_words={w.lower() for w in _string_list(section, "stop_words", sorted(DEFAULT_STOP_WORDS))},
        monorepo_roots=[normalize_path(r) for r in _string_list(section, "monorepo_roots", DEFAULT_MONOREPO_ROOTS)],
        test_patterns=_string_list(section, "test_patterns", DEFAULT_TEST_PATTERNS),
        doc_extensions=_string_list(section, "doc_extensions", DEFAULT_DOC_EXTENSIONS),
    )


def classifier_config_to_dict(config: ClassifierConfig) -> dict:
    """Convert ClassifierConfig to a dictionary for saving.

    Args:
        config: ClassifierConfig instance.

    Returns:
        Dictionary representation.
    """
    return {
        "classifier": {
            "stop_words": sorted(config.stop_words),
            "monorepo_roots": config.monorepo_roots,
            "test_patterns": config.test_patterns,
            "doc_extensions": config.doc_extensions,
        }
    }
