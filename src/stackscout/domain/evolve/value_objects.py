"""Value objects for the Evolve bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

NONE_SENTINEL = "(none)"
NONE_NEW_SENTINEL = "(none new)"
NO_FRAMEWORK = "none"
COMMAND_SUFFIX = "Command"
CLAUDE_MD = "CLAUDE.md"


class DeltaField(StrEnum):
    """Profile facets the differ compares, by their serialized name."""

    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    DETECTED_PATTERNS = "detectedPatterns"
    FRAMEWORK = "framework"
    NEGATIVE_CONSTRAINTS = "negativeConstraints"
    LINT_COMMAND = "lintCommand"
    TEST_COMMAND = "testCommand"
    BUILD_COMMAND = "buildCommand"
    DEV_COMMAND = "devCommand"

    @property
    def is_command(self) -> bool:
        return self.value.endswith(COMMAND_SUFFIX)


class ProposalType(StrEnum):
    """Kinds of configuration change the proposer can suggest."""

    ADD_AGENT = "add-agent"
    REMOVE_AGENT = "remove-agent"
    ADD_SKILL = "add-skill"
    REMOVE_SKILL = "remove-skill"
    UPDATE_CLAUDE_MD = "update-claude-md"


class EvolveStatus(StrEnum):
    """Outcome of an evolve run."""

    NO_BASELINE = "no-baseline"
    UP_TO_DATE = "up-to-date"
    CHANGES_DETECTED = "changes-detected"


@dataclass(frozen=True)
class EvolveDelta:
    """One changed facet between two analyses, stringified for display.

    ``(none)`` / ``(none new)`` / ``none`` are sentinels for absence.
    """

    field: DeltaField
    label: str
    before: str
    after: str


@dataclass(frozen=True)
class EvolveProposal:
    """A proposed configuration change."""

    type: ProposalType
    name: str
    reason: str
