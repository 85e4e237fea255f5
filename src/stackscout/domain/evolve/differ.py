"""Field-level diff between two CodebaseAnalysis snapshots."""

from __future__ import annotations

from collections.abc import Iterable

from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.evolve.value_objects import (
    COMMAND_SUFFIX,
    NO_FRAMEWORK,
    NONE_NEW_SENTINEL,
    NONE_SENTINEL,
    DeltaField,
    EvolveDelta,
)

_COMMAND_FIELDS: tuple[tuple[DeltaField, str], ...] = (
    (DeltaField.LINT_COMMAND, "lint_command"),
    (DeltaField.TEST_COMMAND, "test_command"),
    (DeltaField.BUILD_COMMAND, "build_command"),
    (DeltaField.DEV_COMMAND, "dev_command"),
)


def diff_analyses(
    before: CodebaseAnalysis,
    after: CodebaseAnalysis,
) -> list[EvolveDelta]:
    """Return one delta per changed facet; unchanged facets emit nothing."""
    deltas: list[EvolveDelta] = []

    deltas.extend(
        _set_delta(
            DeltaField.DEPENDENCIES,
            "Dependencies",
            (d.name for d in before.dependencies),
            (d.name for d in after.dependencies),
        )
    )
    deltas.extend(
        _set_delta(
            DeltaField.DEV_DEPENDENCIES,
            "Dev Dependencies",
            (d.name for d in before.dev_dependencies),
            (d.name for d in after.dev_dependencies),
        )
    )

    # Only newly detected patterns matter; a vanished directory proposes nothing.
    before_patterns = {p.type.value for p in before.detected_patterns}
    new_patterns = sorted(
        {p.type.value for p in after.detected_patterns} - before_patterns
    )
    if new_patterns:
        deltas.append(
            EvolveDelta(
                field=DeltaField.DETECTED_PATTERNS,
                label="Detected Patterns",
                before=NONE_NEW_SENTINEL,
                after=", ".join(new_patterns),
            )
        )

    if before.framework != after.framework:
        deltas.append(
            EvolveDelta(
                field=DeltaField.FRAMEWORK,
                label="Framework",
                before=str(before.framework or NO_FRAMEWORK),
                after=str(after.framework or NO_FRAMEWORK),
            )
        )

    # Rule text contains ", " so constraints are joined with "; ".
    deltas.extend(
        _set_delta(
            DeltaField.NEGATIVE_CONSTRAINTS,
            "Constraints",
            (c.rule for c in before.negative_constraints),
            (c.rule for c in after.negative_constraints),
            separator="; ",
        )
    )

    for delta_field, attribute in _COMMAND_FIELDS:
        old: str | None = getattr(before, attribute)
        new: str | None = getattr(after, attribute)
        if old != new:
            deltas.append(
                EvolveDelta(
                    field=delta_field,
                    label=delta_field.value.replace(COMMAND_SUFFIX, " command"),
                    before=old or NONE_SENTINEL,
                    after=new or NONE_SENTINEL,
                )
            )

    return deltas


def _set_delta(
    field: DeltaField,
    label: str,
    before: Iterable[str],
    after: Iterable[str],
    separator: str = ", ",
) -> list[EvolveDelta]:
    old, new = set(before), set(after)
    added = sorted(new - old)
    removed = sorted(old - new)
    if not added and not removed:
        return []
    return [
        EvolveDelta(
            field=field,
            label=label,
            before=separator.join(removed) if removed else NONE_SENTINEL,
            after=separator.join(added) if added else NONE_SENTINEL,
        )
    ]
