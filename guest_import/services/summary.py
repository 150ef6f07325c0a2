from __future__ import annotations

from collections.abc import Sequence

from ..models.import_result import FileOutcome, FileStatus

"""SUMMARY line rendering.

Format:
SUMMARY files={n} valid={v} blocked={b} failed={f} guests={g}
subguests={s} errors={e} warnings={w}

guests/subguests count only items of VALID files (what an import would
write); errors/warnings count every file, a read failure counting as one
error.
"""

__all__ = [
    "render_summary_line",
]


def render_summary_line(outcomes: Sequence[FileOutcome]) -> str:
    """Render the SUMMARY line for a run.

    Examples:
        >>> render_summary_line([])
        'SUMMARY files=0 valid=0 blocked=0 failed=0 guests=0 subguests=0 errors=0 warnings=0'
    """
    valid = [o for o in outcomes if o.status is FileStatus.VALID]
    blocked = sum(1 for o in outcomes if o.status is FileStatus.BLOCKED)
    failed = sum(1 for o in outcomes if o.status is FileStatus.FAILED)
    guests = sum(o.result.guest_count for o in valid if o.result is not None)
    subguests = sum(o.result.subguest_count for o in valid if o.result is not None)
    errors = sum(len(o.result.errors) if o.result is not None else 1 for o in outcomes)
    warnings = sum(len(o.result.warnings) for o in outcomes if o.result is not None)
    return (
        f"SUMMARY files={len(outcomes)} "
        f"valid={len(valid)} "
        f"blocked={blocked} "
        f"failed={failed} "
        f"guests={guests} "
        f"subguests={subguests} "
        f"errors={errors} "
        f"warnings={warnings}"
    )
