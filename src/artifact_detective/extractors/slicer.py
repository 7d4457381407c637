"""
Two-phase scan shared by every log extractor.

1. Raw output: the text is already the tool's own output file, so it is
   returned whole.
2. CI log: find the tool's banner, keep the lines that look like its
   output, stop at its summary line or at the next CI marker.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from artifact_detective.extractors.patterns import CI_MARKER


@dataclass(frozen=True)
class LogSliceRule:
    """How to find one tool's output.

    start: banner opening the output; the banner line itself is dropped.
    line: lines to keep once inside. None keeps every non-empty line.
    end: summary line closing the output; it is kept.
    raw: signature of the tool's own output. None disables the raw path.
    continuation: keep non-empty, non-matching lines that follow a kept
        line (multi-line messages).
    """
    start: re.Pattern
    line: re.Pattern | None = None
    end: re.Pattern | None = None
    raw: re.Pattern | None = None
    continuation: bool = False

    @property
    def signature(self) -> re.Pattern | None:
        return self.line or self.raw


def is_raw_output(lines: list[str], rule: LogSliceRule) -> bool:
    """True when ``lines`` are the tool's output with no CI log around them.

    That means: at least one raw-signature line, no CI markers, and no
    banner before the first signature line.
    """
    if rule.raw is None:
        return False
    seen_signature = False
    for line in lines:
        if CI_MARKER.match(line):
            return False
        if rule.raw.search(line):
            seen_signature = True
        elif not seen_signature and rule.start.search(line):
            return False
    return seen_signature


def _holds_signature(captured: list[tuple[int, str]], rule: LogSliceRule) -> bool:
    signature = rule.signature
    if signature is None:
        return bool(captured)
    return any(signature.search(line) for _, line in captured)


def slice_log(lines: list[str], rule: LogSliceRule) -> list[tuple[int, str]]:
    """Return ``(index, line)`` pairs of the tool output found in ``lines``.

    A CI marker closes the slice once it holds a signature line. Before
    that, whatever was kept is step preamble (the command echo and
    ``shell:`` lines GitHub groups under the step header) and is dropped.
    """
    captured: list[tuple[int, str]] = []
    in_output = False

    for idx, line in enumerate(lines):
        wanted = in_output and rule.line is not None and bool(rule.line.search(line))

        if not wanted and rule.start.search(line):
            in_output = True
            continue
        if not in_output:
            continue

        if CI_MARKER.match(line):
            if _holds_signature(captured, rule):
                break
            captured.clear()
            continue

        if rule.end is not None and rule.end.search(line):
            captured.append((idx, line))
            break

        if wanted or (rule.line is None and line.strip()):
            captured.append((idx, line))
        elif rule.continuation and captured and line.strip():
            captured.append((idx, line))

    return captured


def slice_between(
    lines: list[str],
    start: re.Pattern,
    end: re.Pattern | None = None,
    include_end: bool = True,
) -> list[tuple[int, str]]:
    """Keep every line after the first ``start`` match up to ``end``.

    Used for user-configured markers, where nothing is known about the
    tool's line shapes. Without ``end`` the slice runs to the end of the log.
    """
    captured: list[tuple[int, str]] = []
    in_output = False
    for idx, line in enumerate(lines):
        if not in_output:
            in_output = bool(start.search(line))
            continue
        if end is not None and end.search(line):
            if include_end:
                captured.append((idx, line))
            break
        captured.append((idx, line))

    # Trim blank edges
    while captured and not captured[0][1].strip():
        captured.pop(0)
    while captured and not captured[-1][1].strip():
        captured.pop()
    return captured
